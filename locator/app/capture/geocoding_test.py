"""Unit tests for reverse geocoding."""

import unittest
from unittest.mock import MagicMock

from geopy.exc import GeocoderTimedOut, GeocoderUnavailable

import common.settings
from locator.app.capture import geocoding

TIMES_SQUARE_RAW = {
    'display_name': 'Times Square, Manhattan, Nova York, NY, Estados Unidos',
    'address': {
        'road': 'Times Square',
        'city': 'Nova York',
        'country': 'Estados Unidos',
    },
}


def _geocoder(**reverse_kwargs: object) -> tuple[geocoding.ReverseGeocoder, MagicMock]:
    geolocator = MagicMock()
    geolocator.reverse = MagicMock(**reverse_kwargs)
    return geocoding.ReverseGeocoder(language='pt-BR', geolocator=geolocator), geolocator


def _match(raw: object) -> MagicMock:
    result = MagicMock()
    result.raw = raw
    return result


class TestParseReverseResult(unittest.TestCase):
    """Tests for parse_reverse_result."""

    def test_all_fields_present(self) -> None:
        """Every field maps straight across."""
        enrichment = geocoding.parse_reverse_result(TIMES_SQUARE_RAW)
        self.assertEqual(
            enrichment,
            geocoding.Enrichment(
                country='Estados Unidos',
                city='Nova York',
                address='Times Square, Manhattan, Nova York, NY, Estados Unidos',
                place_name='Times Square',
            ),
        )

    def test_city_falls_back_to_town_then_village(self) -> None:
        """city prefers city, then town, then village."""
        town = geocoding.parse_reverse_result(
            {'address': {'town': 'Paraty', 'village': 'Trindade'}}
        )
        village = geocoding.parse_reverse_result({'address': {'village': 'Trindade'}})
        assert town is not None and village is not None
        self.assertEqual(town.city, 'Paraty')
        self.assertEqual(village.city, 'Trindade')

    def test_missing_road_uses_unknown_place(self) -> None:
        """Without a road the place name is the literal fallback."""
        enrichment = geocoding.parse_reverse_result({'address': {'country': 'Brasil'}})
        assert enrichment is not None
        self.assertEqual(enrichment.place_name, 'Local desconhecido')

    def test_missing_fields_are_none(self) -> None:
        """Fields the provider omits stay None."""
        enrichment = geocoding.parse_reverse_result({'address': {}})
        assert enrichment is not None
        self.assertIsNone(enrichment.country)
        self.assertIsNone(enrichment.city)
        self.assertIsNone(enrichment.address)

    def test_missing_address_object(self) -> None:
        """A response without an address object is malformed."""
        self.assertIsNone(geocoding.parse_reverse_result({'error': 'Unable'}))


class TestReverseGeocoder(unittest.IsolatedAsyncioTestCase):
    """Tests for ReverseGeocoder."""

    def test_lookup_passes_language(self) -> None:
        """The language preference is sent with the coordinates."""
        geocoder, geolocator = _geocoder(return_value=_match(TIMES_SQUARE_RAW))
        geocoder.lookup(40.7128, -74.0060)
        geolocator.reverse.assert_called_once_with(
            (40.7128, -74.0060), exactly_one=True, language='pt-BR'
        )

    def test_lookup_success(self) -> None:
        """A match is turned into an Enrichment."""
        geocoder, _ = _geocoder(return_value=_match(TIMES_SQUARE_RAW))
        enrichment = geocoder.lookup(40.7128, -74.0060)
        assert enrichment is not None
        self.assertEqual(enrichment.city, 'Nova York')

    def test_lookup_no_match(self) -> None:
        """No match yields None."""
        geocoder, _ = _geocoder(return_value=None)
        self.assertIsNone(geocoder.lookup(0.0, 0.0))

    def test_lookup_network_error_logged(self) -> None:
        """Provider errors yield None and are logged, not raised."""
        for error in (GeocoderTimedOut('slow'), GeocoderUnavailable('down')):
            geocoder, _ = _geocoder(side_effect=error)
            with self.assertLogs(geocoding.logger, level='WARNING'):
                self.assertIsNone(geocoder.lookup(1.0, 2.0))

    def test_lookup_rejected_coordinates_logged(self) -> None:
        """geopy's ValueError for unusable coordinates yields None."""
        geocoder, _ = _geocoder(
            side_effect=ValueError('Must be a coordinate pair or Point')
        )
        with self.assertLogs(geocoding.logger, level='WARNING'):
            self.assertIsNone(geocoder.lookup(95.0, 10.0))

    def test_lookup_malformed_response(self) -> None:
        """A response that is not a mapping yields None."""
        geocoder, _ = _geocoder(return_value=_match(['not', 'a', 'dict']))
        with self.assertLogs(geocoding.logger, level='WARNING'):
            self.assertIsNone(geocoder.lookup(1.0, 2.0))

    async def test_enrich_runs_lookup(self) -> None:
        """enrich returns the same result as lookup."""
        geocoder, _ = _geocoder(return_value=_match(TIMES_SQUARE_RAW))
        enrichment = await geocoder.enrich(40.7128, -74.0060)
        assert enrichment is not None
        self.assertEqual(enrichment.place_name, 'Times Square')

    def test_defaults_from_settings(self) -> None:
        """Language defaults to the configured preference."""
        geocoder = geocoding.ReverseGeocoder(geolocator=MagicMock())
        self.assertEqual(geocoder.language, common.settings.GEOCODER_LANGUAGE)


if __name__ == '__main__':
    unittest.main()
