"""Reverse geocoding of captured coordinates via Nominatim."""

import asyncio
import dataclasses
import logging
from typing import Any

from geopy import geocoders  # pyright: ignore[reportMissingTypeStubs]
from geopy.exc import GeopyError  # pyright: ignore[reportMissingTypeStubs]

import common.settings

logger = logging.getLogger(__name__)

UNKNOWN_PLACE = 'Local desconhecido'


@dataclasses.dataclass(frozen=True)
class Enrichment:
    """Human-readable description of a coordinate pair."""

    country: str | None
    city: str | None
    address: str | None
    place_name: str | None


def parse_reverse_result(raw: dict[str, Any]) -> Enrichment | None:
    """Map a raw Nominatim reverse response to an Enrichment.

    Returns None when the response has no address object.
    """
    address = raw.get('address')
    if not isinstance(address, dict):
        return None
    return Enrichment(
        country=address.get('country') or None,
        city=(
            address.get('city') or address.get('town') or address.get('village')
        )
        or None,
        address=raw.get('display_name') or None,
        place_name=address.get('road') or UNKNOWN_PLACE,
    )


class ReverseGeocoder:
    """Looks up place names for coordinates. Failures yield None, never raise."""

    def __init__(
        self,
        language: str | None = None,
        user_agent: str | None = None,
        geolocator: Any = None,
    ) -> None:
        self.language = language or common.settings.GEOCODER_LANGUAGE
        self.geolocator = geolocator or geocoders.Nominatim(
            user_agent=user_agent or common.settings.GEOCODER_USER_AGENT
        )

    def lookup(self, latitude: float, longitude: float) -> Enrichment | None:
        """Reverse geocode synchronously."""
        try:
            result = self.geolocator.reverse(  # type: ignore[union-attr]
                (latitude, longitude), exactly_one=True, language=self.language
            )
        except (GeopyError, ValueError) as e:
            logger.warning(
                'Reverse geocoding failed for (%s, %s): %s', latitude, longitude, e
            )
            return None
        if not result:
            logger.warning('No reverse geocoding match for (%s, %s)', latitude, longitude)
            return None
        raw = getattr(result, 'raw', None)
        enrichment = parse_reverse_result(raw) if isinstance(raw, dict) else None
        if enrichment is None:
            logger.warning(
                'Malformed reverse geocoding response for (%s, %s)',
                latitude,
                longitude,
            )
        return enrichment

    async def enrich(self, latitude: float, longitude: float) -> Enrichment | None:
        """Reverse geocode without blocking the event loop."""
        return await asyncio.to_thread(self.lookup, latitude, longitude)
