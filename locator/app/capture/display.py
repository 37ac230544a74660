"""Text rendering of captures and stored locations."""

from locator.app.schemas import LocationPayload, LocationRecord

from .client import CaptureResult, CaptureState

CITY_PLACEHOLDER = 'Cidade não disponível'
COUNTRY_PLACEHOLDER = 'País não disponível'
ADDRESS_PLACEHOLDER = 'Endereço não disponível'
PLACE_PLACEHOLDER = 'Nome do lugar não disponível'
LATITUDE_PLACEHOLDER = 'Latitude não disponível'
LONGITUDE_PLACEHOLDER = 'Longitude não disponível'
EMPTY_HISTORY = 'Sem localizações salvas ainda.'
REQUESTING_MESSAGE = 'Obtendo localização...'


def _coordinate(value: float | None, placeholder: str) -> str:
    return f'{value:.6f}°' if value is not None else placeholder


def describe_record(record: LocationPayload) -> list[str]:
    """Return display lines for one location, with placeholders for gaps."""
    lines = [
        f'{record.city or CITY_PLACEHOLDER}, {record.country or COUNTRY_PLACEHOLDER}',
        record.address or ADDRESS_PLACEHOLDER,
        record.place_name or PLACE_PLACEHOLDER,
        f'{_coordinate(record.latitude, LATITUDE_PLACEHOLDER)}, '
        f'{_coordinate(record.longitude, LONGITUDE_PLACEHOLDER)}',
    ]
    if isinstance(record, LocationRecord):
        lines.append(record.timestamp.strftime('%d/%m/%Y %H:%M:%S'))
    return lines


def describe_result(result: CaptureResult) -> list[str]:
    """Return display lines for the outcome of a capture attempt."""
    if result.state is CaptureState.FAILED:
        return [result.error or '']
    if result.record is None:
        return [REQUESTING_MESSAGE] if result.state is CaptureState.REQUESTING else []
    return describe_record(result.record)


def describe_history(records: list[LocationPayload]) -> list[str]:
    """Return display lines for a list of stored locations."""
    if not records:
        return [EMPTY_HISTORY]
    lines: list[str] = []
    for index, record in enumerate(records):
        if index:
            lines.append('')
        lines.extend(describe_record(record))
    return lines
