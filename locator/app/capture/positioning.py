"""Sources of device position fixes."""

import dataclasses
import typing


@dataclasses.dataclass(frozen=True)
class Position:
    latitude: float
    longitude: float


class PositionError(Exception):
    """No position fix could be obtained. Carries a message for the user."""

    user_message = 'Não foi possível obter a localização.'

    def __init__(self, user_message: str | None = None) -> None:
        if user_message is not None:
            self.user_message = user_message
        super().__init__(self.user_message)


class PermissionDenied(PositionError):
    user_message = (
        'Por favor, permita o acesso à localização para ver suas coordenadas.'
    )


class PositioningUnsupported(PositionError):
    user_message = 'Geolocalização não é suportada pelo seu navegador.'


class InvalidPosition(PositionError):
    user_message = 'A localização informada não é válida.'


class Positioner(typing.Protocol):
    """Something that can be asked for the device's current position.

    ``get_position`` may wait indefinitely for the user to grant access or for
    the device to acquire a fix. It raises PositionError subclasses instead
    of returning a partial result.
    """

    async def get_position(self) -> Position: ...


class FixedPositioner:
    """Reports coordinates that were already obtained elsewhere.

    Used for coordinates posted by a browser or given on the command line.
    """

    def __init__(self, latitude: float, longitude: float) -> None:
        self._position = Position(latitude, longitude)

    async def get_position(self) -> Position:
        return self._position


class UnsupportedPositioner:
    """Platform without any positioning capability."""

    async def get_position(self) -> Position:
        raise PositioningUnsupported()


class DeniedPositioner:
    """Platform where the user refused access to the position."""

    async def get_position(self) -> Position:
        raise PermissionDenied()


def check_position(position: Position) -> Position:
    """Raise InvalidPosition unless the fix is within degree bounds."""
    if not (-90 <= position.latitude <= 90 and -180 <= position.longitude <= 180):
        raise InvalidPosition()
    return position
