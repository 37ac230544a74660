"""Capture flow: position fix, enrichment, local display state, submission."""

import dataclasses
import enum
import logging

from locator.app.schemas import LocationPayload, LocationRecord

from .auth import AdminGate
from .backends import BackendError, LocationBackend
from .geocoding import ReverseGeocoder
from .positioning import PositionError, Positioner, check_position

logger = logging.getLogger(__name__)

# Fixed record used by the admin "generate" action.
SAMPLE_LOCATION = LocationPayload(
    latitude=40.7128,
    longitude=-74.0060,
    country='Estados Unidos',
    city='Nova York',
    address='Times Square, Nova York, NY, EUA',
    place_name='Times Square',
)


class CaptureState(enum.Enum):
    IDLE = 'idle'
    REQUESTING = 'requesting'
    SUCCEEDED = 'succeeded'
    FAILED = 'failed'


@dataclasses.dataclass
class CaptureResult:
    state: CaptureState = CaptureState.IDLE
    record: LocationPayload | None = None
    error: str | None = None


class CaptureClient:
    """Drives one visitor's captures and the admin history view.

    Failures are contained where they happen: a failed lookup still produces
    a record with coordinates, and a failed submission still leaves the
    capture on display.
    """

    def __init__(
        self,
        positioner: Positioner,
        geocoder: ReverseGeocoder,
        backend: LocationBackend,
        gate: AdminGate | None = None,
        device_info: str | None = None,
    ) -> None:
        self.positioner = positioner
        self.geocoder = geocoder
        self.backend = backend
        self.gate = gate or AdminGate()
        self.device_info = device_info
        self.result = CaptureResult()
        self.records: list[LocationPayload] = []

    @property
    def state(self) -> CaptureState:
        return self.result.state

    @property
    def is_admin(self) -> bool:
        return self.gate.is_open

    def login(self, username: str, password: str) -> bool:
        return self.gate.login(username, password)

    def logout(self) -> None:
        self.gate.logout()

    async def capture(self) -> CaptureResult:
        """Obtain a fix, describe it, show it and send it to the backend."""
        self.result = CaptureResult(state=CaptureState.REQUESTING)
        try:
            position = check_position(await self.positioner.get_position())
        except PositionError as e:
            logger.info('Position unavailable: %s', e.user_message)
            self.result = CaptureResult(state=CaptureState.FAILED, error=e.user_message)
            return self.result

        enrichment = await self.geocoder.enrich(position.latitude, position.longitude)
        payload = LocationPayload(
            latitude=position.latitude,
            longitude=position.longitude,
            country=enrichment.country if enrichment else None,
            city=enrichment.city if enrichment else None,
            address=enrichment.address if enrichment else None,
            place_name=enrichment.place_name if enrichment else None,
            device_info=self.device_info,
        )
        self.result = CaptureResult(state=CaptureState.SUCCEEDED, record=payload)
        self.records.append(payload)
        await self._submit(payload)
        return self.result

    async def start(self) -> CaptureResult:
        """Capture on arrival, then load the history for an admin."""
        result = await self.capture()
        if self.is_admin:
            await self.refresh()
        return result

    async def _submit(self, payload: LocationPayload) -> bool:
        try:
            await self.backend.save(payload)
        except BackendError as e:
            logger.warning('Could not save location: %s', e)
            return False
        return True

    async def refresh(self) -> list[LocationPayload]:
        """Replace the displayed history with the backend's records."""
        self.gate.require()
        try:
            records: list[LocationRecord] = await self.backend.fetch_all()
        except BackendError as e:
            logger.warning('Could not load saved locations: %s', e)
            return self.records
        self.records = list(records)
        return self.records

    async def clear(self) -> bool:
        """Delete every stored location. Returns False if the backend failed."""
        self.gate.require()
        try:
            await self.backend.clear()
        except BackendError as e:
            logger.warning('Could not clear locations: %s', e)
            return False
        self.records = []
        return True

    async def generate(self) -> bool:
        """Store the sample location and reload the history."""
        self.gate.require()
        saved = await self._submit(SAMPLE_LOCATION)
        await self.refresh()
        return saved
