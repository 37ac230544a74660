"""Wire models shared by the capture client and the location store."""

import datetime

import pydantic


class LocationPayload(pydantic.BaseModel):
    """Body of a save request: coordinates plus reverse-geocoded fields.

    Every field is optional so a capture whose enrichment failed (or whose
    coordinates are missing) can still be stored.
    """

    model_config = pydantic.ConfigDict(populate_by_name=True)

    latitude: float | None = pydantic.Field(default=None, ge=-90, le=90)
    longitude: float | None = pydantic.Field(default=None, ge=-180, le=180)
    country: str | None = None
    city: str | None = None
    address: str | None = None
    place_name: str | None = pydantic.Field(default=None, alias='placeName')
    device_info: str | None = pydantic.Field(default=None, alias='deviceInfo')

    def to_wire(self) -> dict[str, object]:
        """Serialize with the camelCase keys used over HTTP."""
        return self.model_dump(mode='json', by_alias=True)


class LocationRecord(LocationPayload):
    """A stored location as returned by the list endpoint."""

    id: int | None = None
    timestamp: datetime.datetime


class MessageResponse(pydantic.BaseModel):
    message: str
