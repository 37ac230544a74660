"""Table model for persisted visitor locations."""

import datetime
from datetime import UTC

from sqlmodel import Field, SQLModel


class StoredLocation(SQLModel, table=True):
    """One captured location. Rows are append-only and never updated."""

    __tablename__ = 'locations'  # type: ignore[misc]

    id: int | None = Field(default=None, primary_key=True)
    latitude: float | None = Field(default=None)
    longitude: float | None = Field(default=None)
    country: str | None = Field(default=None)
    city: str | None = Field(default=None)
    address: str | None = Field(default=None)
    place_name: str | None = Field(default=None)
    device_info: str | None = Field(default=None)
    timestamp: datetime.datetime = Field(
        default_factory=lambda: datetime.datetime.now(UTC)
    )
