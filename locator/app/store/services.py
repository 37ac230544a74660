"""Services for the location store: create, list and clear."""

import logging

import sqlalchemy
import sqlalchemy.exc
from sqlmodel import Session, select

from locator.app.schemas import LocationPayload, LocationRecord

from .models import StoredLocation

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """A read or write against the location table failed."""


def create_location(session: Session, payload: LocationPayload) -> StoredLocation:
    """Insert a new location row stamped with the current server time."""
    loc = StoredLocation(
        latitude=payload.latitude,
        longitude=payload.longitude,
        country=payload.country,
        city=payload.city,
        address=payload.address,
        place_name=payload.place_name,
        device_info=payload.device_info,
    )
    try:
        session.add(loc)
        session.commit()
        session.refresh(loc)
    except sqlalchemy.exc.SQLAlchemyError as e:
        session.rollback()
        logger.exception('Failed to save location')
        raise StorageError('failed to save location') from e
    logger.info(
        'Saved location %s (%s, %s)', loc.id, loc.city or '-', loc.country or '-'
    )
    return loc


def list_locations(session: Session) -> list[StoredLocation]:
    """Return all stored locations, most recent first."""
    statement = select(StoredLocation).order_by(
        StoredLocation.timestamp.desc(),  # type: ignore[attr-defined]
        StoredLocation.id.desc(),  # type: ignore[union-attr]
    )
    try:
        return list(session.exec(statement).all())
    except sqlalchemy.exc.SQLAlchemyError as e:
        logger.exception('Failed to list locations')
        raise StorageError('failed to list locations') from e


def clear_locations(session: Session) -> int:
    """Delete every stored location and return how many rows were removed."""
    try:
        result = session.execute(sqlalchemy.delete(StoredLocation))
        session.commit()
    except sqlalchemy.exc.SQLAlchemyError as e:
        session.rollback()
        logger.exception('Failed to clear locations')
        raise StorageError('failed to clear locations') from e
    removed: int = result.rowcount
    logger.info('Cleared %d stored locations', removed)
    return removed


def to_record(loc: StoredLocation) -> LocationRecord:
    """Convert a table row to the wire representation."""
    return LocationRecord(
        id=loc.id,
        timestamp=loc.timestamp,
        latitude=loc.latitude,
        longitude=loc.longitude,
        country=loc.country,
        city=loc.city,
        address=loc.address,
        place_name=loc.place_name,
        device_info=loc.device_info,
    )
