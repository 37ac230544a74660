"""Database configuration for the location store."""

import pathlib
from collections.abc import Generator

import sqlalchemy.pool
import sqlmodel

import common.settings

DATABASE_URL = common.settings.DATABASE_URL

# A bare 'sqlite://' URL is the non-durable in-memory mode; every session must
# share the one connection or each would see its own empty database.
if DATABASE_URL == 'sqlite://':
    engine = sqlmodel.create_engine(
        DATABASE_URL,
        connect_args={'check_same_thread': False},
        poolclass=sqlalchemy.pool.StaticPool,
    )
else:
    engine = sqlmodel.create_engine(
        DATABASE_URL,
        connect_args={'check_same_thread': False},
        echo=False,
    )


def create_db_and_tables() -> None:
    """Create database tables if they don't exist."""
    # Import models to ensure they're registered with SQLModel
    from . import models  # noqa: F401 # pyright: ignore[reportUnusedImport]

    database = engine.url.database
    if database:
        pathlib.Path(database).parent.mkdir(parents=True, exist_ok=True)
    sqlmodel.SQLModel.metadata.create_all(engine)


def get_session() -> Generator[sqlmodel.Session, None, None]:
    """Get a database session."""
    with sqlmodel.Session(engine) as session:
        yield session
