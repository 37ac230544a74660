"""Visitor locator service: location store API and admin history page."""

import contextlib
from collections.abc import AsyncGenerator

import fastapi

import common.app
from locator.app.store import database as store_db
from locator.app.store import routes as store_routes


@contextlib.asynccontextmanager
async def lifespan(app: fastapi.FastAPI) -> AsyncGenerator[None, None]:
    """Initialize the database on startup."""
    store_db.create_db_and_tables()
    yield


app = common.app.create_app('Visitor Locator', lifespan=lifespan)
app.include_router(store_routes.router)
