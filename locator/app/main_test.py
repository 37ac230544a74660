"""Unit tests for the visitor locator FastAPI application."""

from __future__ import annotations

import unittest
import unittest.mock
from collections.abc import Generator

import fastapi.testclient
import sqlalchemy
import sqlalchemy.pool
import sqlmodel

from locator.app import main
from locator.app.store import database as store_db


def _make_in_memory_engine() -> sqlalchemy.Engine:
    """Create an in-memory SQLite engine for testing."""
    engine = sqlmodel.create_engine(
        'sqlite://',
        connect_args={'check_same_thread': False},
        poolclass=sqlalchemy.pool.StaticPool,
    )
    sqlmodel.SQLModel.metadata.create_all(engine)
    return engine


class TestLocatorApp(unittest.TestCase):
    """Tests for the assembled application."""

    def setUp(self) -> None:
        """Set up test client with an in-memory database."""
        self.engine = _make_in_memory_engine()

        def override_get_session() -> Generator[sqlmodel.Session, None, None]:
            """Yield an in-memory database session for testing."""
            with sqlmodel.Session(self.engine) as session:
                yield session

        main.app.dependency_overrides[store_db.get_session] = override_get_session
        self.client = fastapi.testclient.TestClient(main.app)

    def tearDown(self) -> None:
        """Remove dependency overrides after each test."""
        main.app.dependency_overrides.clear()

    def test_health_endpoint(self) -> None:
        """Health check returns 200 with healthy status."""
        response = self.client.get('/health')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {'status': 'healthy'})

    def test_store_routes_mounted(self) -> None:
        """The store API is served at the root."""
        paths = {route.path for route in main.app.routes}  # type: ignore[attr-defined]
        self.assertTrue({'/save-location', '/locations', '/history'} <= paths)

    def test_title(self) -> None:
        """The app is titled for the service."""
        self.assertEqual(main.app.title, 'Visitor Locator')


class TestLocatorAppLifespan(unittest.TestCase):
    """Tests for the app lifespan (startup/shutdown)."""

    def test_lifespan_creates_tables(self) -> None:
        """Startup creates the database tables."""
        with (
            unittest.mock.patch.object(store_db, 'create_db_and_tables') as create,
            fastapi.testclient.TestClient(main.app) as client,
        ):
            response = client.get('/health')
            self.assertEqual(response.status_code, 200)
        create.assert_called_once_with()


if __name__ == '__main__':
    unittest.main()
