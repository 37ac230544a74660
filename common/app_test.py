"""Unit tests for common/app.py."""

import contextlib
import unittest
from collections.abc import AsyncGenerator

import fastapi
import fastapi.testclient

import common.app


class TestCreateApp(unittest.TestCase):
    """Tests for the create_app factory."""

    def test_title_is_set(self) -> None:
        """create_app returns a FastAPI app with the given title."""
        app = common.app.create_app('Locator')
        self.assertIsInstance(app, fastapi.FastAPI)
        self.assertEqual(app.title, 'Locator')

    def test_health_endpoint_registered(self) -> None:
        """create_app registers the /health endpoint."""
        client = fastapi.testclient.TestClient(common.app.create_app('Locator'))
        response = client.get('/health')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {'status': 'healthy'})

    def test_health_head_method(self) -> None:
        """The health endpoint accepts HEAD requests."""
        client = fastapi.testclient.TestClient(common.app.create_app('Locator'))
        response = client.head('/health')
        self.assertEqual(response.status_code, 200)

    def test_cors_preflight_allowed(self) -> None:
        """Cross-origin preflight requests are answered for API methods."""
        client = fastapi.testclient.TestClient(common.app.create_app('Locator'))
        response = client.options(
            '/health',
            headers={
                'Origin': 'https://visitor.example.com',
                'Access-Control-Request-Method': 'POST',
            },
        )
        self.assertEqual(response.status_code, 200)
        self.assertIn('access-control-allow-origin', response.headers)

    def test_kwargs_forwarded_to_fastapi(self) -> None:
        """Extra kwargs (e.g. lifespan) are forwarded to FastAPI."""
        started: list[bool] = []

        @contextlib.asynccontextmanager
        async def my_lifespan(app: fastapi.FastAPI) -> AsyncGenerator[None, None]:
            started.append(True)
            yield

        app = common.app.create_app('Locator', lifespan=my_lifespan)
        with fastapi.testclient.TestClient(app):
            pass
        self.assertEqual(started, [True])


if __name__ == '__main__':
    unittest.main()
