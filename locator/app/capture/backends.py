"""Persistence targets for captured locations.

The capture client talks to a LocationBackend: either the location store
server over HTTP, or a JSON file on the local machine when no server is
available.
"""

import asyncio
import datetime
import json
import logging
import pathlib
import typing
from datetime import UTC

import httpx
import pydantic

import common.settings
from locator.app.schemas import LocationPayload, LocationRecord

logger = logging.getLogger(__name__)

REMOTE = 'remote'
LOCAL = 'local'
BACKEND_KINDS = (REMOTE, LOCAL)


class BackendError(Exception):
    """A save, fetch or clear against a backend failed."""


class LocationBackend(typing.Protocol):
    async def save(self, payload: LocationPayload) -> None: ...

    async def fetch_all(self) -> list[LocationRecord]: ...

    async def clear(self) -> None: ...


class RemoteBackend:
    """Sends locations to the store server's HTTP API."""

    def __init__(
        self,
        base_url: str | None = None,
        admin_token: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = 10.0,
    ) -> None:
        self.base_url = (base_url or common.settings.SERVER_URL).rstrip('/')
        self.admin_token = admin_token
        self._transport = transport
        self._timeout = timeout

    def _client(self) -> httpx.AsyncClient:
        headers = {'accept': 'application/json'}
        if self.admin_token:
            headers['X-Admin-Token'] = self.admin_token
        return httpx.AsyncClient(
            base_url=self.base_url,
            headers=headers,
            transport=self._transport,
            timeout=self._timeout,
        )

    async def save(self, payload: LocationPayload) -> None:
        """POST the payload to /save-location."""
        try:
            async with self._client() as client:
                response = await client.post('/save-location', json=payload.to_wire())
                response.raise_for_status()
        except httpx.HTTPError as e:
            raise BackendError(f'save failed: {e}') from e
        logger.info('Location saved (HTTP %s)', response.status_code)

    async def fetch_all(self) -> list[LocationRecord]:
        """GET /locations, most recent first."""
        try:
            async with self._client() as client:
                response = await client.get('/locations')
                response.raise_for_status()
            return pydantic.TypeAdapter(list[LocationRecord]).validate_python(
                response.json()
            )
        except (httpx.HTTPError, pydantic.ValidationError, ValueError) as e:
            raise BackendError(f'fetch failed: {e}') from e

    async def clear(self) -> None:
        """DELETE /locations."""
        try:
            async with self._client() as client:
                response = await client.delete('/locations')
                response.raise_for_status()
        except httpx.HTTPError as e:
            raise BackendError(f'clear failed: {e}') from e


class LocalBackend:
    """Keeps locations in a JSON file under a single ``locations`` key.

    Append-only: records get a client-side timestamp and a sequential id.
    A missing file reads as an empty history.
    """

    KEY = 'locations'

    def __init__(self, path: pathlib.Path | str | None = None) -> None:
        self.path = pathlib.Path(path or common.settings.LOCAL_STORE_PATH)

    def _read(self) -> list[dict[str, typing.Any]]:
        if not self.path.exists():
            return []
        try:
            data = json.loads(self.path.read_text(encoding='utf-8'))
        except (OSError, json.JSONDecodeError) as e:
            raise BackendError(f'cannot read {self.path}: {e}') from e
        entries = data.get(self.KEY, []) if isinstance(data, dict) else None
        if not isinstance(entries, list) or not all(
            isinstance(entry, dict) for entry in entries
        ):
            raise BackendError(f'unexpected content in {self.path}')
        return entries

    def _write(self, entries: list[dict[str, typing.Any]]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(
                json.dumps({self.KEY: entries}, ensure_ascii=False, indent=2),
                encoding='utf-8',
            )
        except OSError as e:
            raise BackendError(f'cannot write {self.path}: {e}') from e

    async def save(self, payload: LocationPayload) -> None:
        entries = await asyncio.to_thread(self._read)
        next_id = max((entry.get('id') or 0 for entry in entries), default=0) + 1
        record = LocationRecord(
            **payload.model_dump(),
            id=next_id,
            timestamp=datetime.datetime.now(UTC),
        )
        entries.append(record.model_dump(mode='json', by_alias=True))
        await asyncio.to_thread(self._write, entries)

    async def fetch_all(self) -> list[LocationRecord]:
        entries = await asyncio.to_thread(self._read)
        try:
            records = [LocationRecord.model_validate(entry) for entry in entries]
        except pydantic.ValidationError as e:
            raise BackendError(f'corrupt entry in {self.path}: {e}') from e
        records.sort(key=lambda r: (r.timestamp, r.id or 0), reverse=True)
        return records

    async def clear(self) -> None:
        await asyncio.to_thread(self._write, [])


def make_backend(
    kind: str | None = None,
    *,
    base_url: str | None = None,
    admin_token: str | None = None,
    path: pathlib.Path | str | None = None,
) -> LocationBackend:
    """Build the backend selected by ``kind`` (default: STORE_BACKEND)."""
    kind = kind or common.settings.STORE_BACKEND
    if kind == REMOTE:
        return RemoteBackend(
            base_url, admin_token=admin_token or common.settings.ADMIN_TOKEN
        )
    if kind == LOCAL:
        return LocalBackend(path)
    raise ValueError(f'Unknown store backend {kind!r}; expected one of {BACKEND_KINDS}')
