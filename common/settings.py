"""Application settings read from environment variables."""

import os
import pathlib

DATA_DIR: pathlib.Path = pathlib.Path(os.environ.get('DATA_DIR', 'data'))

DATABASE_URL: str = os.environ.get(
    'DATABASE_URL', f'sqlite:///{DATA_DIR / "locations.db"}'
)

# Client side: where captured records are sent.
SERVER_URL: str = os.environ.get('SERVER_URL', 'http://localhost:8000').rstrip('/')
STORE_BACKEND: str = os.environ.get('STORE_BACKEND', 'remote')
LOCAL_STORE_PATH: pathlib.Path = pathlib.Path(
    os.environ.get('LOCAL_STORE_PATH', str(DATA_DIR / 'locations.json'))
)

GEOCODER_LANGUAGE: str = os.environ.get('GEOCODER_LANGUAGE', 'pt-BR')
GEOCODER_USER_AGENT: str = os.environ.get('GEOCODER_USER_AGENT', 'VisitorLocator/1.0')

# Empty values count as unset.
ADMIN_USERNAME: str | None = os.environ.get('ADMIN_USERNAME') or None
ADMIN_PASSWORD: str | None = os.environ.get('ADMIN_PASSWORD') or None
ADMIN_TOKEN: str | None = os.environ.get('ADMIN_TOKEN') or None

LOG_LEVEL: str = os.environ.get('LOG_LEVEL', 'INFO').upper()
