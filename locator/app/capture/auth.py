"""Client-side admin gate for the history and clear actions.

This only decides what the client offers to show. Protection of the store
itself is the server's admin token.
"""

import logging
import secrets

import common.settings

logger = logging.getLogger(__name__)


class AdminRequired(Exception):
    """An admin-only action was attempted while the gate is closed."""


def _matches(given: str, expected: str) -> bool:
    return secrets.compare_digest(given.encode(), expected.encode())


class AdminGate:
    """Opens when the configured username and password are supplied.

    Credentials default to ADMIN_USERNAME / ADMIN_PASSWORD. If either is
    unset the gate can never be opened.
    """

    def __init__(self, username: str | None = None, password: str | None = None):
        self._username = username or common.settings.ADMIN_USERNAME
        self._password = password or common.settings.ADMIN_PASSWORD
        self.is_open = False

    @property
    def configured(self) -> bool:
        return bool(self._username and self._password)

    def login(self, username: str, password: str) -> bool:
        """Open the gate if the credentials match; return whether it is open."""
        expected_username, expected_password = self._username, self._password
        if not expected_username or not expected_password:
            logger.warning('Admin login attempted but no credentials are configured')
            return False
        # Both comparisons always run.
        user_ok = _matches(username, expected_username)
        password_ok = _matches(password, expected_password)
        self.is_open = user_ok and password_ok
        if not self.is_open:
            logger.warning('Rejected admin login for %r', username)
        return self.is_open

    def logout(self) -> None:
        self.is_open = False

    def require(self) -> None:
        """Raise AdminRequired unless the gate is open."""
        if not self.is_open:
            raise AdminRequired('Admin login required')
