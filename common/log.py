"""Shared logging utilities."""

import logging

import common.settings

LOG_FORMAT = '%(asctime)s %(levelname)s [%(name)s] %(message)s'


class HealthCheckFilter(logging.Filter):
    """Filter out health check requests from uvicorn access logs."""

    def filter(self, record: logging.LogRecord) -> bool:
        """Return False to suppress health check log entries."""
        return '/health' not in record.getMessage()


def configure_logging(level: str | None = None) -> None:
    """Set the root log level and suppress health checks in the access log.

    The level defaults to ``common.settings.LOG_LEVEL``. Calling this more
    than once does not stack duplicate filters.
    """
    logging.basicConfig(
        level=level or common.settings.LOG_LEVEL,
        format=LOG_FORMAT,
    )
    access_logger = logging.getLogger('uvicorn.access')
    if not any(isinstance(f, HealthCheckFilter) for f in access_logger.filters):
        access_logger.addFilter(HealthCheckFilter())
