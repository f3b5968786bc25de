"""Logging configuration: level from settings, quiet health-check access logs."""

import logging
from typing import Optional, Set

from app.core.config import settings


class SuppressHealthCheckFilter(logging.Filter):
    """Filter that suppresses successful access logs for health-check probes."""

    SUPPRESSED_PATTERNS: Set[str] = {
        "GET /health ",
        "GET /healthcheck ",
    }

    def filter(self, record: logging.LogRecord) -> bool:
        """Return False to suppress, True to keep."""

        status_code = self._extract_status_code(record)
        if status_code is not None and status_code != 200:
            return True

        message = record.getMessage()
        if status_code is None and " 200" not in message:
            return True

        for pattern in self.SUPPRESSED_PATTERNS:
            if pattern in message:
                return False

        return True

    @staticmethod
    def _extract_status_code(record: logging.LogRecord) -> Optional[int]:
        """Extract numeric status code from uvicorn access log record."""
        args = getattr(record, "args", None)
        if not args:
            return None

        status_candidate = args[-1]

        try:
            return int(status_candidate)
        except (TypeError, ValueError):
            return None


def configure_logging(level: Optional[str] = None):
    """Configure application logging with health-check suppression."""
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger = logging.getLogger(__name__)

    access_logger = logging.getLogger("uvicorn.access")
    filter_instance = SuppressHealthCheckFilter()

    for handler in access_logger.handlers:
        handler.addFilter(filter_instance)

    # Suppress external library INFO/DEBUG logs (keep WARNING+)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)

    logger.info(
        f"Logging configured: level={(level or settings.LOG_LEVEL).upper()}, "
        f"{len(SuppressHealthCheckFilter.SUPPRESSED_PATTERNS)} health-check patterns suppressed"
    )
