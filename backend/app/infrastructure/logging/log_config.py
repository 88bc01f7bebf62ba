"""Logging setup for the registry API and the admin CLI.

The root level comes from ``log_level``; each ``log_level_*`` setting then
tunes one family of loggers, so SQL echo or httpx chatter can be raised for
debugging without flooding the lifecycle trail.
"""

import logging
import sys

from app.config import Settings, get_settings

# Settings field → loggers it controls
LOGGER_LEVEL_FIELDS: dict[str, tuple[str, ...]] = {
    "log_level_sql": ("sqlalchemy.engine",),
    "log_level_http": ("httpx", "httpcore"),
    "log_level_uvicorn": ("uvicorn", "uvicorn.access", "uvicorn.error"),
    "log_level_lifecycle": ("ClientLifecycle",),
    "log_level_listing": ("app.presentation.listing",),
}

_FORMAT = "%(levelname)-8s %(name)s: %(message)s"


def setup_logging(settings: Settings | None = None) -> None:
    """Apply the configured levels. Safe to call more than once."""
    settings = settings or get_settings()

    root = logging.getLogger()
    root.setLevel(_parse_level(settings.log_level))
    # uvicorn installs its own handler; the admin CLI and tests do not
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_FORMAT))
        root.addHandler(handler)

    for field, names in LOGGER_LEVEL_FIELDS.items():
        level = _parse_level(getattr(settings, field))
        for name in names:
            logging.getLogger(name).setLevel(level)


def _parse_level(raw: str) -> int:
    """Level name to logging constant; unknown names fall back to INFO."""
    level = logging.getLevelName(raw.strip().upper())
    return level if isinstance(level, int) else logging.INFO
