"""Centralized logging configuration.

Applies per-category log levels from Settings so that noisy loggers
(SQLAlchemy statements, httpx/httpcore) can be silenced without affecting
the request handlers or the deploy dispatcher.

Usage:
    from sitelaunch.infrastructure.logging.log_config import setup_logging
    setup_logging()   # Call once at startup (in the FastAPI lifespan)
"""

import logging
import sys

from sitelaunch.config import Settings, get_settings

_LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

# ── Settings field → logger names ───────────────────────────────────

_CATEGORY_MAP: dict[str, list[str]] = {
    "log_level_sql": [
        "sqlalchemy.engine",
        "sqlalchemy.pool",
        "aiosqlite",
    ],
    "log_level_http": [
        "httpx",
        "httpcore",
    ],
    "log_level_uvicorn": [
        "uvicorn",
        "uvicorn.access",
        "uvicorn.error",
    ],
    "log_level_dispatch": [
        "DeployDispatcher",
        "sitelaunch.application.services.deploy_dispatcher",
    ],
    "log_level_integrations": [
        "sitelaunch.infrastructure.deploy",
        "sitelaunch.infrastructure.email",
        "sitelaunch.infrastructure.dns",
    ],
}


def setup_logging(settings: Settings | None = None) -> None:
    """Apply root and per-category log levels from Settings.

    Called once from the FastAPI lifespan. Safe to call again: the stderr
    handler is only installed when the root logger has none (uvicorn
    normally installs its own).
    """
    settings = settings or get_settings()

    root = logging.getLogger()
    root.setLevel(_parse_level(settings.log_level))
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_LOG_FORMAT, datefmt="%H:%M:%S"))
        root.addHandler(handler)

    levels = {}
    for settings_field, logger_names in _CATEGORY_MAP.items():
        raw_level: str = getattr(settings, settings_field, "INFO")
        levels[settings_field.removeprefix("log_level_")] = raw_level.upper()
        for name in logger_names:
            logging.getLogger(name).setLevel(_parse_level(raw_level))

    logging.getLogger(__name__).debug(
        "Logging configured: root=%s %s",
        settings.log_level.upper(),
        " ".join(f"{k}={v}" for k, v in levels.items()),
    )


def _parse_level(raw: str) -> int:
    """Level name to logging constant; unknown names fall back to INFO."""
    numeric = logging.getLevelName(raw.strip().upper())
    return numeric if isinstance(numeric, int) else logging.INFO
