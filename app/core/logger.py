import logging
from typing import Optional

from app.core.config import get_settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_configured = False


def _level(name: str, default: int) -> int:
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else default


def _configure_root_logger() -> None:
    global _configured
    if _configured:
        return
    settings = get_settings()
    logging.basicConfig(level=_level(settings.LOG_LEVEL, logging.INFO), format=LOG_FORMAT)
    # httpx logs one INFO line per outbound request, including every page
    # fetched for a title.
    logging.getLogger("httpx").setLevel(_level(settings.HTTPX_LOG_LEVEL, logging.WARNING))
    _configured = True


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a module logger; the first call configures the root and httpx loggers."""
    _configure_root_logger()
    return logging.getLogger(name or "relay")
