"""
Logging builder: turn Settings into a logging.dictConfig mapping and apply it.

Settings read here:
 - LOG_LEVEL, LOG_FORMAT (json | text), ENV
 - LOG_TO_STDOUT / LOG_DIR: console only, or console plus rotating files
 - ENABLE_SQL_LOGGING: statements at DEBUG on sqlalchemy.engine. Bound
   parameters carry client data, keep it off in production.
"""

from __future__ import annotations

import logging
import logging.config
from pathlib import Path

from vetclinic.utils.logging import get_project_name

from .filters import RedactFilter, RequestIdFilter
from .formatters import ColorFormatter, JsonFormatter
from .handlers import (
    get_console_handler,
    get_error_console_handler,
    get_error_file_handler,
    get_file_handler,
)

# Settings type only; never call get_settings() at import time here
from vetclinic.config.settings import Settings  # type: ignore

DEFAULT_SERVICE_NAME = "vetclinic-api"
TEXT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(request_id)s | %(message)s"


def _writes_files(settings: Settings) -> bool:
    return not settings.LOG_TO_STDOUT and bool(settings.LOG_DIR)


def _build_formatters(settings: Settings) -> dict[str, dict]:
    text_class = ColorFormatter if settings.LOG_FORMAT == "text" else logging.Formatter
    return {
        "standard": {"()": text_class, "format": TEXT_FORMAT},
        "json": {
            "()": JsonFormatter,
            "env": settings.ENV,
            "service": get_project_name(default=DEFAULT_SERVICE_NAME),
        },
    }


def _build_handlers(settings: Settings) -> dict[str, dict]:
    handlers = {"console": get_console_handler(settings)}
    if _writes_files(settings):
        handlers["file"] = get_file_handler(settings)
        handlers["error_file"] = get_error_file_handler(settings)
    else:
        handlers["error_console"] = get_error_console_handler(settings)
    return handlers


def _build_loggers(settings: Settings, handler_names: list[str]) -> dict[str, dict]:
    def quiet(level: str) -> dict:
        # third-party loggers: console only, no propagation to root
        return {"level": level, "handlers": ["console"], "propagate": False}

    return {
        "": {"level": settings.LOG_LEVEL, "handlers": handler_names},
        "uvicorn.error": {"level": settings.LOG_LEVEL, "handlers": handler_names, "propagate": False},
        "uvicorn.access": quiet("INFO"),
        "sqlalchemy.engine": quiet("DEBUG" if settings.ENABLE_SQL_LOGGING else "WARNING"),
    }


def make_dict_config(settings: Settings) -> dict:
    """
    Build the dictConfig mapping for `settings`.

      - formatters: "standard" (plain, or colored when LOG_FORMAT=text) and "json"
      - filters: "request_id", "redact" (attached to every handler)
      - handlers: console + file/error_file, or console + error_console
      - loggers: root, uvicorn.error, uvicorn.access, sqlalchemy.engine
    """
    handlers = _build_handlers(settings)
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": _build_formatters(settings),
        "filters": {
            "request_id": {"()": RequestIdFilter},
            "redact": {"()": RedactFilter},
        },
        "handlers": handlers,
        "loggers": _build_loggers(settings, list(handlers)),
    }


def setup_logging(settings: Settings) -> None:
    """
    Create LOG_DIR when logging to files, apply the dictConfig, then add a
    root-level RequestIdFilter so `%(request_id)s` never fails on records
    that bypass handler filters.
    """
    if _writes_files(settings):
        Path(settings.LOG_DIR).mkdir(parents=True, exist_ok=True)

    logging.config.dictConfig(make_dict_config(settings))
    logging.getLogger().addFilter(RequestIdFilter())
