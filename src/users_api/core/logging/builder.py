# src/users_api/core/logging/builder.py
"""
Logging builder: assemble a dictConfig mapping from Settings and apply it.

Handler wiring:
| LOG_TO_STDOUT | LOG_DIR set | Active handlers                 |
| ------------- | ----------- | ------------------------------- |
| true          | any         | console + error_console         |
| false         | no          | console + error_console         |
| false         | yes         | console + file + error_file     |

Settings are passed in (duck-typed) rather than read here, so importing this module
has no side effects and tests can hand in a SimpleNamespace.
"""

from __future__ import annotations

import logging
import logging.config
from pathlib import Path

from users_api.config.settings import Settings
from users_api.utils.logging import get_project_name

from .formatters import ColorFormatter, JsonFormatter
from .filters import RedactFilter, RequestIdFilter
from .handlers import (
    get_console_handler,
    get_error_console_handler,
    get_error_file_handler,
    get_file_handler,
)


def _file_logging_enabled(settings: Settings) -> bool:
    return (not settings.LOG_TO_STDOUT) and bool(settings.LOG_DIR)


def make_dict_config(settings: Settings) -> dict:
    """
    Build the dictConfig mapping.

      - formatters: "standard" (colored in text mode) and "json"
      - filters: "request_id", "redact"
      - handlers: console plus either file/error_file or error_console
      - loggers: root, uvicorn.error, uvicorn.access, sqlalchemy.engine
    """
    formatters = {
        "standard": {
            "()": ColorFormatter if settings.LOG_FORMAT == "text" else logging.Formatter,
            "format": "%(asctime)s | %(levelname)s | %(name)s | %(request_id)s | %(message)s",
        },
        "json": {
            "()": JsonFormatter,
            "env": settings.ENV,
            "service": get_project_name(default="users-api"),
        },
    }

    filters = {
        "request_id": {"()": RequestIdFilter},
        "redact": {"()": RedactFilter},
    }

    handlers: dict[str, dict] = {"console": get_console_handler(settings)}
    if _file_logging_enabled(settings):
        handlers["file"] = get_file_handler(settings)
        handlers["error_file"] = get_error_file_handler(settings)
    else:
        handlers["error_console"] = get_error_console_handler(settings)

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": formatters,
        "filters": filters,
        "handlers": handlers,
        "loggers": {
            "": {
                "handlers": list(handlers.keys()),
                "level": settings.LOG_LEVEL,
                "propagate": True,
            },
            "uvicorn.error": {
                "level": settings.LOG_LEVEL,
                "handlers": list(handlers.keys()),
                "propagate": False,
            },
            "uvicorn.access": {
                "level": "INFO",
                "handlers": ["console"],
                "propagate": False,
            },
            # SQL logging may print parameter values (emails); keep it opt-in.
            "sqlalchemy.engine": {
                "level": "DEBUG" if settings.ENABLE_SQL_LOGGING else "WARNING",
                "handlers": ["console"],
                "propagate": False,
            },
        },
    }


def setup_logging(settings: Settings) -> None:
    """
    Apply the logging configuration.

    Creates LOG_DIR when file logging is on, applies dictConfig and adds a
    RequestIdFilter on the root logger so `%(request_id)s` is always resolvable.
    """
    if _file_logging_enabled(settings):
        Path(settings.LOG_DIR).mkdir(parents=True, exist_ok=True)

    logging.config.dictConfig(make_dict_config(settings))
    logging.getLogger().addFilter(RequestIdFilter())
