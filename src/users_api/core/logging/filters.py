# src/users_api/core/logging/filters.py
"""
Logging filters.

- RequestIdFilter stamps every LogRecord with `request_id`, read from a contextvar
  that RequestIDMiddleware sets per HTTP request. contextvars (not threading.local)
  follow the request across `await` boundaries.
- RedactFilter masks record attributes whose name looks sensitive, so secrets passed
  through `extra={...}` never reach a handler.

Both filters always return True: they annotate records, they never drop them.
"""

import contextvars
import logging
from logging import LogRecord

# Default None means "no request in this context"; the filter renders it as "-".
_request_id_ctx: contextvars.ContextVar[str | None] = contextvars.ContextVar("request_id", default=None)


def set_request_id(request_id: str | None) -> contextvars.Token:
    """Set the request id for the current context; keep the token to reset it later."""
    return _request_id_ctx.set(request_id)


def reset_request_id(token: contextvars.Token) -> None:
    _request_id_ctx.reset(token)


def get_request_id() -> str | None:
    return _request_id_ctx.get()


class RequestIdFilter(logging.Filter):
    """
    Guarantee `record.request_id` exists.

    Precedence: an explicit `extra={"request_id": ...}`, then the contextvar, then "-".
    The sentinel keeps `%(request_id)s` format strings from raising.
    """

    def filter(self, record: LogRecord) -> bool:
        record.request_id = getattr(record, "request_id", None) or get_request_id() or "-"
        return True


class RedactFilter(logging.Filter):
    SENSITIVE = {"password", "secret", "token", "access_token", "refresh_token", "authorization"}
    MASK = "***REDACTED***"

    def filter(self, record: LogRecord) -> bool:
        for key in list(record.__dict__.keys()):
            if key.lower() in self.SENSITIVE:
                record.__dict__[key] = self.MASK
        return True
