# src/users_api/core/logging/middleware.py
"""
Request ID middleware.

Takes `X-Request-ID` from the incoming request (or generates a UUID4), stores it in
the request-id contextvar for the duration of the request so every log line carries
it, and echoes it back on the response.
"""

import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from .filters import reset_request_id, set_request_id

REQUEST_ID_HEADER = "X-Request-ID"
_MAX_REQUEST_ID_LENGTH = 128


def _sanitize(value: str | None) -> str | None:
    # Reject values that could break log lines (newlines, control chars) or bloat them.
    if not value or len(value) > _MAX_REQUEST_ID_LENGTH or not value.isprintable():
        return None
    return value


class RequestIDMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        rid = _sanitize(request.headers.get(REQUEST_ID_HEADER)) or str(uuid.uuid4())
        token = set_request_id(rid)
        try:
            response = await call_next(request)
            response.headers[REQUEST_ID_HEADER] = rid
            return response
        finally:
            reset_request_id(token)
