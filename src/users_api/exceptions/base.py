"""
Application-level error categories.

Every failure the service surfaces to its callers is one of four categories:

| Category          | error_code       | HTTP status |
| ----------------- | ---------------- | ----------- |
| `NotFoundError`   | `not_found`      | 404         |
| `ConflictError`   | `conflict`       | 409         |
| `BadRequestError` | `bad_request`    | 400         |
| `InternalError`   | `internal_error` | 500         |

The HTTP layer never inspects the concrete class: it asks the error for its
status (`http_status()`) and its JSON body (`to_payload()`).
"""

from typing import Any


class AppError(Exception):
    """
    Base exception for service errors.

    - message: human-friendly message (safe to show to clients)
    - error_code: canonical short code used by clients
    - fields: diagnostic fields passed through for observability
      (e.g. detail, constraint, table, column). Keys with a None value are dropped.
    """

    # Map canonical error_code -> HTTP status.
    ERROR_CODE_TO_STATUS = {
        "not_found": 404,
        "conflict": 409,
        "bad_request": 400,
        "internal_error": 500,
    }

    default_message = "Application error"
    default_error_code = "internal_error"

    def __init__(self, message: str | None = None, *, error_code: str | None = None, **fields: Any):
        message = message or self.default_message
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.default_error_code
        self.fields = {k: v for k, v in fields.items() if v is not None}

    def __str__(self) -> str:
        if not self.fields:
            return self.message
        parts = "; ".join(f"{k}: {v}" for k, v in self.fields.items())
        return f"{self.message} ({parts})"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(message={self.message!r}, fields={self.fields!r})"

    def to_payload(self) -> dict[str, Any]:
        """
        Return a JSON-serializable dict suitable for HTTP responses.

        Shape:
            {
                "message": "A user with this email already exists.",
                "code": "conflict",
                "detail": "Key (email)=(a@x.com) already exists.",
                "constraint": "uq_users_email",
                "table": "users"
            }
        Diagnostic fields only appear when they carry a value.
        """
        payload: dict[str, Any] = {"message": self.message, "code": self.error_code}
        for key, value in self.fields.items():
            # "code" is reserved for the category; raw database codes go under db_code
            payload["db_code" if key == "code" else key] = value
        return payload

    def http_status(self) -> int:
        return self.ERROR_CODE_TO_STATUS.get(self.error_code, 500)


class NotFoundError(AppError):
    default_message = "Not found"
    default_error_code = "not_found"


class ConflictError(AppError):
    default_message = "Conflict"
    default_error_code = "conflict"


class BadRequestError(AppError):
    default_message = "Bad request"
    default_error_code = "bad_request"


class InternalError(AppError):
    default_message = "Internal error"
    default_error_code = "internal_error"


_STATUS_TO_ERROR: dict[int, type[AppError]] = {
    404: NotFoundError,
    409: ConflictError,
    400: BadRequestError,
    422: BadRequestError,
}


# Set by error_from_response itself, or keyword arguments of AppError.
_RESERVED_PAYLOAD_KEYS = frozenset({"message", "code", "status_code", "error_code"})


def error_from_response(status_code: int, payload: Any) -> AppError:
    """
    Rebuild an AppError from an HTTP error response (status + JSON body).

    Used by the HTTP client so callers handle the same categories the service raises.
    Unknown statuses fall back to InternalError.
    """
    error_cls = _STATUS_TO_ERROR.get(status_code, InternalError)
    if not isinstance(payload, dict):
        return error_cls(f"HTTP {status_code}", status_code=status_code)

    fields = {k: v for k, v in payload.items() if k not in _RESERVED_PAYLOAD_KEYS}
    message = payload.get("message")
    if not isinstance(message, str):
        message = f"HTTP {status_code}"
    return error_cls(message, status_code=status_code, **fields)


__all__ = [
    "AppError",
    "NotFoundError",
    "ConflictError",
    "BadRequestError",
    "InternalError",
    "error_from_response",
]
