# users_api/
# │
# ├── exceptions/
# │   ├── __init__.py
# │   ├── base.py          # App-level error categories (NotFoundError, ConflictError, ...)
# │   ├── classifier.py    # Raw database error -> app-level error (pure policy)
# │   └── mapper.py        # PersistenceError + session rollback context manager

from .base import (
    AppError,
    BadRequestError,
    ConflictError,
    InternalError,
    NotFoundError,
    error_from_response,
)
from .classifier import DatabaseErrorInfo, classify_database_error, extract_error_info, map_database_error
from .mapper import PersistenceError

__all__ = [
    "AppError",
    "BadRequestError",
    "ConflictError",
    "InternalError",
    "NotFoundError",
    "error_from_response",
    "DatabaseErrorInfo",
    "classify_database_error",
    "extract_error_info",
    "map_database_error",
    "PersistenceError",
]
