"""
Table mappings owned by the SQLAlchemy persistence adapter.

Importing this package registers every table on `Base.metadata`, which is what
`Database.create_schema()` and the test fixtures rely on.
"""

from .user import UserRecord

__all__ = ["UserRecord"]
