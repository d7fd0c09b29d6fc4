"""
Declarative base for the persistence adapter's table mappings.

Only the SQLAlchemy adapter (models/, repositories/) imports this; the service and
HTTP layers work with the plain `users_api.domain.user.User` dataclass.
"""

from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase

# Naming convention for constraints and indexes.
# Stable names matter here: the error classifier recognises the email unique
# constraint by name ("uq_users_email").
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    metadata = MetaData(naming_convention=NAMING_CONVENTION)
