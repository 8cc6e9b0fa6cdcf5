from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase

# Stable constraint names so create_all and the Alembic migrations agree
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    """
    Base class for the asset register's ORM models.

    No engine/session imports here, so Alembic and the seed script can import
    Base without pulling in async drivers.
    """
    metadata = MetaData(naming_convention=NAMING_CONVENTION)
