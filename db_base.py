from datetime import datetime, timezone

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """
    Declarative base shared by every ORM model.

    Kept free of engine/session imports so Alembic can load the metadata
    without pulling in async drivers.
    """
    pass


def utcnow() -> datetime:
    """Python-side timestamp default, so values are known without a refresh."""
    return datetime.now(timezone.utc)
