"""Helpers for assembling the database URL from its parts (used by stage settings)."""


def get_database_url(
    driver: str,
    host: str,
    port: int,
    user: str,
    password: str,
    name: str,
) -> str:
    """
    Build an SQLAlchemy URL from connection components.

    Example:
        >>> get_database_url("postgresql+asyncpg", "db", 5432, "inv", "secret", "inventory")
        'postgresql+asyncpg://inv:secret@db:5432/inventory'
    """
    return f"{driver}://{user}:{password}@{host}:{port}/{name}"
