# api/activity/db_manager.py
"""
Append-only activity log.

`append` is the only write path and is meant to be called inside the same
transaction as the change it records; it flushes but never commits.
"""
from collections.abc import AsyncIterator
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from config import settings
from core.errors import AssetNotFound
from db_base import utcnow
from db_models.asset import Asset
from db_models.asset_log import ActionKind, AssetLog
from . import queries

DEFAULT_PAGE_SIZE = 50


async def append(
    db: AsyncSession,
    asset_id: int,
    action_kind: ActionKind,
    acting_user: str | None,
    details: dict[str, Any] | None = None,
) -> AssetLog:
    """Add one immutable entry to the current transaction."""
    entry = AssetLog(
        asset_id=asset_id,
        user_id=acting_user,
        action_type=action_kind.value,
        timestamp=utcnow(),
        details=details or {},
    )
    db.add(entry)
    await db.flush()
    return entry


async def _ensure_asset_exists(db: AsyncSession, asset_id: int) -> None:
    result = await db.execute(select(Asset.id).where(Asset.id == asset_id))
    if result.scalar_one_or_none() is None:
        raise AssetNotFound(f"Asset {asset_id} not found")


def clamp_limit(limit: int | None) -> int:
    if limit is None:
        return DEFAULT_PAGE_SIZE
    return max(1, min(limit, settings.LOG_PAGE_MAX))


async def for_asset(
    db: AsyncSession,
    asset_id: int,
    *,
    limit: int | None = None,
    offset: int = 0,
    action_kind: ActionKind | None = None,
) -> list[AssetLog]:
    """
    One page of an asset's history, newest first.

    An empty list means the asset has no (matching) entries in that range;
    a missing asset raises AssetNotFound instead.
    """
    await _ensure_asset_exists(db, asset_id)
    stmt = queries.select_logs_for_asset(
        asset_id,
        limit=clamp_limit(limit),
        offset=max(offset, 0),
        action_kind=action_kind,
    )
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def iter_asset_history(
    db: AsyncSession,
    asset_id: int,
    *,
    page_size: int = DEFAULT_PAGE_SIZE,
    action_kind: ActionKind | None = None,
) -> AsyncIterator[AssetLog]:
    """
    Lazily replay an asset's history newest first, fetching one page at a
    time. Each new iteration starts again from the newest entry.
    """
    offset = 0
    while True:
        page = await for_asset(
            db, asset_id, limit=page_size, offset=offset, action_kind=action_kind
        )
        for entry in page:
            yield entry
        if len(page) < clamp_limit(page_size):
            return
        offset += len(page)
