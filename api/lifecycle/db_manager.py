# api/lifecycle/db_manager.py
"""
Lifecycle transition engine.

The only path by which an asset's status, location or assignment pointer
changes. Each pointer is independent. A transition that would not change
the value writes nothing; a real change updates the pointer and appends
exactly one log entry in the same transaction.

Concurrent writers to the same pointer are serialised by a compare-and-set
UPDATE: the loser sees zero affected rows and gets ConcurrentModification.
It is never retried here.
"""
import logging
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from api.activity import db_manager as activity_log
from api.assets.db_manager import get_asset_or_raise
from api.catalogs.db_manager import load_catalog_snapshot
from core.catalog import CatalogKind, CatalogSnapshot
from core.errors import AssetArchived, ConcurrentModification
from db import transaction
from db_models.asset import Asset
from db_models.asset_log import ActionKind
from . import queries

logger = logging.getLogger(__name__)


class _Unset:
    def __repr__(self) -> str:
        return "UNSET"


# Marker for "no expected value supplied, use what is stored now"
UNSET = _Unset()


@dataclass(frozen=True)
class Pointer:
    kind: CatalogKind
    column_name: str
    action_kind: ActionKind
    message: str


POINTERS: dict[CatalogKind, Pointer] = {
    CatalogKind.STATUS: Pointer(
        CatalogKind.STATUS, "current_status_id", ActionKind.UPDATE_STATUS, "Status updated"
    ),
    CatalogKind.LOCATION: Pointer(
        CatalogKind.LOCATION, "current_location_id", ActionKind.UPDATE_LOCATION, "Location updated"
    ),
    CatalogKind.ASSIGNMENT: Pointer(
        CatalogKind.ASSIGNMENT, "current_assignment_id", ActionKind.ASSIGNED, "Assignment updated"
    ),
}


async def transition(
    db: AsyncSession,
    asset_id: int,
    kind: CatalogKind,
    new_id: int | None,
    acting_user: str | None,
    *,
    expected_current: int | None | _Unset = UNSET,
    catalog: CatalogSnapshot | None = None,
) -> Asset:
    """
    Move one lifecycle pointer of an asset to `new_id` (None clears it).

    `expected_current`, when given, is the value the caller believes is
    stored; a mismatch is reported as ConcurrentModification. `catalog` may
    be passed in when the caller already holds the workspace snapshot.

    Raises:
        AssetNotFound, AssetArchived, CrossWorkspaceReference,
        ConcurrentModification, StorageUnavailable
    """
    pointer = POINTERS[kind]

    async with transaction(db):
        asset = await get_asset_or_raise(db, asset_id)
        if asset.is_archived:
            raise AssetArchived(f"Asset {asset_id} is archived; its {kind.value} cannot change")

        if catalog is None or catalog.workspace_id != asset.workspace_id:
            catalog = await load_catalog_snapshot(db, asset.workspace_id)
        catalog.require(kind, new_id)

        stored = getattr(asset, pointer.column_name)
        if expected_current is not UNSET and expected_current != stored:
            logger.warning(
                "Stale %s transition on asset %s: expected %s, found %s",
                kind.value, asset_id, expected_current, stored,
            )
            raise ConcurrentModification(
                f"The {kind.value} of asset {asset_id} was changed by someone else",
                {"expected": expected_current, "current": stored},
            )

        if new_id == stored:
            logger.debug("No-op %s transition on asset %s (already %s)", kind.value, asset_id, stored)
            return asset

        stmt = queries.compare_and_set_pointer(asset_id, pointer.column_name, stored, new_id)
        result = await db.execute(stmt)
        if result.rowcount != 1:
            logger.warning("Concurrent %s transition on asset %s detected", kind.value, asset_id)
            raise ConcurrentModification(
                f"The {kind.value} of asset {asset_id} was changed by someone else",
                {"expected": stored},
            )

        await activity_log.append(
            db,
            asset_id,
            pointer.action_kind,
            acting_user,
            {"message": pointer.message, "fromValue": stored, "toValue": new_id},
        )

    logger.info(
        "Asset %s %s: %s -> %s (by %s)",
        asset_id, kind.value, stored, new_id, acting_user,
    )
    return await get_asset_or_raise(db, asset_id)


async def transition_status(db, asset_id, new_status_id, acting_user, **kwargs) -> Asset:
    return await transition(db, asset_id, CatalogKind.STATUS, new_status_id, acting_user, **kwargs)


async def transition_location(db, asset_id, new_location_id, acting_user, **kwargs) -> Asset:
    return await transition(db, asset_id, CatalogKind.LOCATION, new_location_id, acting_user, **kwargs)


async def transition_assignment(db, asset_id, new_assignment_id, acting_user, **kwargs) -> Asset:
    return await transition(db, asset_id, CatalogKind.ASSIGNMENT, new_assignment_id, acting_user, **kwargs)
