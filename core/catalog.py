# core/catalog.py
"""
Read-only view of one workspace's status/location/assignment catalogs.

Loaded once per request and passed explicitly into asset creation and
lifecycle transitions instead of being looked up from shared state.
"""
from dataclasses import dataclass
from enum import Enum

from core.errors import CrossWorkspaceReference


class CatalogKind(str, Enum):
    STATUS = "status"
    LOCATION = "location"
    ASSIGNMENT = "assignment"


@dataclass(frozen=True)
class CatalogSnapshot:
    workspace_id: int
    status_ids: frozenset[int] = frozenset()
    location_ids: frozenset[int] = frozenset()
    assignment_ids: frozenset[int] = frozenset()

    def ids_for(self, kind: CatalogKind) -> frozenset[int]:
        return {
            CatalogKind.STATUS: self.status_ids,
            CatalogKind.LOCATION: self.location_ids,
            CatalogKind.ASSIGNMENT: self.assignment_ids,
        }[kind]

    def require(self, kind: CatalogKind, entry_id: int | None) -> None:
        """
        Check that `entry_id` is a catalog entry of this workspace.

        ``None`` always passes (it clears the pointer).

        Raises:
            CrossWorkspaceReference: the id is unknown to this workspace
        """
        if entry_id is None:
            return
        if entry_id not in self.ids_for(kind):
            raise CrossWorkspaceReference(
                f"{kind.value.capitalize()} {entry_id} does not belong to workspace {self.workspace_id}",
                {"kind": kind.value, "id": entry_id, "workspace_id": self.workspace_id},
            )
