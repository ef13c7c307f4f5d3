# core/errors.py
"""
Domain error taxonomy.

Every rejected operation raises an InventoryError subclass. `category`
separates "your input was invalid" (``input``) from "the system could not
complete the operation" (``system``) so callers can choose between asking
for a correction and offering a retry.
"""
from dataclasses import dataclass, asdict
from typing import Any

INPUT = "input"
SYSTEM = "system"


class InventoryError(Exception):
    """Base class for all domain errors."""
    category: str = INPUT
    status_code: int = 400

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    @property
    def code(self) -> str:
        return type(self).__name__

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "category": self.category,
            "message": self.message,
            "details": self.details,
        }


@dataclass(frozen=True)
class FieldError:
    """One failing custom field."""
    field_id: int | None
    field_name: str
    message: str


class ValidationError(InventoryError):
    """One or more custom-field values were rejected. Carries every failure."""

    def __init__(self, errors: list[FieldError]):
        self.errors = list(errors)
        names = ", ".join(e.field_name for e in self.errors)
        super().__init__(
            f"Validation failed for: {names}",
            {"fields": [asdict(e) for e in self.errors]},
        )


class UnsupportedKind(InventoryError):
    pass


class InvalidFieldDefinition(InventoryError):
    pass


class UnknownAssetType(InventoryError):
    status_code = 404


class AssetNotFound(InventoryError):
    status_code = 404


class WorkspaceNotFound(InventoryError):
    status_code = 404


class FieldDefinitionNotFound(InventoryError):
    status_code = 404


class AlreadyArchived(InventoryError):
    status_code = 409


class NotArchived(InventoryError):
    status_code = 409


class AssetArchived(InventoryError):
    """Edits and transitions are refused while an asset is archived."""
    status_code = 409


class CrossWorkspaceReference(InventoryError):
    pass


class ConcurrentModification(InventoryError):
    """Another transaction changed the same pointer first. Retry with fresh state."""
    category = SYSTEM
    status_code = 409


class StorageUnavailable(InventoryError):
    category = SYSTEM
    status_code = 503
