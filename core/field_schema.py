# core/field_schema.py
"""
Validation of a proposed custom-field payload against an asset type's
ordered field definitions.

Pure functions of (definitions, input): no session, no I/O. Definitions are
duck-typed; anything with ``id``, ``name``, ``kind``, ``is_required`` and
``dropdown_options`` works (the ORM FieldDefinition is what callers pass).
"""
from typing import Any, Mapping, Protocol, Sequence

from core import field_types
from core.errors import FieldError, ValidationError
from core.field_types import FieldKind, FieldTypeError, ParsedValue


class FieldDefinitionLike(Protocol):
    id: int
    name: str
    kind: str
    is_required: bool
    dropdown_options: list[str] | None


def _resolve_key(key: Any, by_id: dict, by_name: dict):
    """Keys are definition ids (int or digit string) or exact field names."""
    if isinstance(key, bool):
        return None
    if isinstance(key, int):
        return by_id.get(key)
    if isinstance(key, str):
        if key.isdigit() and int(key) in by_id:
            return by_id[int(key)]
        return by_name.get(key)
    return None


def _is_empty(parsed: ParsedValue | None) -> bool:
    if parsed is None:
        return True
    return parsed.kind is FieldKind.TEXT and parsed.value.strip() == ""


def validate_values(
    definitions: Sequence[FieldDefinitionLike],
    proposed: Mapping[Any, Any],
    *,
    partial: bool = False,
) -> dict[int, ParsedValue | None]:
    """
    Validate `proposed` (field key -> raw value) against `definitions`.

    With ``partial=False`` every required definition must be present. With
    ``partial=True`` only the supplied keys are checked, but a supplied
    required field still may not be empty.

    Returns a mapping of definition id -> parsed value (None means the field
    was supplied as absent and should be cleared).

    Raises:
        ValidationError: carrying one FieldError per failing field, in
            definition order, unknown keys last
    """
    by_id = {d.id: d for d in definitions}
    by_name = {d.name: d for d in definitions}
    order = {d.id: index for index, d in enumerate(definitions)}

    errors: list[tuple[int, FieldError]] = []
    seen: set[int] = set()
    validated: dict[int, ParsedValue | None] = {}

    for key, raw in proposed.items():
        definition = _resolve_key(key, by_id, by_name)
        if definition is None:
            errors.append((
                len(order),
                FieldError(None, str(key), "Unknown field for this asset type"),
            ))
            continue
        if definition.id in seen:
            errors.append((
                order[definition.id],
                FieldError(definition.id, definition.name, "Field supplied more than once"),
            ))
            continue
        seen.add(definition.id)

        try:
            parsed = field_types.validate(
                definition.kind, raw, definition.dropdown_options or ()
            )
        except FieldTypeError as exc:
            errors.append((
                order[definition.id],
                FieldError(definition.id, definition.name, str(exc)),
            ))
            continue

        if definition.is_required and _is_empty(parsed):
            errors.append((
                order[definition.id],
                FieldError(definition.id, definition.name, "This field is required"),
            ))
            continue
        validated[definition.id] = parsed

    if not partial:
        for definition in definitions:
            if definition.is_required and definition.id not in seen:
                errors.append((
                    order[definition.id],
                    FieldError(definition.id, definition.name, "This field is required"),
                ))

    if errors:
        errors.sort(key=lambda item: item[0])
        raise ValidationError([error for _, error in errors])
    return validated


def ensure_kind_matches(definition: FieldDefinitionLike, parsed: ParsedValue) -> None:
    """Refuse to store a value whose kind differs from the definition's kind."""
    declared = field_types.resolve_kind(definition.kind)
    if parsed.kind is not declared:
        raise ValidationError([
            FieldError(
                definition.id,
                definition.name,
                f"Value of kind {parsed.kind.value} cannot be stored in a {declared.value} field",
            )
        ])
