# core/field_types.py
"""
Custom-field value kinds and their parse/validate rules.

The set of kinds is closed. `validate()` is pure: it either returns the
parsed value (``None`` when the input counts as absent) or raises
FieldTypeError with a message suitable for showing next to the field.
"""
import math
import re
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Callable, Sequence

from core.errors import UnsupportedKind

_ISO_DATE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


class FieldKind(str, Enum):
    """Value kinds a custom field can declare."""
    TEXT = "Text"
    NUMBER = "Number"
    DATE = "Date"
    BOOLEAN = "Boolean"
    DROPDOWN = "Dropdown"


# Which FieldValue column holds each kind
STORAGE_SLOT: dict[FieldKind, str] = {
    FieldKind.TEXT: "text_value",
    FieldKind.NUMBER: "number_value",
    FieldKind.DATE: "date_value",
    FieldKind.BOOLEAN: "boolean_value",
    FieldKind.DROPDOWN: "text_value",
}


class FieldTypeError(ValueError):
    """A raw value does not satisfy its kind's rules."""
    pass


@dataclass(frozen=True)
class ParsedValue:
    kind: FieldKind
    value: str | Decimal | date | bool

    @property
    def slot(self) -> str:
        return STORAGE_SLOT[self.kind]


def resolve_kind(kind: Any) -> FieldKind:
    """Map a raw kind name onto FieldKind. Raises UnsupportedKind."""
    if isinstance(kind, FieldKind):
        return kind
    try:
        return FieldKind(kind)
    except ValueError:
        allowed = ", ".join(k.value for k in FieldKind)
        raise UnsupportedKind(
            f"Unsupported field kind {kind!r}. Must be one of: {allowed}",
            {"kind": kind},
        ) from None


def _is_blank(raw: Any) -> bool:
    return raw is None or (isinstance(raw, str) and raw.strip() == "")


def _parse_text(raw: Any, options: Sequence[str]) -> str:
    if not isinstance(raw, str):
        raise FieldTypeError("must be a string")
    return raw


def _parse_number(raw: Any, options: Sequence[str]) -> Decimal:
    # bool is an int subclass; True is not a number here
    if isinstance(raw, bool):
        raise FieldTypeError("must be a number")
    if isinstance(raw, float):
        if not math.isfinite(raw):
            raise FieldTypeError("must be a finite number")
        return Decimal(str(raw))
    if isinstance(raw, (int, Decimal)):
        value = Decimal(raw)
    elif isinstance(raw, str):
        try:
            value = Decimal(raw.strip())
        except InvalidOperation:
            raise FieldTypeError(f"{raw!r} is not a valid number") from None
    else:
        raise FieldTypeError("must be a number")
    if not value.is_finite():
        raise FieldTypeError("must be a finite number")
    return value


def _parse_date(raw: Any, options: Sequence[str]) -> date:
    # datetime is a date subclass; only calendar dates are stored
    if isinstance(raw, datetime):
        raise FieldTypeError("must be a calendar date without a time part")
    if isinstance(raw, date):
        return raw
    if isinstance(raw, str):
        text = raw.strip()
        if not _ISO_DATE.fullmatch(text):
            raise FieldTypeError(f"{raw!r} is not a valid date (expected YYYY-MM-DD)")
        try:
            return date.fromisoformat(text)
        except ValueError:
            raise FieldTypeError(f"{raw!r} is not a valid date (expected YYYY-MM-DD)") from None
    raise FieldTypeError("must be a date (YYYY-MM-DD)")


def _parse_boolean(raw: Any, options: Sequence[str]) -> bool:
    if isinstance(raw, bool):
        return raw
    if raw == "true":
        return True
    if raw == "false":
        return False
    raise FieldTypeError("must be true or false")


def _parse_dropdown(raw: Any, options: Sequence[str]) -> str:
    if not isinstance(raw, str) or raw not in options:
        raise FieldTypeError(
            f"{raw!r} is not one of the allowed options: {', '.join(options)}"
        )
    return raw


_PARSERS: dict[FieldKind, Callable[[Any, Sequence[str]], Any]] = {
    FieldKind.TEXT: _parse_text,
    FieldKind.NUMBER: _parse_number,
    FieldKind.DATE: _parse_date,
    FieldKind.BOOLEAN: _parse_boolean,
    FieldKind.DROPDOWN: _parse_dropdown,
}


def validate(kind: Any, raw: Any, options: Sequence[str] = ()) -> ParsedValue | None:
    """
    Parse `raw` according to `kind`.

    Returns None when the value is absent: ``None`` for every kind, and an
    empty/blank string for everything except Text (an empty Text value is
    still a value).

    Raises:
        UnsupportedKind: `kind` is not one of the five recognised kinds
        FieldTypeError: `raw` is present but invalid for the kind
    """
    field_kind = resolve_kind(kind)
    if raw is None:
        return None
    if field_kind is not FieldKind.TEXT and _is_blank(raw):
        return None
    value = _PARSERS[field_kind](raw, options)
    return ParsedValue(kind=field_kind, value=value)
