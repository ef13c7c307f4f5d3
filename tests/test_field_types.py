from datetime import date, datetime
from decimal import Decimal

import pytest

from core.errors import UnsupportedKind
from core.field_types import FieldKind, FieldTypeError, resolve_kind, validate


def test_text_accepts_any_string_including_empty():
    assert validate("Text", "hello").value == "hello"
    parsed = validate("Text", "")
    assert parsed is not None
    assert parsed.value == ""
    assert parsed.slot == "text_value"


def test_text_rejects_non_strings():
    with pytest.raises(FieldTypeError):
        validate("Text", 42)


@pytest.mark.parametrize("raw, expected", [
    (16, Decimal("16")),
    (2.5, Decimal("2.5")),
    ("1200.50", Decimal("1200.50")),
    (" -3 ", Decimal("-3")),
    (Decimal("0.1"), Decimal("0.1")),
])
def test_number_parses_to_exact_decimal(raw, expected):
    parsed = validate("Number", raw)
    assert parsed.kind is FieldKind.NUMBER
    assert parsed.value == expected
    assert parsed.slot == "number_value"


@pytest.mark.parametrize("raw", [True, "abc", "NaN", "Infinity", float("inf"), float("nan"), [1]])
def test_number_rejects_non_numbers(raw):
    with pytest.raises(FieldTypeError):
        validate("Number", raw)


def test_date_accepts_iso_strings_and_dates():
    assert validate("Date", "2024-02-29").value == date(2024, 2, 29)
    assert validate("Date", date(2023, 1, 1)).value == date(2023, 1, 1)


@pytest.mark.parametrize("raw", [
    "2023-02-29", "31/12/2024", "yesterday", 20240101,
    "20240115", "2024-W03-1", "2024-1-5", "2024-01-15T00:00",
])
def test_date_rejects_invalid_calendar_dates(raw):
    with pytest.raises(FieldTypeError):
        validate("Date", raw)


def test_date_rejects_datetimes():
    with pytest.raises(FieldTypeError):
        validate("Date", datetime(2024, 1, 1, 12, 30))


@pytest.mark.parametrize("raw, expected", [(True, True), (False, False), ("true", True), ("false", False)])
def test_boolean_accepts_bools_and_exact_strings(raw, expected):
    assert validate("Boolean", raw).value is expected


@pytest.mark.parametrize("raw", ["True", "yes", 1, 0])
def test_boolean_rejects_anything_else(raw):
    with pytest.raises(FieldTypeError):
        validate("Boolean", raw)


def test_dropdown_requires_exact_membership():
    options = ["New", "Used", "Refurbished"]
    parsed = validate("Dropdown", "Used", options)
    assert parsed.value == "Used"
    assert parsed.slot == "text_value"
    with pytest.raises(FieldTypeError):
        validate("Dropdown", "used", options)
    with pytest.raises(FieldTypeError):
        validate("Dropdown", "Broken", options)


@pytest.mark.parametrize("kind", ["Number", "Date", "Boolean", "Dropdown"])
def test_blank_input_is_absent_for_non_text_kinds(kind):
    assert validate(kind, "", ["New"]) is None
    assert validate(kind, "   ", ["New"]) is None
    assert validate(kind, None, ["New"]) is None


def test_none_is_absent_for_text():
    assert validate("Text", None) is None


def test_unknown_kind_is_rejected():
    with pytest.raises(UnsupportedKind) as exc_info:
        validate("Currency", "12")
    assert exc_info.value.details == {"kind": "Currency"}
    with pytest.raises(UnsupportedKind):
        resolve_kind("text")
