import re
from datetime import datetime, timezone

import pytest

from core.identifiers import generate_asset_identifier, normalize_prefix, prefix_for_type_name


def test_generated_identifier_format():
    identifier = generate_asset_identifier("lap", now=datetime(2024, 5, 1, tzinfo=timezone.utc))
    assert re.fullmatch(r"LAP-2024-\d{8}", identifier)


def test_generated_identifier_uses_current_year_by_default():
    identifier = generate_asset_identifier("AST")
    assert identifier.startswith(f"AST-{datetime.now(timezone.utc).year}-")


@pytest.mark.parametrize("prefix", ["", "A", "ABCDE", "A1", "LÄP", "AB\n", None])
def test_invalid_prefixes(prefix):
    with pytest.raises(ValueError):
        normalize_prefix(prefix)


def test_prefix_from_type_name():
    assert prefix_for_type_name("Laptop", "AST") == "LAP"
    assert prefix_for_type_name("TV", "AST") == "TV"
    assert prefix_for_type_name("3D printer", "AST") == "DPR"
    assert prefix_for_type_name("4", "ast") == "AST"
