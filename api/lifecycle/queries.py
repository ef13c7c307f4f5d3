# api/lifecycle/queries.py
"""
Compare-and-set statements for lifecycle pointers.
"""
from sqlalchemy import update

from db_models.asset import Asset


def compare_and_set_pointer(
    asset_id: int,
    column_name: str,
    expected: int | None,
    new_value: int | None,
):
    """
    UPDATE the pointer only if it still holds `expected` and the asset is
    not archived. A rowcount of 0 means someone else got there first.
    """
    column = getattr(Asset, column_name)
    current_matches = column.is_(None) if expected is None else column == expected
    return (
        update(Asset)
        .where(
            Asset.id == asset_id,
            Asset.is_archived == False,
            current_matches,
        )
        .values({column_name: new_value})
        .execution_options(synchronize_session=False)
    )
