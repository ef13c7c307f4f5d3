"""Initial asset inventory schema

Revision ID: 001_initial_schema
Revises:
Create Date: 2025-01-01 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '001_initial_schema'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _created_at() -> sa.Column:
    return sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now())


def upgrade() -> None:
    op.create_table(
        'workspaces',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        _created_at(),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_workspaces_id', 'workspaces', ['id'], unique=False)

    # Workspace lookup tables
    op.create_table(
        'statuses',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('workspace_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('color', sa.String(20), nullable=False, server_default='#6B7280'),
        _created_at(),
        sa.ForeignKeyConstraint(['workspace_id'], ['workspaces.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_statuses_id', 'statuses', ['id'], unique=False)
    op.create_index('ix_statuses_workspace_id', 'statuses', ['workspace_id'], unique=False)

    op.create_table(
        'locations',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('workspace_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        _created_at(),
        sa.ForeignKeyConstraint(['workspace_id'], ['workspaces.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_locations_id', 'locations', ['id'], unique=False)
    op.create_index('ix_locations_workspace_id', 'locations', ['workspace_id'], unique=False)

    op.create_table(
        'assignments',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('workspace_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('details', sa.Text(), nullable=True),
        _created_at(),
        sa.ForeignKeyConstraint(['workspace_id'], ['workspaces.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_assignments_id', 'assignments', ['id'], unique=False)
    op.create_index('ix_assignments_workspace_id', 'assignments', ['workspace_id'], unique=False)

    # Asset types and their custom-field schema
    op.create_table(
        'asset_types',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('workspace_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('icon', sa.String(50), nullable=False, server_default='dashboard'),
        _created_at(),
        sa.ForeignKeyConstraint(['workspace_id'], ['workspaces.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_asset_types_id', 'asset_types', ['id'], unique=False)
    op.create_index('ix_asset_types_workspace_id', 'asset_types', ['workspace_id'], unique=False)

    op.create_table(
        'custom_field_definitions',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('asset_type_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('kind', sa.String(20), nullable=False),
        sa.Column('is_required', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('is_filterable', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('is_visible_on_card', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('dropdown_options', sa.JSON(), nullable=True),
        sa.Column('position', sa.Integer(), nullable=False, server_default='0'),
        _created_at(),
        sa.ForeignKeyConstraint(['asset_type_id'], ['asset_types.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sqlite_autoincrement=True,
    )
    op.create_index('ix_custom_field_definitions_id', 'custom_field_definitions', ['id'], unique=False)
    op.create_index('ix_custom_field_definitions_asset_type_id', 'custom_field_definitions', ['asset_type_id'], unique=False)

    op.create_table(
        'assets',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('workspace_id', sa.Integer(), nullable=False),
        sa.Column('asset_type_id', sa.Integer(), nullable=False),
        sa.Column('unique_identifier', sa.String(100), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('cost', sa.Numeric(14, 2), nullable=True),
        sa.Column('date_acquired', sa.Date(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('is_archived', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('current_status_id', sa.Integer(), nullable=True),
        sa.Column('current_location_id', sa.Integer(), nullable=True),
        sa.Column('current_assignment_id', sa.Integer(), nullable=True),
        _created_at(),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['workspace_id'], ['workspaces.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['asset_type_id'], ['asset_types.id']),
        sa.ForeignKeyConstraint(['current_status_id'], ['statuses.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['current_location_id'], ['locations.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['current_assignment_id'], ['assignments.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_assets_id', 'assets', ['id'], unique=False)
    op.create_index('ix_assets_workspace_id', 'assets', ['workspace_id'], unique=False)
    op.create_index('ix_assets_asset_type_id', 'assets', ['asset_type_id'], unique=False)
    op.create_index('ix_assets_unique_identifier', 'assets', ['unique_identifier'], unique=False)

    # Values keep field_definition_id without a FK so deleting a definition orphans them
    op.create_table(
        'asset_custom_field_values',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('asset_id', sa.Integer(), nullable=False),
        sa.Column('field_definition_id', sa.Integer(), nullable=False),
        sa.Column('value_kind', sa.String(20), nullable=False),
        sa.Column('text_value', sa.Text(), nullable=True),
        sa.Column('number_value', sa.String(64), nullable=True),
        sa.Column('date_value', sa.Date(), nullable=True),
        sa.Column('boolean_value', sa.Boolean(), nullable=True),
        _created_at(),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['asset_id'], ['assets.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('asset_id', 'field_definition_id', name='uq_asset_field')
    )
    op.create_index('ix_asset_custom_field_values_id', 'asset_custom_field_values', ['id'], unique=False)
    op.create_index('ix_asset_custom_field_values_asset_id', 'asset_custom_field_values', ['asset_id'], unique=False)
    op.create_index('ix_asset_custom_field_values_field_definition_id', 'asset_custom_field_values', ['field_definition_id'], unique=False)

    op.create_table(
        'asset_logs',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('asset_id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.String(100), nullable=True),
        sa.Column('action_type', sa.String(30), nullable=False),
        sa.Column('timestamp', sa.DateTime(timezone=True), nullable=False),
        sa.Column('details', sa.JSON(), nullable=True),
        sa.ForeignKeyConstraint(['asset_id'], ['assets.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_asset_logs_id', 'asset_logs', ['id'], unique=False)
    op.create_index('ix_asset_logs_asset_id', 'asset_logs', ['asset_id'], unique=False)
    # History is read newest-first per asset
    op.create_index('ix_asset_logs_asset_timestamp', 'asset_logs', ['asset_id', 'timestamp'], unique=False)


def downgrade() -> None:
    op.drop_index('ix_asset_logs_asset_timestamp', table_name='asset_logs')
    op.drop_index('ix_asset_logs_asset_id', table_name='asset_logs')
    op.drop_index('ix_asset_logs_id', table_name='asset_logs')
    op.drop_table('asset_logs')

    op.drop_index('ix_asset_custom_field_values_field_definition_id', table_name='asset_custom_field_values')
    op.drop_index('ix_asset_custom_field_values_asset_id', table_name='asset_custom_field_values')
    op.drop_index('ix_asset_custom_field_values_id', table_name='asset_custom_field_values')
    op.drop_table('asset_custom_field_values')

    op.drop_index('ix_assets_unique_identifier', table_name='assets')
    op.drop_index('ix_assets_asset_type_id', table_name='assets')
    op.drop_index('ix_assets_workspace_id', table_name='assets')
    op.drop_index('ix_assets_id', table_name='assets')
    op.drop_table('assets')

    op.drop_index('ix_custom_field_definitions_asset_type_id', table_name='custom_field_definitions')
    op.drop_index('ix_custom_field_definitions_id', table_name='custom_field_definitions')
    op.drop_table('custom_field_definitions')

    op.drop_index('ix_asset_types_workspace_id', table_name='asset_types')
    op.drop_index('ix_asset_types_id', table_name='asset_types')
    op.drop_table('asset_types')

    for table in ('assignments', 'locations', 'statuses'):
        op.drop_index(f'ix_{table}_workspace_id', table_name=table)
        op.drop_index(f'ix_{table}_id', table_name=table)
        op.drop_table(table)

    op.drop_index('ix_workspaces_id', table_name='workspaces')
    op.drop_table('workspaces')
