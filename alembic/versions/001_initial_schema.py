"""Initial asset management schema

Revision ID: 001_initial_schema
Revises:
Create Date: 2025-10-01 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '001_initial_schema'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        'business_units',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('code', sa.String(50), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default='true'),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_business_units_id', 'business_units', ['id'], unique=False)
    op.create_index('ix_business_units_code', 'business_units', ['code'], unique=True)

    op.create_table(
        'locations',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('business_unit_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('floor', sa.String(50), nullable=True),
        sa.Column('room', sa.String(100), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['business_unit_id'], ['business_units.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_locations_id', 'locations', ['id'], unique=False)
    op.create_index('ix_locations_business_unit_id', 'locations', ['business_unit_id'], unique=False)

    op.create_table(
        'asset_categories',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('code', sa.String(50), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('useful_life', sa.Integer(), nullable=False, server_default='0'),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_asset_categories_id', 'asset_categories', ['id'], unique=False)
    op.create_index('ix_asset_categories_code', 'asset_categories', ['code'], unique=True)

    op.create_table(
        'employees',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('employee_code', sa.String(50), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('position', sa.String(100), nullable=True),
        sa.Column('department', sa.String(100), nullable=True),
        sa.Column('business_unit_id', sa.Integer(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default='true'),
        *_timestamps(),
        sa.ForeignKeyConstraint(['business_unit_id'], ['business_units.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_employees_id', 'employees', ['id'], unique=False)
    op.create_index('ix_employees_employee_code', 'employees', ['employee_code'], unique=True)
    op.create_index('ix_employees_business_unit_id', 'employees', ['business_unit_id'], unique=False)

    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('hashed_password', sa.String(255), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('business_unit_id', sa.Integer(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default='true'),
        *_timestamps(),
        sa.Column('last_login', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['business_unit_id'], ['business_units.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_users_id', 'users', ['id'], unique=False)
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'assets',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('asset_code', sa.String(100), nullable=False),
        sa.Column('asset_name', sa.String(255), nullable=False),
        sa.Column('category_id', sa.Integer(), nullable=False),
        sa.Column('asset_type', sa.String(20), nullable=False),
        sa.Column('brand', sa.String(100), nullable=True),
        sa.Column('model', sa.String(100), nullable=True),
        sa.Column('serial_number', sa.String(100), nullable=True),
        sa.Column('purchase_date', sa.Date(), nullable=True),
        sa.Column('purchase_price', sa.Numeric(18, 2), nullable=True),
        sa.Column('business_unit_id', sa.Integer(), nullable=False),
        sa.Column('location_id', sa.Integer(), nullable=False),
        sa.Column('condition', sa.String(20), nullable=False),
        sa.Column('status', sa.String(20), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['category_id'], ['asset_categories.id']),
        sa.ForeignKeyConstraint(['business_unit_id'], ['business_units.id']),
        sa.ForeignKeyConstraint(['location_id'], ['locations.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_assets_id', 'assets', ['id'], unique=False)
    op.create_index('ix_assets_asset_code', 'assets', ['asset_code'], unique=True)
    op.create_index('ix_assets_category_id', 'assets', ['category_id'], unique=False)
    op.create_index('ix_assets_business_unit_id', 'assets', ['business_unit_id'], unique=False)
    op.create_index('ix_assets_location_id', 'assets', ['location_id'], unique=False)
    op.create_index('ix_assets_status', 'assets', ['status'], unique=False)


def downgrade() -> None:
    for index in (
        'ix_assets_status',
        'ix_assets_location_id',
        'ix_assets_business_unit_id',
        'ix_assets_category_id',
        'ix_assets_asset_code',
        'ix_assets_id',
    ):
        op.drop_index(index, table_name='assets')
    op.drop_table('assets')

    op.drop_index('ix_users_email', table_name='users')
    op.drop_index('ix_users_id', table_name='users')
    op.drop_table('users')

    op.drop_index('ix_employees_business_unit_id', table_name='employees')
    op.drop_index('ix_employees_employee_code', table_name='employees')
    op.drop_index('ix_employees_id', table_name='employees')
    op.drop_table('employees')

    op.drop_index('ix_asset_categories_code', table_name='asset_categories')
    op.drop_index('ix_asset_categories_id', table_name='asset_categories')
    op.drop_table('asset_categories')

    op.drop_index('ix_locations_business_unit_id', table_name='locations')
    op.drop_index('ix_locations_id', table_name='locations')
    op.drop_table('locations')

    op.drop_index('ix_business_units_code', table_name='business_units')
    op.drop_index('ix_business_units_id', table_name='business_units')
    op.drop_table('business_units')
