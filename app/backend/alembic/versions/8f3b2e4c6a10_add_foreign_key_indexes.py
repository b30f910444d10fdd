"""add_foreign_key_indexes

Revision ID: 8f3b2e4c6a10
Revises: 5d1c0a7e9b21
Create Date: 2025-09-21

"""
from typing import Sequence, Union

from alembic import op


# revision identifiers, used by Alembic.
revision: str = '8f3b2e4c6a10'
down_revision: Union[str, Sequence[str], None] = '5d1c0a7e9b21'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

INDEXES = [
    ("idx_sighting_w_species_id", "sighting", "w_species_id"),
    ("idx_licence_hunter_id", "licence", "hunter_id"),
    ("idx_poaching_incident_reserve_id", "poaching_incident", "reserve_id"),
    ("idx_annual_quota_year", "annual_quota", "year"),
    ("idx_annual_quota_w_species_id", "annual_quota", "w_species_id"),
    ("idx_annual_quota_reserve_id", "annual_quota", "reserve_id"),
]


def upgrade() -> None:
    """Index the columns the list endpoints filter on."""
    for name, table, column in INDEXES:
        op.execute(f"CREATE INDEX IF NOT EXISTS {name} ON {table}({column});")


def downgrade() -> None:
    """Drop the filter indexes."""
    for name, _, _ in reversed(INDEXES):
        op.execute(f"DROP INDEX IF EXISTS {name};")
