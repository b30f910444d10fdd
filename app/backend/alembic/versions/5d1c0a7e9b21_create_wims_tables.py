"""create_wims_tables

Revision ID: 5d1c0a7e9b21
Revises:
Create Date: 2025-09-14

"""
from typing import Sequence, Union

from alembic import op


# revision identifiers, used by Alembic.
revision: str = '5d1c0a7e9b21'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the species, reserve, hunting and anti-poaching tables."""

    op.execute("""
        CREATE TABLE wildlife_species (
            w_species_id SERIAL PRIMARY KEY,
            name TEXT NOT NULL,
            population INTEGER,
            created_at TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP
        );
    """)

    # Native PostgreSQL geometric types; points and polygon vertices are (lon, lat)
    op.execute("""
        CREATE TABLE sighting (
            sighting_id SERIAL PRIMARY KEY,
            w_species_id INTEGER NOT NULL REFERENCES wildlife_species(w_species_id) ON DELETE CASCADE,
            sighting_date DATE NOT NULL,
            location POINT NOT NULL,
            notes TEXT,
            created_at TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP
        );
    """)

    op.execute("""
        CREATE TABLE game_reserve (
            reserve_id SERIAL PRIMARY KEY,
            name TEXT NOT NULL,
            boundary POLYGON NOT NULL,
            created_at TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP
        );
    """)

    op.execute("""
        CREATE TABLE hunter (
            hunter_id SERIAL PRIMARY KEY,
            name TEXT NOT NULL,
            address TEXT,
            created_at TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP
        );
    """)

    op.execute("""
        CREATE TABLE licence (
            licence_id SERIAL PRIMARY KEY,
            hunter_id INTEGER NOT NULL REFERENCES hunter(hunter_id) ON DELETE CASCADE,
            issue_date DATE NOT NULL,
            expiry_date DATE NOT NULL,
            created_at TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP
        );
    """)

    op.execute("""
        CREATE TABLE poaching_incident (
            incident_id SERIAL PRIMARY KEY,
            incident_date DATE NOT NULL,
            location POINT NOT NULL,
            reserve_id INTEGER REFERENCES game_reserve(reserve_id) ON DELETE SET NULL,
            description TEXT,
            created_at TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP
        );
    """)

    op.execute("""
        CREATE TABLE annual_quota (
            quota_id SERIAL PRIMARY KEY,
            year INTEGER NOT NULL,
            w_species_id INTEGER NOT NULL REFERENCES wildlife_species(w_species_id) ON DELETE CASCADE,
            reserve_id INTEGER NOT NULL REFERENCES game_reserve(reserve_id) ON DELETE CASCADE,
            quota INTEGER NOT NULL,
            CONSTRAINT annual_quota_quota_check CHECK (quota >= 0)
        );
    """)


def downgrade() -> None:
    """Drop all tables, dependants first."""
    op.execute("DROP TABLE IF EXISTS annual_quota;")
    op.execute("DROP TABLE IF EXISTS poaching_incident;")
    op.execute("DROP TABLE IF EXISTS licence;")
    op.execute("DROP TABLE IF EXISTS hunter;")
    op.execute("DROP TABLE IF EXISTS game_reserve;")
    op.execute("DROP TABLE IF EXISTS sighting;")
    op.execute("DROP TABLE IF EXISTS wildlife_species;")
