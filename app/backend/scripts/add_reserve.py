"""
Add a game reserve to the database from boundary vertices.

Vertices are given in map order as "lat,lon"; the polygon is stored in
PostgreSQL's (lon, lat) order and closed automatically.

Usage:
    python scripts/add_reserve.py --name "North Block" \
        --vertex=-19.01,29.10 --vertex=-19.05,29.20 --vertex=-19.10,29.12          # Dry-run (preview only)
    python scripts/add_reserve.py --name "North Block" --vertex ... --no-dry-run --yes  # Apply to database

Defaults to dry-run mode. Use --no-dry-run to write to database.
Use --yes to skip the confirmation prompt.
"""

import logging
import sys
from pathlib import Path
from typing import List

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy import text

from database.connection import get_session_factory
from geometry import polygon_text
from script_utils import confirm, get_arg_parser, log_dry_run_mode


logging.basicConfig(
    level=logging.INFO,
    format='%(levelname)s: %(message)s'
)
logger = logging.getLogger(__name__)


def parse_vertex(raw: str) -> dict:
    """Parse "lat,lon" into a {lat, lon} vertex."""
    parts = [p.strip() for p in raw.split(",")]
    if len(parts) != 2:
        raise ValueError(f"Vertex must be 'lat,lon': {raw!r}")
    return {"lat": float(parts[0]), "lon": float(parts[1])}


def build_boundary(raw_vertices: List[str]) -> str:
    """Turn command-line vertices into polygon text."""
    return polygon_text([parse_vertex(v) for v in raw_vertices])


def reserve_exists(session, name: str) -> bool:
    """Check if a reserve with this name already exists."""
    row = session.execute(
        text("SELECT reserve_id FROM game_reserve WHERE name = :name"),
        {"name": name}
    ).first()
    return row is not None


def insert_reserve(session, name: str, boundary: str) -> int:
    """Insert a new reserve and return its ID."""
    return session.execute(
        text("INSERT INTO game_reserve (name, boundary) VALUES (:name, CAST(:boundary AS polygon)) RETURNING reserve_id"),
        {"name": name, "boundary": boundary}
    ).scalar_one()


def main():
    parser = get_arg_parser(
        description="Add a game reserve from boundary vertices"
    )
    parser.add_argument(
        '--name', '-n',
        required=True,
        help='Name of the reserve to add'
    )
    parser.add_argument(
        '--vertex', '-v',
        action='append',
        default=[],
        help='Boundary vertex as "lat,lon" (repeat at least 3 times)'
    )
    args = parser.parse_args()
    log_dry_run_mode(args)

    try:
        boundary = build_boundary(args.vertex)
    except ValueError as e:
        logger.error(str(e))
        sys.exit(1)

    logger.info(f"{'DRY RUN - ' if args.dry_run else ''}Adding reserve: {args.name} {boundary}")

    SessionLocal = get_session_factory()
    with SessionLocal() as session:
        if reserve_exists(session, args.name):
            logger.error(f"Reserve '{args.name}' already exists!")
            sys.exit(1)

        if args.dry_run:
            logger.info(f"DRY RUN: Would add reserve '{args.name}'")
            return

        if not confirm(f"Add reserve '{args.name}'?", args):
            logger.info("Aborted.")
            return

        reserve_id = insert_reserve(session, args.name, boundary)
        session.commit()
        logger.info(f"Added reserve '{args.name}' with id={reserve_id}")


if __name__ == "__main__":
    main()
