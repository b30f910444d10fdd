"""
System Router - API index, database ping and dashboard counts

Endpoints:
  GET /api            - API name and version
  GET /api/db/ping    - Database connectivity check
  GET /api/stats      - Row counts for the dashboard tiles
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from config import API_NAME, API_VERSION
from database.connection import get_db, ping
from database.queries import fetch_one
from errors import error_response
from models import StatsRead

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("")
async def api_root():
    """API name and version"""
    return {"name": API_NAME, "version": API_VERSION}


@router.get("/db/ping")
def db_ping(db: Session = Depends(get_db)):
    """Check that the database answers"""
    try:
        now = ping(db)
    except Exception:
        logger.exception("DB ping failed")
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "DB connection failed", ok=False)
    return {"ok": True, "now": now}


@router.get("/stats", response_model=StatsRead)
def get_stats(db: Session = Depends(get_db)):
    """Row counts of every table, for the dashboard tiles"""
    try:
        return fetch_one(db, """
            SELECT
                (SELECT COUNT(*) FROM wildlife_species)::int AS species,
                (SELECT COUNT(*) FROM sighting)::int AS sightings,
                (SELECT COUNT(*) FROM game_reserve)::int AS reserves,
                (SELECT COUNT(*) FROM hunter)::int AS hunters,
                (SELECT COUNT(*) FROM licence)::int AS licences,
                (SELECT COUNT(*) FROM poaching_incident)::int AS poaching,
                (SELECT COUNT(*) FROM annual_quota)::int AS quotas
        """)
    except Exception:
        logger.exception("stats error")
        raise HTTPException(status_code=500, detail="Failed to fetch stats")
