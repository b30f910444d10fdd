"""
Sightings Router - API endpoints for species sightings

Endpoints:
  GET    /api/sightings            - List sightings (optionally ?w_species_id=)
  POST   /api/sightings            - Record a sighting at lat/lon
  GET    /api/sightings/{id}       - Get specific sighting
  PUT    /api/sightings/{id}       - Replace sighting
  DELETE /api/sightings/{id}       - Delete sighting

Locations are stored as PostgreSQL points in (lon, lat) order; responses carry
both the raw point text and the parsed lat/lon for the map.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from database.connection import get_db
from database.queries import LIST_LIMIT, build_filters, fetch_all, fetch_one, write_returning
from models import DeleteResult, SightingCreate, SightingRead, SightingUpdate, with_point

logger = logging.getLogger(__name__)

router = APIRouter()

SIGHTING_COLUMNS = "sighting_id, w_species_id, sighting_date, location::text AS location, notes, created_at"


def _params(sighting: SightingCreate) -> dict:
    return {
        "w_species_id": sighting.w_species_id,
        "sighting_date": sighting.sighting_date,
        "lon": sighting.lon,
        "lat": sighting.lat,
        "notes": sighting.notes,
    }


@router.get("", response_model=List[SightingRead])
def get_sightings(
    w_species_id: Optional[int] = Query(None, description="Only sightings of this species"),
    db: Session = Depends(get_db)
):
    """Get the most recent sightings"""
    where_sql, params = build_filters({"w_species_id": w_species_id})
    try:
        rows = fetch_all(db, f"""
            SELECT {SIGHTING_COLUMNS}
            FROM sighting
            {where_sql}
            ORDER BY sighting_id DESC
            LIMIT :limit
        """, {**params, "limit": LIST_LIMIT})
    except Exception:
        logger.exception("sightings error")
        raise HTTPException(status_code=500, detail="Failed to fetch sightings")
    return [with_point(row) for row in rows]


@router.get("/{sighting_id}", response_model=SightingRead)
def get_sighting(sighting_id: int, db: Session = Depends(get_db)):
    """Get a specific sighting by ID"""
    try:
        row = fetch_one(db, f"""
            SELECT {SIGHTING_COLUMNS}
            FROM sighting
            WHERE sighting_id = :id
        """, {"id": sighting_id})
    except Exception:
        logger.exception("sightings error")
        raise HTTPException(status_code=500, detail="Failed to fetch sightings")

    if not row:
        raise HTTPException(status_code=404, detail="Not found")
    return with_point(row)


@router.post("", response_model=SightingRead, status_code=status.HTTP_201_CREATED)
def create_sighting(sighting: SightingCreate, db: Session = Depends(get_db)):
    """Record a new sighting"""
    try:
        row = write_returning(db, f"""
            INSERT INTO sighting (w_species_id, sighting_date, location, notes)
            VALUES (:w_species_id, :sighting_date, point(:lon, :lat), :notes)
            RETURNING {SIGHTING_COLUMNS}
        """, _params(sighting))
    except Exception:
        logger.exception("create sighting error")
        raise HTTPException(status_code=500, detail="Failed to create sighting")
    return with_point(row)


@router.put("/{sighting_id}", response_model=SightingRead)
def update_sighting(sighting_id: int, sighting: SightingUpdate, db: Session = Depends(get_db)):
    """Replace an existing sighting"""
    try:
        row = write_returning(db, f"""
            UPDATE sighting
            SET w_species_id = :w_species_id,
                sighting_date = :sighting_date,
                location = point(:lon, :lat),
                notes = :notes
            WHERE sighting_id = :id
            RETURNING {SIGHTING_COLUMNS}
        """, {**_params(sighting), "id": sighting_id})
    except Exception:
        logger.exception("update sighting error")
        raise HTTPException(status_code=500, detail="Failed to update sighting")

    if not row:
        raise HTTPException(status_code=404, detail="Not found")
    return with_point(row)


@router.delete("/{sighting_id}", response_model=DeleteResult)
def delete_sighting(sighting_id: int, db: Session = Depends(get_db)):
    """Delete a sighting"""
    try:
        row = write_returning(
            db,
            "DELETE FROM sighting WHERE sighting_id = :id RETURNING sighting_id",
            {"id": sighting_id}
        )
    except Exception:
        logger.exception("delete sighting error")
        raise HTTPException(status_code=500, detail="Failed to delete sighting")

    if not row:
        raise HTTPException(status_code=404, detail="Not found")
    return {"ok": True, "id": sighting_id}
