"""
Poaching Router - API endpoints for poaching incident reports

Endpoints:
  GET    /api/poaching             - List incidents (optionally ?reserve_id=)
  POST   /api/poaching             - Report incident at lat/lon
  GET    /api/poaching/{id}        - Get specific incident
  PUT    /api/poaching/{id}        - Replace incident
  DELETE /api/poaching/{id}        - Delete incident
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from database.connection import get_db
from database.queries import LIST_LIMIT, build_filters, fetch_all, fetch_one, write_returning
from models import DeleteResult, PoachingCreate, PoachingRead, PoachingUpdate, with_point

logger = logging.getLogger(__name__)

router = APIRouter()

INCIDENT_COLUMNS = "incident_id, incident_date, location::text AS location, reserve_id, description, created_at"


def _params(incident: PoachingCreate) -> dict:
    return {
        "incident_date": incident.incident_date,
        "lon": incident.lon,
        "lat": incident.lat,
        "reserve_id": incident.reserve_id,
        "description": incident.description,
    }


@router.get("", response_model=List[PoachingRead])
def get_poaching_incidents(
    reserve_id: Optional[int] = Query(None, description="Only incidents inside this reserve"),
    db: Session = Depends(get_db)
):
    """Get the most recently reported incidents"""
    where_sql, params = build_filters({"reserve_id": reserve_id})
    try:
        rows = fetch_all(db, f"""
            SELECT {INCIDENT_COLUMNS}
            FROM poaching_incident
            {where_sql}
            ORDER BY incident_id DESC
            LIMIT :limit
        """, {**params, "limit": LIST_LIMIT})
    except Exception:
        logger.exception("poaching error")
        raise HTTPException(status_code=500, detail="Failed to fetch poaching incidents")
    return [with_point(row) for row in rows]


@router.get("/{incident_id}", response_model=PoachingRead)
def get_poaching_incident(incident_id: int, db: Session = Depends(get_db)):
    """Get a specific incident by ID"""
    try:
        row = fetch_one(db, f"""
            SELECT {INCIDENT_COLUMNS}
            FROM poaching_incident
            WHERE incident_id = :id
        """, {"id": incident_id})
    except Exception:
        logger.exception("poaching error")
        raise HTTPException(status_code=500, detail="Failed to fetch poaching incidents")

    if not row:
        raise HTTPException(status_code=404, detail="Not found")
    return with_point(row)


@router.post("", response_model=PoachingRead, status_code=status.HTTP_201_CREATED)
def create_poaching_incident(incident: PoachingCreate, db: Session = Depends(get_db)):
    """Report a new poaching incident"""
    try:
        row = write_returning(db, f"""
            INSERT INTO poaching_incident (incident_date, location, reserve_id, description)
            VALUES (:incident_date, point(:lon, :lat), :reserve_id, :description)
            RETURNING {INCIDENT_COLUMNS}
        """, _params(incident))
    except Exception:
        logger.exception("create poaching error")
        raise HTTPException(status_code=500, detail="Failed to create poaching incident")
    return with_point(row)


@router.put("/{incident_id}", response_model=PoachingRead)
def update_poaching_incident(incident_id: int, incident: PoachingUpdate, db: Session = Depends(get_db)):
    """Replace an existing incident"""
    try:
        row = write_returning(db, f"""
            UPDATE poaching_incident
            SET incident_date = :incident_date,
                location = point(:lon, :lat),
                reserve_id = :reserve_id,
                description = :description
            WHERE incident_id = :id
            RETURNING {INCIDENT_COLUMNS}
        """, {**_params(incident), "id": incident_id})
    except Exception:
        logger.exception("update poaching error")
        raise HTTPException(status_code=500, detail="Failed to update poaching incident")

    if not row:
        raise HTTPException(status_code=404, detail="Not found")
    return with_point(row)


@router.delete("/{incident_id}", response_model=DeleteResult)
def delete_poaching_incident(incident_id: int, db: Session = Depends(get_db)):
    """Delete an incident"""
    try:
        row = write_returning(
            db,
            "DELETE FROM poaching_incident WHERE incident_id = :id RETURNING incident_id",
            {"id": incident_id}
        )
    except Exception:
        logger.exception("delete poaching error")
        raise HTTPException(status_code=500, detail="Failed to delete poaching incident")

    if not row:
        raise HTTPException(status_code=404, detail="Not found")
    return {"ok": True, "id": incident_id}
