"""
Reserves Router - API endpoints for game reserves

Endpoints:
  GET    /api/reserves             - List reserves
  POST   /api/reserves             - Create reserve from polygon text or map points
  GET    /api/reserves/{id}        - Get specific reserve
  PUT    /api/reserves/{id}        - Replace reserve
  DELETE /api/reserves/{id}        - Delete reserve

Boundaries are PostgreSQL polygons. Clients may send either `boundary`
("((lon,lat),...)") or `points` ([{lat, lon}, ...], at least 3 vertices).
"""

import logging
import re
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import DBAPIError
from sqlalchemy.orm import Session

from database.connection import get_db
from database.queries import LIST_LIMIT, fetch_all, fetch_one, write_returning
from errors import error_response
from models import DeleteResult, ReserveCreate, ReserveRead, ReserveUpdate, with_polygon

logger = logging.getLogger(__name__)

router = APIRouter()

RESERVE_COLUMNS = "reserve_id, name, boundary::text AS boundary, created_at"

INVALID_GEOMETRY_PATTERN = re.compile(r"invalid input syntax for type (polygon|path|point)", re.IGNORECASE)
INVALID_POLYGON_MESSAGE = "Invalid polygon syntax. Expected ((x1,y1),(x2,y2),...) with numeric lon/lat."
SAMPLE_LENGTH = 120


def _invalid_polygon_response(exc: Exception, boundary: str):
    """400 response for PostgreSQL polygon parse errors, or None for any other failure."""
    if not INVALID_GEOMETRY_PATTERN.search(str(exc)):
        return None
    return error_response(
        status.HTTP_400_BAD_REQUEST,
        INVALID_POLYGON_MESSAGE,
        sample=(boundary or "")[:SAMPLE_LENGTH],
    )


@router.get("", response_model=List[ReserveRead])
def get_reserves(db: Session = Depends(get_db)):
    """Get the most recently added reserves"""
    try:
        rows = fetch_all(db, f"""
            SELECT {RESERVE_COLUMNS}
            FROM game_reserve
            ORDER BY reserve_id DESC
            LIMIT :limit
        """, {"limit": LIST_LIMIT})
    except Exception:
        logger.exception("reserves error")
        raise HTTPException(status_code=500, detail="Failed to fetch reserves")
    return [with_polygon(row) for row in rows]


@router.get("/{reserve_id}", response_model=ReserveRead)
def get_reserve(reserve_id: int, db: Session = Depends(get_db)):
    """Get a specific reserve by ID"""
    try:
        row = fetch_one(db, f"""
            SELECT {RESERVE_COLUMNS}
            FROM game_reserve
            WHERE reserve_id = :id
        """, {"id": reserve_id})
    except Exception:
        logger.exception("reserves error")
        raise HTTPException(status_code=500, detail="Failed to fetch reserves")

    if not row:
        raise HTTPException(status_code=404, detail="Not found")
    return with_polygon(row)


@router.post("", response_model=ReserveRead, status_code=status.HTTP_201_CREATED)
def create_reserve(reserve: ReserveCreate, db: Session = Depends(get_db)):
    """Create a new reserve"""
    try:
        row = write_returning(db, f"""
            INSERT INTO game_reserve (name, boundary)
            VALUES (:name, CAST(:boundary AS polygon))
            RETURNING {RESERVE_COLUMNS}
        """, {"name": reserve.name, "boundary": reserve.boundary})
    except DBAPIError as e:
        logger.exception("create reserve error")
        response = _invalid_polygon_response(e, reserve.boundary)
        if response is not None:
            return response
        raise HTTPException(status_code=500, detail="Failed to create reserve")
    except Exception:
        logger.exception("create reserve error")
        raise HTTPException(status_code=500, detail="Failed to create reserve")
    return with_polygon(row)


@router.put("/{reserve_id}", response_model=ReserveRead)
def update_reserve(reserve_id: int, reserve: ReserveUpdate, db: Session = Depends(get_db)):
    """Replace an existing reserve"""
    try:
        row = write_returning(db, f"""
            UPDATE game_reserve
            SET name = :name, boundary = CAST(:boundary AS polygon)
            WHERE reserve_id = :id
            RETURNING {RESERVE_COLUMNS}
        """, {"id": reserve_id, "name": reserve.name, "boundary": reserve.boundary})
    except DBAPIError as e:
        logger.exception("update reserve error")
        response = _invalid_polygon_response(e, reserve.boundary)
        if response is not None:
            return response
        raise HTTPException(status_code=500, detail="Failed to update reserve")
    except Exception:
        logger.exception("update reserve error")
        raise HTTPException(status_code=500, detail="Failed to update reserve")

    if not row:
        raise HTTPException(status_code=404, detail="Not found")
    return with_polygon(row)


@router.delete("/{reserve_id}", response_model=DeleteResult)
def delete_reserve(reserve_id: int, db: Session = Depends(get_db)):
    """Delete a reserve (quotas go with it, poaching incidents are detached)"""
    try:
        row = write_returning(
            db,
            "DELETE FROM game_reserve WHERE reserve_id = :id RETURNING reserve_id",
            {"id": reserve_id}
        )
    except Exception:
        logger.exception("delete reserve error")
        raise HTTPException(status_code=500, detail="Failed to delete reserve")

    if not row:
        raise HTTPException(status_code=404, detail="Not found")
    return {"ok": True, "id": reserve_id}
