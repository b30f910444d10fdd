"""
Licences Router - API endpoints for hunting licences

Endpoints:
  GET    /api/licences             - List licences (optionally ?hunter_id=)
  POST   /api/licences             - Issue licence
  GET    /api/licences/{id}        - Get specific licence
  PUT    /api/licences/{id}        - Replace licence
  DELETE /api/licences/{id}        - Revoke (delete) licence
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from database.connection import get_db
from database.queries import LIST_LIMIT, build_filters, fetch_all, fetch_one, write_returning
from models import DeleteResult, LicenceCreate, LicenceRead, LicenceUpdate

logger = logging.getLogger(__name__)

router = APIRouter()

LICENCE_COLUMNS = "licence_id, hunter_id, issue_date, expiry_date, created_at"


@router.get("", response_model=List[LicenceRead])
def get_licences(
    hunter_id: Optional[int] = Query(None, description="Only licences held by this hunter"),
    db: Session = Depends(get_db)
):
    """Get the most recently issued licences"""
    where_sql, params = build_filters({"hunter_id": hunter_id})
    try:
        return fetch_all(db, f"""
            SELECT {LICENCE_COLUMNS}
            FROM licence
            {where_sql}
            ORDER BY licence_id DESC
            LIMIT :limit
        """, {**params, "limit": LIST_LIMIT})
    except Exception:
        logger.exception("licences error")
        raise HTTPException(status_code=500, detail="Failed to fetch licences")


@router.get("/{licence_id}", response_model=LicenceRead)
def get_licence(licence_id: int, db: Session = Depends(get_db)):
    """Get a specific licence by ID"""
    try:
        row = fetch_one(db, f"SELECT {LICENCE_COLUMNS} FROM licence WHERE licence_id = :id", {"id": licence_id})
    except Exception:
        logger.exception("licences error")
        raise HTTPException(status_code=500, detail="Failed to fetch licences")

    if not row:
        raise HTTPException(status_code=404, detail="Not found")
    return row


@router.post("", response_model=LicenceRead, status_code=status.HTTP_201_CREATED)
def create_licence(licence: LicenceCreate, db: Session = Depends(get_db)):
    """Issue a new licence"""
    try:
        return write_returning(db, f"""
            INSERT INTO licence (hunter_id, issue_date, expiry_date)
            VALUES (:hunter_id, :issue_date, :expiry_date)
            RETURNING {LICENCE_COLUMNS}
        """, licence.model_dump())
    except Exception:
        logger.exception("create licence error")
        raise HTTPException(status_code=500, detail="Failed to create licence")


@router.put("/{licence_id}", response_model=LicenceRead)
def update_licence(licence_id: int, licence: LicenceUpdate, db: Session = Depends(get_db)):
    """Replace an existing licence"""
    try:
        row = write_returning(db, f"""
            UPDATE licence
            SET hunter_id = :hunter_id, issue_date = :issue_date, expiry_date = :expiry_date
            WHERE licence_id = :id
            RETURNING {LICENCE_COLUMNS}
        """, {**licence.model_dump(), "id": licence_id})
    except Exception:
        logger.exception("update licence error")
        raise HTTPException(status_code=500, detail="Failed to update licence")

    if not row:
        raise HTTPException(status_code=404, detail="Not found")
    return row


@router.delete("/{licence_id}", response_model=DeleteResult)
def delete_licence(licence_id: int, db: Session = Depends(get_db)):
    """Delete a licence"""
    try:
        row = write_returning(
            db,
            "DELETE FROM licence WHERE licence_id = :id RETURNING licence_id",
            {"id": licence_id}
        )
    except Exception:
        logger.exception("delete licence error")
        raise HTTPException(status_code=500, detail="Failed to delete licence")

    if not row:
        raise HTTPException(status_code=404, detail="Not found")
    return {"ok": True, "id": licence_id}
