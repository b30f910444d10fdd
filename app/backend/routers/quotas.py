"""
Quotas Router - API endpoints for annual hunting quotas

Endpoints:
  GET    /api/quotas               - List quotas (optionally ?year=&w_species_id=&reserve_id=)
  POST   /api/quotas               - Set a quota
  GET    /api/quotas/{id}          - Get specific quota
  PUT    /api/quotas/{id}          - Replace quota
  DELETE /api/quotas/{id}          - Delete quota
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from database.connection import get_db
from database.queries import LIST_LIMIT, build_filters, fetch_all, fetch_one, write_returning
from models import DeleteResult, QuotaCreate, QuotaRead, QuotaUpdate

logger = logging.getLogger(__name__)

router = APIRouter()

QUOTA_COLUMNS = "quota_id, year, w_species_id, reserve_id, quota"


@router.get("", response_model=List[QuotaRead])
def get_quotas(
    year: Optional[int] = Query(None, description="Only quotas for this year"),
    w_species_id: Optional[int] = Query(None, description="Only quotas for this species"),
    reserve_id: Optional[int] = Query(None, description="Only quotas for this reserve"),
    db: Session = Depends(get_db)
):
    """Get the most recently set quotas"""
    where_sql, params = build_filters({
        "year": year,
        "w_species_id": w_species_id,
        "reserve_id": reserve_id,
    })
    try:
        return fetch_all(db, f"""
            SELECT {QUOTA_COLUMNS}
            FROM annual_quota
            {where_sql}
            ORDER BY quota_id DESC
            LIMIT :limit
        """, {**params, "limit": LIST_LIMIT})
    except Exception:
        logger.exception("quotas error")
        raise HTTPException(status_code=500, detail="Failed to fetch quotas")


@router.get("/{quota_id}", response_model=QuotaRead)
def get_quota(quota_id: int, db: Session = Depends(get_db)):
    """Get a specific quota by ID"""
    try:
        row = fetch_one(db, f"SELECT {QUOTA_COLUMNS} FROM annual_quota WHERE quota_id = :id", {"id": quota_id})
    except Exception:
        logger.exception("quotas error")
        raise HTTPException(status_code=500, detail="Failed to fetch quotas")

    if not row:
        raise HTTPException(status_code=404, detail="Not found")
    return row


@router.post("", response_model=QuotaRead, status_code=status.HTTP_201_CREATED)
def create_quota(quota: QuotaCreate, db: Session = Depends(get_db)):
    """Set a new annual quota"""
    try:
        return write_returning(db, f"""
            INSERT INTO annual_quota (year, w_species_id, reserve_id, quota)
            VALUES (:year, :w_species_id, :reserve_id, :quota)
            RETURNING {QUOTA_COLUMNS}
        """, quota.model_dump())
    except Exception:
        logger.exception("create quota error")
        raise HTTPException(status_code=500, detail="Failed to create quota")


@router.put("/{quota_id}", response_model=QuotaRead)
def update_quota(quota_id: int, quota: QuotaUpdate, db: Session = Depends(get_db)):
    """Replace an existing quota"""
    try:
        row = write_returning(db, f"""
            UPDATE annual_quota
            SET year = :year, w_species_id = :w_species_id, reserve_id = :reserve_id, quota = :quota
            WHERE quota_id = :id
            RETURNING {QUOTA_COLUMNS}
        """, {**quota.model_dump(), "id": quota_id})
    except Exception:
        logger.exception("update quota error")
        raise HTTPException(status_code=500, detail="Failed to update quota")

    if not row:
        raise HTTPException(status_code=404, detail="Not found")
    return row


@router.delete("/{quota_id}", response_model=DeleteResult)
def delete_quota(quota_id: int, db: Session = Depends(get_db)):
    """Delete a quota"""
    try:
        row = write_returning(
            db,
            "DELETE FROM annual_quota WHERE quota_id = :id RETURNING quota_id",
            {"id": quota_id}
        )
    except Exception:
        logger.exception("delete quota error")
        raise HTTPException(status_code=500, detail="Failed to delete quota")

    if not row:
        raise HTTPException(status_code=404, detail="Not found")
    return {"ok": True, "id": quota_id}
