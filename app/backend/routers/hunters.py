"""
Hunters Router - API endpoints for registered hunters

Endpoints:
  GET    /api/hunters              - List hunters
  POST   /api/hunters              - Register hunter
  GET    /api/hunters/{id}         - Get specific hunter
  PUT    /api/hunters/{id}         - Replace hunter
  DELETE /api/hunters/{id}         - Delete hunter
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from database.connection import get_db
from database.queries import LIST_LIMIT, fetch_all, fetch_one, write_returning
from models import DeleteResult, HunterCreate, HunterRead, HunterUpdate

logger = logging.getLogger(__name__)

router = APIRouter()

HUNTER_COLUMNS = "hunter_id, name, address, created_at"


@router.get("", response_model=List[HunterRead])
def get_hunters(db: Session = Depends(get_db)):
    """Get the most recently registered hunters"""
    try:
        return fetch_all(db, f"""
            SELECT {HUNTER_COLUMNS}
            FROM hunter
            ORDER BY hunter_id DESC
            LIMIT :limit
        """, {"limit": LIST_LIMIT})
    except Exception:
        logger.exception("hunters error")
        raise HTTPException(status_code=500, detail="Failed to fetch hunters")


@router.get("/{hunter_id}", response_model=HunterRead)
def get_hunter(hunter_id: int, db: Session = Depends(get_db)):
    """Get a specific hunter by ID"""
    try:
        row = fetch_one(db, f"SELECT {HUNTER_COLUMNS} FROM hunter WHERE hunter_id = :id", {"id": hunter_id})
    except Exception:
        logger.exception("hunters error")
        raise HTTPException(status_code=500, detail="Failed to fetch hunters")

    if not row:
        raise HTTPException(status_code=404, detail="Not found")
    return row


@router.post("", response_model=HunterRead, status_code=status.HTTP_201_CREATED)
def create_hunter(hunter: HunterCreate, db: Session = Depends(get_db)):
    """Register a new hunter"""
    try:
        return write_returning(db, f"""
            INSERT INTO hunter (name, address)
            VALUES (:name, :address)
            RETURNING {HUNTER_COLUMNS}
        """, {"name": hunter.name, "address": hunter.address})
    except Exception:
        logger.exception("create hunter error")
        raise HTTPException(status_code=500, detail="Failed to create hunter")


@router.put("/{hunter_id}", response_model=HunterRead)
def update_hunter(hunter_id: int, hunter: HunterUpdate, db: Session = Depends(get_db)):
    """Replace an existing hunter"""
    try:
        row = write_returning(db, f"""
            UPDATE hunter
            SET name = :name, address = :address
            WHERE hunter_id = :id
            RETURNING {HUNTER_COLUMNS}
        """, {"id": hunter_id, "name": hunter.name, "address": hunter.address})
    except Exception:
        logger.exception("update hunter error")
        raise HTTPException(status_code=500, detail="Failed to update hunter")

    if not row:
        raise HTTPException(status_code=404, detail="Not found")
    return row


@router.delete("/{hunter_id}", response_model=DeleteResult)
def delete_hunter(hunter_id: int, db: Session = Depends(get_db)):
    """Delete a hunter and their licences"""
    try:
        row = write_returning(
            db,
            "DELETE FROM hunter WHERE hunter_id = :id RETURNING hunter_id",
            {"id": hunter_id}
        )
    except Exception:
        logger.exception("delete hunter error")
        raise HTTPException(status_code=500, detail="Failed to delete hunter")

    if not row:
        raise HTTPException(status_code=404, detail="Not found")
    return {"ok": True, "id": hunter_id}
