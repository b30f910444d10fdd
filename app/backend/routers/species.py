"""
Species Router - API endpoints for wildlife species management

Endpoints:
  GET    /api/species              - List species (newest first, max 100)
  POST   /api/species              - Create new species
  GET    /api/species/{id}         - Get specific species
  PUT    /api/species/{id}         - Replace species
  DELETE /api/species/{id}         - Delete species
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from database.connection import get_db
from database.queries import LIST_LIMIT, fetch_all, fetch_one, write_returning
from models import DeleteResult, SpeciesCreate, SpeciesRead, SpeciesUpdate

logger = logging.getLogger(__name__)

router = APIRouter()

SPECIES_COLUMNS = "w_species_id, name, population, created_at"


@router.get("", response_model=List[SpeciesRead])
def get_species(db: Session = Depends(get_db)):
    """Get the most recently added species"""
    try:
        return fetch_all(db, f"""
            SELECT {SPECIES_COLUMNS}
            FROM wildlife_species
            ORDER BY w_species_id DESC
            LIMIT :limit
        """, {"limit": LIST_LIMIT})
    except Exception:
        logger.exception("species error")
        raise HTTPException(status_code=500, detail="Failed to fetch species")


@router.get("/{species_id}", response_model=SpeciesRead)
def get_species_by_id(species_id: int, db: Session = Depends(get_db)):
    """Get a specific species by ID"""
    try:
        row = fetch_one(db, f"""
            SELECT {SPECIES_COLUMNS}
            FROM wildlife_species
            WHERE w_species_id = :id
        """, {"id": species_id})
    except Exception:
        logger.exception("species error")
        raise HTTPException(status_code=500, detail="Failed to fetch species")

    if not row:
        raise HTTPException(status_code=404, detail="Not found")
    return row


@router.post("", response_model=SpeciesRead, status_code=status.HTTP_201_CREATED)
def create_species(species: SpeciesCreate, db: Session = Depends(get_db)):
    """Create a new species"""
    try:
        return write_returning(db, f"""
            INSERT INTO wildlife_species (name, population)
            VALUES (:name, :population)
            RETURNING {SPECIES_COLUMNS}
        """, {"name": species.name, "population": species.population})
    except Exception:
        logger.exception("create species error")
        raise HTTPException(status_code=500, detail="Failed to create species")


@router.put("/{species_id}", response_model=SpeciesRead)
def update_species(species_id: int, species: SpeciesUpdate, db: Session = Depends(get_db)):
    """Replace an existing species"""
    try:
        row = write_returning(db, f"""
            UPDATE wildlife_species
            SET name = :name, population = :population
            WHERE w_species_id = :id
            RETURNING {SPECIES_COLUMNS}
        """, {"id": species_id, "name": species.name, "population": species.population})
    except Exception:
        logger.exception("update species error")
        raise HTTPException(status_code=500, detail="Failed to update species")

    if not row:
        raise HTTPException(status_code=404, detail="Not found")
    return row


@router.delete("/{species_id}", response_model=DeleteResult)
def delete_species(species_id: int, db: Session = Depends(get_db)):
    """Delete a species (its sightings and quotas go with it)"""
    try:
        row = write_returning(
            db,
            "DELETE FROM wildlife_species WHERE w_species_id = :id RETURNING w_species_id",
            {"id": species_id}
        )
    except Exception:
        logger.exception("delete species error")
        raise HTTPException(status_code=500, detail="Failed to delete species")

    if not row:
        raise HTTPException(status_code=404, detail="Not found")
    return {"ok": True, "id": species_id}
