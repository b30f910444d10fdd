"""
SQLModel Database Models

Unified models using SQLModel (SQLAlchemy + Pydantic) for both:
- Table metadata (used by Alembic autogenerate)
- FastAPI request/response validation

Request models coerce loosely typed form input (numeric strings, blank
optionals) and fail with the field-level messages the dashboard shows to the
user. Updates replace the whole row, so each *Update model is its *Create model.
"""

import math
from datetime import date as date_type, datetime
from typing import Any, List, Optional

import sqlalchemy as sa
from pydantic import model_validator
from sqlalchemy.types import UserDefinedType
from sqlmodel import Field, SQLModel

from geometry import is_polygon_text, parse_point, parse_polygon, polygon_text


# ============================================================================
# PostgreSQL geometric column types
# ============================================================================

class PointType(UserDefinedType):
    """Native PostgreSQL point, read back as "(x,y)" text"""
    cache_ok = True

    def get_col_spec(self, **kw):
        return "POINT"


class PolygonType(UserDefinedType):
    """Native PostgreSQL polygon, read back as "((x1,y1),...)" text"""
    cache_ok = True

    def get_col_spec(self, **kw):
        return "POLYGON"


def _created_at_field():
    return Field(
        default_factory=datetime.utcnow,
        nullable=False,
        sa_type=sa.DateTime(timezone=True),
        sa_column_kwargs={"server_default": sa.text("CURRENT_TIMESTAMP")}
    )


# ============================================================================
# Input coercion helpers
# ============================================================================

def _as_dict(data: Any) -> dict:
    return dict(data) if isinstance(data, dict) else {}


def _blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value.strip() == "")


def _to_number(value: Any) -> Optional[float]:
    """Finite float from a number or numeric string, else None."""
    if isinstance(value, bool) or _blank(value):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def _to_int(value: Any) -> Optional[int]:
    """Integer from an int, an integral float or an integral numeric string, else None."""
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    number = _to_number(value)
    if number is None or not number.is_integer():
        return None
    return int(number)


def _require_int(data: dict, field: str) -> int:
    value = _to_int(data.get(field))
    if value is None:
        raise ValueError(f"{field} must be an integer")
    return value


def _require_name(data: dict) -> str:
    name = data.get("name")
    if not isinstance(name, str) or not name:
        raise ValueError("name is required")
    return name


def _to_date(value: Any) -> Optional[date_type]:
    """Date from a date, datetime or ISO string; trailing junk is rejected."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date_type):
        return value
    if isinstance(value, str) and value.strip():
        text = value.strip()
        try:
            if len(text) == 10:
                return date_type.fromisoformat(text)
            # Full timestamps ("2025-01-01T08:30:00") keep only their date.
            if len(text) > 10 and text[10] in "T ":
                return datetime.fromisoformat(text).date()
        except ValueError:
            return None
    return None


def _require_date(data: dict, field: str, message: str) -> date_type:
    value = _to_date(data.get(field))
    if value is None:
        raise ValueError(message)
    return value


def _require_lat_lon(data: dict) -> tuple:
    lat, lon = _to_number(data.get("lat")), _to_number(data.get("lon"))
    if lat is None or lon is None:
        raise ValueError("lat and lon must be numbers")
    return lat, lon


def _optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


class LatLonRead(SQLModel):
    """Map-ready coordinate (display order)"""
    lat: float
    lon: float


# ============================================================================
# Wildlife Species Models
# ============================================================================

class SpeciesBase(SQLModel):
    """Base species fields"""
    name: str = Field(description="Species name")
    population: Optional[int] = Field(None, description="Estimated population")


class WildlifeSpecies(SpeciesBase, table=True):
    """Wildlife species database model"""
    __tablename__ = "wildlife_species"

    w_species_id: Optional[int] = Field(default=None, primary_key=True)
    created_at: datetime = _created_at_field()


class SpeciesCreate(SpeciesBase):
    """Model for creating a species"""

    @model_validator(mode="before")
    @classmethod
    def coerce_input(cls, data: Any) -> dict:
        data = _as_dict(data)
        name = _require_name(data)
        population = None
        if not _blank(data.get("population")):
            population = _to_int(data.get("population"))
            if population is None:
                raise ValueError("population must be a number")
        return {"name": name, "population": population}


class SpeciesUpdate(SpeciesCreate):
    """Model for updating a species (full replacement)"""
    pass


class SpeciesRead(SpeciesBase):
    """Model for reading a species"""
    w_species_id: int
    created_at: Optional[datetime] = None


# ============================================================================
# Sighting Models
# ============================================================================

class SightingBase(SQLModel):
    """Base sighting fields"""
    w_species_id: int = Field(foreign_key="wildlife_species.w_species_id", ondelete="CASCADE", description="Species ID")
    sighting_date: date_type = Field(description="Date of the sighting")
    notes: Optional[str] = Field(None, description="Free-text notes")


class Sighting(SightingBase, table=True):
    """Sighting database model"""
    __tablename__ = "sighting"

    sighting_id: Optional[int] = Field(default=None, primary_key=True)
    location: str = Field(sa_type=PointType, nullable=False)
    created_at: datetime = _created_at_field()


class SightingCreate(SightingBase):
    """Model for creating a sighting from map coordinates"""
    lat: float = Field(description="Latitude")
    lon: float = Field(description="Longitude")

    @model_validator(mode="before")
    @classmethod
    def coerce_input(cls, data: Any) -> dict:
        data = _as_dict(data)
        species_id = _require_int(data, "w_species_id")
        sighting_date = _require_date(data, "sighting_date", "sighting_date is required (YYYY-MM-DD)")
        lat, lon = _require_lat_lon(data)
        return {
            "w_species_id": species_id,
            "sighting_date": sighting_date,
            "lat": lat,
            "lon": lon,
            "notes": _optional_text(data.get("notes")),
        }


class SightingUpdate(SightingCreate):
    """Model for updating a sighting (full replacement)"""
    pass


class SightingRead(SightingBase):
    """Model for reading a sighting (raw point text plus parsed coordinates)"""
    sighting_id: int
    location: Optional[str] = None
    lat: Optional[float] = None
    lon: Optional[float] = None
    created_at: Optional[datetime] = None


# ============================================================================
# Game Reserve Models
# ============================================================================

class ReserveBase(SQLModel):
    """Base reserve fields"""
    name: str = Field(description="Reserve name")


class GameReserve(ReserveBase, table=True):
    """Game reserve database model"""
    __tablename__ = "game_reserve"

    reserve_id: Optional[int] = Field(default=None, primary_key=True)
    boundary: str = Field(sa_type=PolygonType, nullable=False)
    created_at: datetime = _created_at_field()


class ReserveCreate(ReserveBase):
    """
    Model for creating a reserve.

    The boundary arrives either as polygon text "((lon,lat),...)" or as a
    list of map vertices in `points`; vertices are turned into polygon text here.
    """
    boundary: str = Field(description="Polygon text ((x1,y1),(x2,y2),...)")

    @model_validator(mode="before")
    @classmethod
    def coerce_input(cls, data: Any) -> dict:
        data = _as_dict(data)
        name = _require_name(data)
        boundary = data.get("boundary")
        points = data.get("points")

        if (not boundary or not isinstance(boundary, str)) and isinstance(points, list):
            boundary = polygon_text(points)

        if not boundary or not isinstance(boundary, str):
            raise ValueError(
                "boundary is required as polygon text ((x1,y1),(x2,y2),...) "
                "or provide points: [{lon,lat}, ...] with at least 3 vertices"
            )
        if not is_polygon_text(boundary):
            raise ValueError("boundary must start with (( and end with )")
        return {"name": name, "boundary": boundary}


class ReserveUpdate(ReserveCreate):
    """Model for updating a reserve (full replacement)"""
    pass


class ReserveRead(ReserveBase):
    """Model for reading a reserve (raw polygon text plus map vertices)"""
    reserve_id: int
    boundary: Optional[str] = None
    points: List[LatLonRead] = Field(default_factory=list)
    created_at: Optional[datetime] = None


# ============================================================================
# Hunter Models
# ============================================================================

class HunterBase(SQLModel):
    """Base hunter fields"""
    name: str = Field(description="Hunter's full name")
    address: Optional[str] = Field(None, description="Postal address")


class Hunter(HunterBase, table=True):
    """Hunter database model"""
    __tablename__ = "hunter"

    hunter_id: Optional[int] = Field(default=None, primary_key=True)
    created_at: datetime = _created_at_field()


class HunterCreate(HunterBase):
    """Model for creating a hunter"""

    @model_validator(mode="before")
    @classmethod
    def coerce_input(cls, data: Any) -> dict:
        data = _as_dict(data)
        return {"name": _require_name(data), "address": _optional_text(data.get("address"))}


class HunterUpdate(HunterCreate):
    """Model for updating a hunter (full replacement)"""
    pass


class HunterRead(HunterBase):
    """Model for reading a hunter"""
    hunter_id: int
    created_at: Optional[datetime] = None


# ============================================================================
# Licence Models
# ============================================================================

class LicenceBase(SQLModel):
    """Base licence fields"""
    hunter_id: int = Field(foreign_key="hunter.hunter_id", ondelete="CASCADE", description="Licensed hunter")
    issue_date: date_type = Field(description="Date the licence was issued")
    expiry_date: date_type = Field(description="Date the licence expires")


class Licence(LicenceBase, table=True):
    """Hunting licence database model"""
    __tablename__ = "licence"

    licence_id: Optional[int] = Field(default=None, primary_key=True)
    created_at: datetime = _created_at_field()


class LicenceCreate(LicenceBase):
    """Model for creating a licence"""

    @model_validator(mode="before")
    @classmethod
    def coerce_input(cls, data: Any) -> dict:
        data = _as_dict(data)
        hunter_id = _require_int(data, "hunter_id")
        message = "issue_date and expiry_date are required"
        issue_date = _require_date(data, "issue_date", message)
        expiry_date = _require_date(data, "expiry_date", message)
        return {"hunter_id": hunter_id, "issue_date": issue_date, "expiry_date": expiry_date}


class LicenceUpdate(LicenceCreate):
    """Model for updating a licence (full replacement)"""
    pass


class LicenceRead(LicenceBase):
    """Model for reading a licence"""
    licence_id: int
    created_at: Optional[datetime] = None


# ============================================================================
# Poaching Incident Models
# ============================================================================

class PoachingBase(SQLModel):
    """Base poaching incident fields"""
    incident_date: date_type = Field(description="Date of the incident")
    reserve_id: Optional[int] = Field(
        None, foreign_key="game_reserve.reserve_id", ondelete="SET NULL", description="Reserve, if known"
    )
    description: Optional[str] = Field(None, description="What was found")


class PoachingIncident(PoachingBase, table=True):
    """Poaching incident database model"""
    __tablename__ = "poaching_incident"

    incident_id: Optional[int] = Field(default=None, primary_key=True)
    location: str = Field(sa_type=PointType, nullable=False)
    created_at: datetime = _created_at_field()


class PoachingCreate(PoachingBase):
    """Model for reporting a poaching incident from map coordinates"""
    lat: float = Field(description="Latitude")
    lon: float = Field(description="Longitude")

    @model_validator(mode="before")
    @classmethod
    def coerce_input(cls, data: Any) -> dict:
        data = _as_dict(data)
        incident_date = _require_date(data, "incident_date", "incident_date is required")
        lat, lon = _require_lat_lon(data)
        reserve_id = None
        if not _blank(data.get("reserve_id")):
            reserve_id = _require_int(data, "reserve_id")
        return {
            "incident_date": incident_date,
            "lat": lat,
            "lon": lon,
            "reserve_id": reserve_id,
            "description": _optional_text(data.get("description")),
        }


class PoachingUpdate(PoachingCreate):
    """Model for updating a poaching incident (full replacement)"""
    pass


class PoachingRead(PoachingBase):
    """Model for reading a poaching incident"""
    incident_id: int
    location: Optional[str] = None
    lat: Optional[float] = None
    lon: Optional[float] = None
    created_at: Optional[datetime] = None


# ============================================================================
# Annual Quota Models
# ============================================================================

class QuotaBase(SQLModel):
    """Base annual quota fields"""
    year: int = Field(description="Hunting season year")
    w_species_id: int = Field(foreign_key="wildlife_species.w_species_id", ondelete="CASCADE")
    reserve_id: int = Field(foreign_key="game_reserve.reserve_id", ondelete="CASCADE")
    quota: int = Field(ge=0, description="Animals that may be taken")


class AnnualQuota(QuotaBase, table=True):
    """Annual quota database model"""
    __tablename__ = "annual_quota"
    __table_args__ = (sa.CheckConstraint("quota >= 0", name="annual_quota_quota_check"),)

    quota_id: Optional[int] = Field(default=None, primary_key=True)


class QuotaCreate(QuotaBase):
    """Model for creating an annual quota"""

    @model_validator(mode="before")
    @classmethod
    def coerce_input(cls, data: Any) -> dict:
        data = _as_dict(data)
        year = _require_int(data, "year")
        species_id = _require_int(data, "w_species_id")
        reserve_id = _require_int(data, "reserve_id")
        quota = _to_int(data.get("quota"))
        if quota is None or quota < 0:
            raise ValueError("quota must be a non-negative integer")
        return {"year": year, "w_species_id": species_id, "reserve_id": reserve_id, "quota": quota}


class QuotaUpdate(QuotaCreate):
    """Model for updating an annual quota (full replacement)"""
    pass


class QuotaRead(QuotaBase):
    """Model for reading an annual quota"""
    quota_id: int


# ============================================================================
# Dashboard Models
# ============================================================================

class StatsRead(SQLModel):
    """Row counts for the dashboard tiles"""
    species: int
    sightings: int
    reserves: int
    hunters: int
    licences: int
    poaching: int
    quotas: int


class DeleteResult(SQLModel):
    """Acknowledgement returned by DELETE endpoints"""
    ok: bool = True
    id: int


# ============================================================================
# Row -> response helpers
# ============================================================================

def with_point(row: dict) -> dict:
    """Add display-order lat/lon parsed from the stored point column."""
    data = dict(row)
    point = parse_point(data.get("location"))
    data["lat"] = point.lat if point else None
    data["lon"] = point.lon if point else None
    return data


def with_polygon(row: dict) -> dict:
    """Add map vertices parsed from the stored polygon column."""
    data = dict(row)
    data["points"] = [p.as_dict() for p in parse_polygon(data.get("boundary"))]
    return data
