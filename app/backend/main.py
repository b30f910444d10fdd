"""
FastAPI Backend for the Wildlife Information Management System

This API provides RESTful endpoints for managing species, sightings, game
reserves, hunters, licences, poaching incidents and annual quotas. Every
endpoint is parameterized SQL behind request validation.
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import API_NAME, API_VERSION, get_cors_origins, get_cors_credentials
from database.connection import close_engine
from errors import register_exception_handlers
from logging_config import setup_logging
from routers import species, sightings, reserves, hunters, licences, poaching, quotas, system

setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"{API_NAME} {API_VERSION} starting")
    yield
    close_engine()


# Initialize FastAPI app
app = FastAPI(
    title="Wildlife Information Management API",
    description="API for managing wildlife species, reserves, hunting and anti-poaching records",
    version=API_VERSION,
    docs_url="/api/docs",  # Swagger UI
    redoc_url="/api/redoc",  # ReDoc
    lifespan=lifespan,
)

register_exception_handlers(app)

# ============================================================================
# CORS Configuration - Allow React frontend to call API
# ============================================================================

origins = get_cors_origins()

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if "*" in origins else origins,
    allow_credentials=get_cors_credentials(),
    allow_methods=["*"],  # Allow all HTTP methods (GET, POST, PUT, DELETE, etc.)
    allow_headers=["*"],  # Allow all headers
)

# ============================================================================
# Include Routers - Organize endpoints by resource
# ============================================================================

app.include_router(system.router, prefix="/api", tags=["System"])
app.include_router(species.router, prefix="/api/species", tags=["Species"])
app.include_router(sightings.router, prefix="/api/sightings", tags=["Sightings"])
app.include_router(reserves.router, prefix="/api/reserves", tags=["Reserves"])
app.include_router(hunters.router, prefix="/api/hunters", tags=["Hunters"])
app.include_router(licences.router, prefix="/api/licences", tags=["Licences"])
app.include_router(poaching.router, prefix="/api/poaching", tags=["Poaching"])
app.include_router(quotas.router, prefix="/api/quotas", tags=["Quotas"])

# ============================================================================
# Health Check Endpoint
# ============================================================================

@app.get("/health")
@app.get("/api/health")
async def health_check():
    """Check if API is running"""
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}


@app.get("/")
async def root():
    """Root endpoint - points at the docs"""
    return {
        "message": API_NAME,
        "docs": "/api/docs",
        "health": "/health"
    }
