"""FastAPI main application."""

import time
from datetime import datetime
from typing import Any, Dict, List, Optional

import structlog
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field
from sqlalchemy import text

from ..config import GalaxyGenOptions, GenerationConfig, RealmOptions, configure_logging, settings
from ..core.pipeline import generate_galaxy
from ..core.seeded_random import RandomState
from ..db.connection import db
from ..db.export import GalaxyExporter, load_galaxy
from ..db.models import Galaxy

# Configure logging
configure_logging()

logger = structlog.get_logger()

# Initialize FastAPI app
app = FastAPI(
    title="Galaxy Generator API",
    description="Deterministic galaxy topology and realm partitioning",
    version="0.1.0"
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Request/Response models
class GalaxyGenerationRequest(BaseModel):
    """Request to generate a new galaxy."""

    seed: Optional[str] = Field(None, min_length=1, description="Random seed for reproducible generation")
    name: Optional[str] = Field(None, description="Custom galaxy name")
    galaxy: GalaxyGenOptions = Field(default_factory=GalaxyGenOptions)
    realms: RealmOptions = Field(default_factory=RealmOptions)
    founding_year: int = Field(0, description="Founding year stamped on generated realms")


class GalaxySummary(BaseModel):
    """Summary information about a generated galaxy."""

    id: str
    name: str
    seed: str
    sector_count: int
    galaxy_radius: float
    planet_count: int
    lane_count: int
    realm_count: int
    created_at: datetime
    generation_time_seconds: Optional[float]


class GalaxyDetail(GalaxySummary):
    """A galaxy with its full generated layout and claims."""

    layout: Dict[str, Any]


class RealmInfo(BaseModel):
    """A realm and the planets it holds."""

    realm_id: str
    name: str
    founding_year: int
    planet_count: int
    planets: Dict[str, str] = Field(description="Planet id to claim status")


class PlanetClaims(BaseModel):
    """Claims registered on one planet."""

    planet_id: str
    claims: Dict[str, str] = Field(description="Realm id to claim status")
    controlling_realm: Optional[str]
    contested: bool


def _summary(galaxy: Galaxy) -> GalaxySummary:
    return GalaxySummary(
        id=galaxy.id,
        name=galaxy.name,
        seed=galaxy.seed,
        sector_count=galaxy.sector_count,
        galaxy_radius=galaxy.galaxy_radius,
        planet_count=galaxy.planet_count,
        lane_count=galaxy.lane_count,
        realm_count=galaxy.realm_count,
        created_at=galaxy.created_at,
        generation_time_seconds=galaxy.generation_time_seconds,
    )


def _load_or_404(session, galaxy_id: str):
    result = load_galaxy(session, galaxy_id)
    if result is None:
        raise HTTPException(status_code=404, detail="Galaxy not found")
    return result


@app.on_event("startup")
async def startup_event():
    """Initialize database on startup."""
    logger.info("Starting Galaxy Generator API")
    if not db.is_initialized:
        db.initialize()


@app.on_event("shutdown")
async def shutdown_event():
    """Cleanup on shutdown."""
    logger.info("Shutting down Galaxy Generator API")


# API endpoints
@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Galaxy Generator API",
        "version": "0.1.0",
        "status": "running"
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    try:
        # Test database connection
        with db.get_session() as session:
            session.execute(text("SELECT 1"))

        return {"status": "healthy", "database": "connected"}
    except Exception as e:
        logger.error("Health check failed", error=str(e))
        raise HTTPException(status_code=503, detail="Service unhealthy")


@app.post("/galaxies", response_model=GalaxySummary, status_code=201)
async def create_galaxy(request: GalaxyGenerationRequest):
    """Generate a galaxy and store it."""
    logger.info("Galaxy generation requested", request=request.model_dump(mode="json"))

    seed = request.seed or settings.default_seed
    config = GenerationConfig(
        seed=seed,
        galaxy=request.galaxy,
        realms=request.realms,
        founding_year=request.founding_year,
    )

    start_time = time.perf_counter()
    result = generate_galaxy(config)
    generation_time = time.perf_counter() - start_time

    with db.get_session() as session:
        exporter = GalaxyExporter(session)
        galaxy_id = exporter.export_galaxy(
            request.name or f"Galaxy {seed}", result, generation_time
        )
        return _summary(session.get(Galaxy, galaxy_id))


@app.get("/galaxies", response_model=List[GalaxySummary])
async def list_galaxies():
    """List all generated galaxies."""
    with db.get_session() as session:
        galaxies = session.query(Galaxy).order_by(Galaxy.created_at.desc()).all()
        return [_summary(galaxy) for galaxy in galaxies]


@app.get("/galaxies/{galaxy_id}", response_model=GalaxyDetail)
async def get_galaxy(galaxy_id: str):
    """Get galaxy details including sectors, planets, lanes and claims."""
    with db.get_session() as session:
        result = _load_or_404(session, galaxy_id)
        galaxy = session.get(Galaxy, galaxy_id)
        return GalaxyDetail(**_summary(galaxy).model_dump(), layout=result.to_dict())


@app.get("/galaxies/{galaxy_id}/realms", response_model=List[RealmInfo])
async def get_realms(galaxy_id: str):
    """List the realms of a galaxy in creation order."""
    with db.get_session() as session:
        ledger = _load_or_404(session, galaxy_id).ledger

    return [
        RealmInfo(
            realm_id=territory.realm_id,
            name=territory.name,
            founding_year=territory.founding_year,
            planet_count=len(ledger.planets_of(territory.realm_id)),
            planets={
                planet_id: status.value
                for planet_id, status in ledger.planets_of(territory.realm_id).items()
            },
        )
        for territory in ledger.territories.values()
    ]


@app.get("/galaxies/{galaxy_id}/planets/{planet_id}/claims", response_model=PlanetClaims)
async def get_planet_claims(galaxy_id: str, planet_id: str):
    """Get the claims registered on a planet."""
    with db.get_session() as session:
        result = _load_or_404(session, galaxy_id)

    if not result.galaxy_map.has_planet(planet_id):
        raise HTTPException(status_code=404, detail="Planet not found")

    ledger = result.ledger
    return PlanetClaims(
        planet_id=planet_id,
        claims={realm_id: status.value for realm_id, status in ledger.claims_on(planet_id).items()},
        controlling_realm=ledger.controlling_realm(planet_id),
        contested=ledger.has_contesting_claims(planet_id),
    )


@app.get("/galaxies/{galaxy_id}/random-state", response_model=RandomState)
async def get_random_state(galaxy_id: str):
    """Get the random source state saved at the end of generation."""
    with db.get_session() as session:
        galaxy = session.get(Galaxy, galaxy_id)
        if galaxy is None:
            raise HTTPException(status_code=404, detail="Galaxy not found")

        return RandomState(
            seed=galaxy.rng_seed,
            internal_state=galaxy.rng_internal_state,
            call_count=galaxy.rng_call_count,
        )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
