"""Database models for generated galaxies."""

import uuid
from datetime import datetime

from sqlalchemy import BigInteger, Column, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


def _new_id() -> str:
    return str(uuid.uuid4())


class Galaxy(Base):
    """Main galaxy table storing generation metadata and the saved random state."""

    __tablename__ = "galaxies"

    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(String(255), nullable=False)
    seed = Column(String(255), nullable=False)
    sector_count = Column(Integer, nullable=False)
    galaxy_radius = Column(Float, nullable=False)
    planets_per_sector = Column(Integer, nullable=False)
    planet_count = Column(Integer, nullable=False, default=0)
    lane_count = Column(Integer, nullable=False, default=0)
    realm_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, default=datetime.utcnow)
    generation_time_seconds = Column(Float)

    # Generation parameters
    config_json = Column(Text, nullable=False)  # JSON blob of GenerationConfig

    # Random source state after the pass
    rng_seed = Column(String(255), nullable=False)
    rng_internal_state = Column(BigInteger, nullable=False)
    rng_call_count = Column(BigInteger, nullable=False)

    # Relationships
    sectors = relationship(
        "Sector", back_populates="galaxy", cascade="all, delete-orphan", order_by="Sector.ordinal"
    )
    planets = relationship(
        "Planet", back_populates="galaxy", cascade="all, delete-orphan", order_by="Planet.ordinal"
    )
    lanes = relationship(
        "Lane", back_populates="galaxy", cascade="all, delete-orphan", order_by="Lane.ordinal"
    )
    realms = relationship(
        "Realm", back_populates="galaxy", cascade="all, delete-orphan", order_by="Realm.ordinal"
    )
    claims = relationship(
        "Claim", back_populates="galaxy", cascade="all, delete-orphan", order_by="Claim.ordinal"
    )


class Sector(Base):
    """Sectors with their position in light years."""

    __tablename__ = "sectors"

    id = Column(Integer, primary_key=True, autoincrement=True)
    galaxy_id = Column(String(36), ForeignKey("galaxies.id"), nullable=False, index=True)
    ordinal = Column(Integer, nullable=False)  # Registration order
    sector_key = Column(String(100), nullable=False)

    name = Column(String(255), nullable=False)
    x = Column(Float, nullable=False)
    y = Column(Float, nullable=False)
    z = Column(Float, nullable=False)

    galaxy = relationship("Galaxy", back_populates="sectors")


class Planet(Base):
    """Planet nodes."""

    __tablename__ = "planets"

    id = Column(Integer, primary_key=True, autoincrement=True)
    galaxy_id = Column(String(36), ForeignKey("galaxies.id"), nullable=False, index=True)
    ordinal = Column(Integer, nullable=False)  # Registration order
    planet_key = Column(String(100), nullable=False)
    sector_key = Column(String(100), nullable=False)

    name = Column(String(255), nullable=False)
    ownership = Column(String(255), default="")
    status = Column(String(20), nullable=False)
    development_level = Column(Integer, nullable=False)
    fortification_level = Column(Integer, nullable=False)
    resource_specialization = Column(String(20), nullable=False)
    continents_json = Column(Text, default="[]")

    galaxy = relationship("Galaxy", back_populates="planets")


class Lane(Base):
    """Space lanes, stored once per planet pair in creation order."""

    __tablename__ = "lanes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    galaxy_id = Column(String(36), ForeignKey("galaxies.id"), nullable=False, index=True)
    ordinal = Column(Integer, nullable=False)
    planet_a = Column(String(100), nullable=False)
    planet_b = Column(String(100), nullable=False)

    galaxy = relationship("Galaxy", back_populates="lanes")


class Realm(Base):
    """Political realms."""

    __tablename__ = "realms"

    id = Column(Integer, primary_key=True, autoincrement=True)
    galaxy_id = Column(String(36), ForeignKey("galaxies.id"), nullable=False, index=True)
    ordinal = Column(Integer, nullable=False)
    realm_key = Column(String(100), nullable=False)

    name = Column(String(255), nullable=False)
    founding_year = Column(Integer, nullable=False)

    galaxy = relationship("Galaxy", back_populates="realms")


class Claim(Base):
    """Realm claims over planets."""

    __tablename__ = "claims"

    id = Column(Integer, primary_key=True, autoincrement=True)
    galaxy_id = Column(String(36), ForeignKey("galaxies.id"), nullable=False, index=True)
    ordinal = Column(Integer, nullable=False)
    realm_key = Column(String(100), nullable=False)
    planet_key = Column(String(100), nullable=False)
    status = Column(String(20), nullable=False)

    galaxy = relationship("Galaxy", back_populates="claims")
