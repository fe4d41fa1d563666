"""Database connection utilities."""

from contextlib import contextmanager
from typing import Optional

import structlog
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from ..config.config import settings
from .models import Base

logger = structlog.get_logger()


class Database:
    """Database connection manager."""

    def __init__(self):
        self.engine = None
        self.SessionLocal = None

    def initialize(self, database_url: Optional[str] = None):
        """Initialize database connection and create tables."""
        url = database_url or settings.database_url
        logger.info("Initializing database connection", url=url)

        engine_kwargs = {"echo": settings.database_echo}
        if url.startswith("sqlite"):
            # In-memory SQLite needs one shared connection across threads
            engine_kwargs["poolclass"] = StaticPool
            engine_kwargs["connect_args"] = {"check_same_thread": False}

        self.engine = create_engine(url, **engine_kwargs)

        # Create session factory
        self.SessionLocal = sessionmaker(
            autocommit=False, autoflush=False, bind=self.engine
        )

        self.create_tables()

        logger.info("Database connection initialized")

    def create_tables(self):
        """Create all tables."""
        try:
            Base.metadata.create_all(bind=self.engine)
            logger.info("Database tables created")
        except Exception as e:
            logger.error("Failed to create tables", error=str(e))
            raise

    @property
    def is_initialized(self) -> bool:
        return self.SessionLocal is not None

    @contextmanager
    def get_session(self):
        """Get database session with automatic cleanup."""
        if not self.SessionLocal:
            raise RuntimeError("Database not initialized. Call initialize() first.")

        session = self.SessionLocal()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def dispose(self):
        """Release the engine's connections."""
        if self.engine is not None:
            self.engine.dispose()
        self.engine = None
        self.SessionLocal = None


# Global database instance
db = Database()
