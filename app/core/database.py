"""
Database engine and connection-pool setup.

Uses synchronous SQLAlchemy with a QueuePool sized from settings.
The engine is created lazily on first use; nothing connects at import time.
"""

import logging
from typing import Optional
from urllib.parse import urlparse

from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlmodel import Session, create_engine

from app.core.config import settings

logger = logging.getLogger(__name__)

_engine: Optional[Engine] = None


def normalize_database_url(url: str) -> str:
    """Ensure a PostgreSQL URL names the psycopg (v3) driver."""
    if not url:
        raise ValueError("DATABASE_URL is not configured")

    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+psycopg://", 1)
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql+psycopg://", 1)
    if not url.startswith("postgresql+psycopg://"):
        raise ValueError("DATABASE_URL must start with postgresql:// or postgresql+psycopg://")
    return url


def create_db_engine(url: Optional[str] = None) -> Engine:
    """Build the pooled engine (does not open a connection)."""
    database_url = normalize_database_url(url or settings.DATABASE_URL)

    # Parse database URL for logging (don't log password!)
    db_url = urlparse(database_url)
    logger.info(
        f"Database engine: host={db_url.hostname} port={db_url.port} "
        f"name={db_url.path[1:]} pool_size={settings.DB_POOL_SIZE} "
        f"max_overflow={settings.DB_MAX_OVERFLOW}"
    )

    return create_engine(
        database_url,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_timeout=settings.DB_POOL_TIMEOUT,
        pool_recycle=settings.DB_POOL_RECYCLE,
        pool_pre_ping=True,
        echo=False,
    )


def get_engine() -> Engine:
    """Shared engine for the process. Also the FastAPI dependency for routes."""
    global _engine
    if _engine is None:
        _engine = create_db_engine()
    return _engine


def dispose_engine() -> None:
    """Close all pooled connections (called at shutdown)."""
    global _engine
    if _engine is not None:
        _engine.dispose()
        _engine = None
        logger.info("Database connection pool disposed")


def verify_database(engine: Optional[Engine] = None) -> None:
    # Verify connectivity and that migrations have been applied.
    engine = engine or get_engine()
    logger.info("Verifying database connection and migrations...")
    try:
        with Session(engine) as session:
            session.execute(text("SELECT 1"))

            result = session.execute(text("""
                SELECT EXISTS (
                    SELECT FROM information_schema.tables
                    WHERE table_schema = 'public'
                    AND table_name = 'alembic_version'
                )
            """))
            if not result.scalar():
                logger.error("Alembic version table not found!")
                logger.error("Run 'alembic upgrade head' to initialize the database schema.")
                raise RuntimeError(
                    "Database schema not initialized. "
                    "Please run 'alembic upgrade head' before starting the application."
                )

            current_version = session.execute(text("SELECT version_num FROM alembic_version")).scalar()
            if current_version:
                logger.info(f"Database migrations verified (current: {current_version})")
            else:
                logger.warning("No migration version found in alembic_version table")

    except RuntimeError:
        raise
    except Exception as e:
        logger.error(f"Failed to verify database: {e}")
        raise
