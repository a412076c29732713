"""Database session management and connection pooling."""
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base

from app.core.config import settings


def build_engine(database_url: str):
    """
    Create a SQLAlchemy engine for the given URL.

    Args:
        database_url: Connection string

    Returns:
        Configured engine
    """
    engine_kwargs = {
        "pool_pre_ping": True,  # Verify connections before using
        "echo": settings.log_level == "DEBUG",
    }
    if database_url.startswith("postgresql"):
        # Server-side bound so a slow statement is cancelled rather than abandoned
        statement_timeout_ms = int(settings.store_timeout_seconds * 1000)
        engine_kwargs["connect_args"] = {"options": f"-c statement_timeout={statement_timeout_ms}"}
    if not database_url.startswith("sqlite"):
        engine_kwargs.update(pool_size=10, max_overflow=20)
    return create_engine(database_url, **engine_kwargs)


# Create SQLAlchemy engine
engine = build_engine(settings.database_url)

# Session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for SQLAlchemy models
Base = declarative_base()


def init_db() -> None:
    """Initialize database - create all tables."""
    # Register ORM models on Base.metadata before creating tables
    from app.infrastructure.db import models  # noqa: F401
    Base.metadata.create_all(bind=engine)
