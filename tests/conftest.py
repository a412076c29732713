"""
Pytest configuration and shared fixtures.

The environment is set before any application module is imported so the
module-level settings and engine point at SQLite instead of Postgres.
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("RAW_BUCKET", "test-raw-bucket")
os.environ.setdefault("INGEST_EVENT_CHANNEL", "test-ingest-accepted")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import Settings
from app.core.database import Base
from app.infrastructure.db import models  # noqa: F401
from tests.fakes import (
    InMemoryIngestRecordRepository, InMemoryRawArchive, RecordingPublisher
)
from app.infrastructure.directory.static_directory import StaticVendorDirectory

VENDOR_A_KEY = "test-key"
VENDOR_A = "vnd_test_001"
VENDOR_B_KEY = "other-key"
VENDOR_B = "vnd_test_002"


@pytest.fixture
def test_settings() -> Settings:
    """Settings with destinations configured and short timeouts."""
    return Settings(
        raw_bucket="test-raw-bucket",
        ingest_event_channel="test-ingest-accepted",
        archive_timeout_seconds=1.0,
        store_timeout_seconds=1.0,
        publish_timeout_seconds=1.0,
    )


@pytest.fixture
def directory() -> StaticVendorDirectory:
    return StaticVendorDirectory({VENDOR_A_KEY: VENDOR_A, VENDOR_B_KEY: VENDOR_B})


@pytest.fixture
def record_repo() -> InMemoryIngestRecordRepository:
    return InMemoryIngestRecordRepository()


@pytest.fixture
def raw_archive() -> InMemoryRawArchive:
    return InMemoryRawArchive()


@pytest.fixture
def publisher() -> RecordingPublisher:
    return RecordingPublisher()


@pytest.fixture
def session_factory():
    """In-memory SQLite session factory with the schema created."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    finally:
        engine.dispose()


@pytest.fixture
def file_session_factory(tmp_path):
    """File-backed SQLite session factory; each thread gets its own connection."""
    engine = create_engine(
        f"sqlite:///{tmp_path / 'ingest.db'}",
        connect_args={"check_same_thread": False, "timeout": 30},
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    finally:
        engine.dispose()
