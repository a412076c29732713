"""IngestRecord repository implementation using SQLAlchemy."""
import logging
from typing import Optional
from sqlalchemy import select, update
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.dialects import postgresql, sqlite

from app.domain.models.ingest_record import (
    EventType, IngestRecord, IngestStatus, RawLocation
)
from app.domain.ports.ingest_record_repo import IngestRecordRepository
from app.infrastructure.db.models import IngestRecordModel

logger = logging.getLogger(__name__)


class SQLAlchemyIngestRecordRepository(IngestRecordRepository):
    """
    SQLAlchemy implementation of IngestRecordRepository.

    Every call opens and closes its own session, so a call running on a
    worker thread never shares a session with another call.
    """

    KEY_COLUMNS = ["vendor_id", "external_event_id"]

    def __init__(self, session_factory: sessionmaker):
        """
        Initialize repository with a session factory.

        Args:
            session_factory: SQLAlchemy sessionmaker
        """
        self.session_factory = session_factory

    @staticmethod
    def _insert(session: Session):
        """Get a dialect-specific INSERT that supports ON CONFLICT."""
        dialect = session.get_bind().dialect.name
        if dialect == "postgresql":
            return postgresql.insert(IngestRecordModel)
        if dialect == "sqlite":
            return sqlite.insert(IngestRecordModel)
        raise ValueError(f"Unsupported database dialect: {dialect}")

    def create_if_absent(self, record: IngestRecord) -> bool:
        """Insert the record unless its composite key already exists."""
        with self.session_factory() as session:
            stmt = self._insert(session).values(
                vendor_id=record.vendor_id,
                external_event_id=record.external_event_id,
                ingest_id=record.ingest_id,
                received_at=record.received_at,
                s3_bucket=record.raw_location.bucket,
                s3_key=record.raw_location.key,
                event_type=record.event_type,
                status=record.status
            ).on_conflict_do_nothing(index_elements=self.KEY_COLUMNS)

            try:
                result = session.execute(stmt)
                session.commit()
            except Exception:
                session.rollback()
                raise

        created = result.rowcount == 1
        if not created:
            logger.info(
                f"Ingest record already exists for {record.vendor_id}/{record.external_event_id}"
            )
        return created

    def find_by_composite_key(
        self,
        vendor_id: str,
        external_event_id: str
    ) -> Optional[IngestRecord]:
        """Find record by composite key."""
        stmt = select(IngestRecordModel).where(
            IngestRecordModel.vendor_id == vendor_id,
            IngestRecordModel.external_event_id == external_event_id
        )

        with self.session_factory() as session:
            db_record = session.execute(stmt).scalar_one_or_none()
            return self._to_domain(db_record) if db_record else None

    def transition_status(
        self,
        vendor_id: str,
        external_event_id: str,
        expected: IngestStatus,
        new_status: IngestStatus
    ) -> bool:
        """Move a record from the expected status to a new one."""
        stmt = update(IngestRecordModel).where(
            IngestRecordModel.vendor_id == vendor_id,
            IngestRecordModel.external_event_id == external_event_id,
            IngestRecordModel.status == expected
        ).values(status=new_status)

        with self.session_factory() as session:
            try:
                result = session.execute(stmt)
                session.commit()
            except Exception:
                session.rollback()
                raise

        return result.rowcount == 1

    @staticmethod
    def _to_domain(db_record: IngestRecordModel) -> IngestRecord:
        """Convert SQLAlchemy model to domain entity."""
        return IngestRecord(
            vendor_id=db_record.vendor_id,
            external_event_id=db_record.external_event_id,
            ingest_id=db_record.ingest_id,
            received_at=db_record.received_at,
            raw_location=RawLocation(bucket=db_record.s3_bucket, key=db_record.s3_key),
            event_type=EventType(db_record.event_type) if db_record.event_type else None,
            status=IngestStatus(db_record.status)
        )
