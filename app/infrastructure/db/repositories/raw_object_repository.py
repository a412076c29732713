"""Raw archive implementation backed by a SQLAlchemy table."""
import logging
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.orm.exc import FlushError

from app.domain.errors import ArchiveObjectExists, ArchiveObjectNotFound
from app.domain.models.ingest_record import RawLocation
from app.domain.models.raw_payload import RawPayloadObject
from app.domain.ports.raw_archive import RawArchive
from app.infrastructure.db.models import RawObjectModel

logger = logging.getLogger(__name__)


class SQLAlchemyRawArchive(RawArchive):
    """
    Raw archive storing each object as one row keyed by (bucket, key).

    Rows are insert-only; there is no update or delete path. Each call
    uses its own session.
    """

    def __init__(self, session_factory: sessionmaker):
        """
        Initialize archive with a session factory.

        Args:
            session_factory: SQLAlchemy sessionmaker
        """
        self.session_factory = session_factory

    def put(self, obj: RawPayloadObject) -> RawLocation:
        """Insert a new archived object."""
        db_object = RawObjectModel(
            bucket=obj.location.bucket,
            key=obj.location.key,
            content=obj.content,
            content_type=obj.content_type,
            object_metadata=dict(obj.metadata)
        )

        with self.session_factory() as session:
            session.add(db_object)
            try:
                session.commit()
            except (IntegrityError, FlushError) as e:
                session.rollback()
                raise ArchiveObjectExists(obj.location.bucket, obj.location.key) from e
            except Exception:
                session.rollback()
                raise

        logger.debug(f"Archived {len(obj.content)} bytes at {obj.location.bucket}/{obj.location.key}")
        return obj.location

    def get(self, location: RawLocation) -> RawPayloadObject:
        """Read an archived object by location."""
        with self.session_factory() as session:
            db_object = session.get(RawObjectModel, (location.bucket, location.key))
            if db_object is None:
                raise ArchiveObjectNotFound(location.bucket, location.key)

            return RawPayloadObject(
                location=RawLocation(bucket=db_object.bucket, key=db_object.key),
                content=bytes(db_object.content),
                content_type=db_object.content_type,
                metadata=dict(db_object.object_metadata or {})
            )
