"""Tests for the tenant-isolated admin lookup."""
import asyncio

import pytest

from app.application.services.lookup_ingest_record import LookupIngestRecordService
from app.domain.errors import ErrorCode, IngestError
from app.domain.models.ingest_record import IngestRecord, IngestStatus, RawLocation
from tests.conftest import VENDOR_A, VENDOR_A_KEY, VENDOR_B_KEY
from tests.fakes import SlowIngestRecordRepository


@pytest.fixture
def service(directory, record_repo):
    record_repo.create_if_absent(IngestRecord(
        vendor_id=VENDOR_A,
        external_event_id="evt-1",
        ingest_id="ing_existing",
        received_at="2026-01-01T00:00:00Z",
        raw_location=RawLocation("bucket", "raw/key.json"),
    ))
    return LookupIngestRecordService(directory, record_repo)


async def test_owner_can_read_record(service):
    record = await service.lookup(VENDOR_A_KEY, f"/dev/admin/ingest/{VENDOR_A}/evt-1")
    assert record.ingest_id == "ing_existing"
    assert record.status == IngestStatus.INGESTED


async def test_other_vendor_is_forbidden_whether_or_not_record_exists(service):
    for event_id in ("evt-1", "does-not-exist"):
        with pytest.raises(IngestError) as exc:
            await service.lookup(VENDOR_B_KEY, f"/admin/ingest/{VENDOR_A}/{event_id}")
        assert exc.value.code == ErrorCode.FORBIDDEN
        assert exc.value.status_code == 403


async def test_absent_record_is_not_found(service):
    with pytest.raises(IngestError) as exc:
        await service.lookup(VENDOR_A_KEY, f"/admin/ingest/{VENDOR_A}/evt-404")
    assert exc.value.code == ErrorCode.NOT_FOUND


async def test_auth_checked_before_path(service):
    with pytest.raises(IngestError) as exc:
        await service.lookup(None, "/admin/ingest/")
    assert exc.value.code == ErrorCode.MISSING_API_KEY

    with pytest.raises(IngestError) as exc:
        await service.lookup("nope", "/admin/ingest/")
    assert exc.value.code == ErrorCode.INVALID_API_KEY


async def test_malformed_path(service):
    with pytest.raises(IngestError) as exc:
        await service.lookup(VENDOR_A_KEY, f"/admin/ingest/{VENDOR_A}")
    assert exc.value.code == ErrorCode.BAD_PATH


async def test_non_admin_path_is_unknown_route_after_auth(service, record_repo):
    with pytest.raises(IngestError) as exc:
        await service.lookup(None, "/v1/inventory-updates")
    assert exc.value.code == ErrorCode.MISSING_API_KEY

    with pytest.raises(IngestError) as exc:
        await service.lookup(VENDOR_A_KEY, "/v1/inventory-updates")
    assert exc.value.code == ErrorCode.UNKNOWN_ROUTE
    assert exc.value.status_code == 404


async def test_store_read_does_not_block_event_loop(directory):
    record_repo = SlowIngestRecordRepository(delay=0.0, read_delay=0.2)
    service = LookupIngestRecordService(directory, record_repo)
    order = []

    async def look_up():
        with pytest.raises(IngestError):
            await service.lookup(VENDOR_A_KEY, f"/admin/ingest/{VENDOR_A}/evt-1")
        order.append("looked-up")

    async def tick():
        await asyncio.sleep(0.01)
        order.append("tick")

    await asyncio.gather(look_up(), tick())
    assert order == ["tick", "looked-up"]
