"""Tests for ingest record identifiers and timestamps."""
import re
from datetime import datetime, timedelta, timezone

import pytest

from app.domain.models.ingest_record import new_ingest_id, utc_now_iso

RECEIVED_AT_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{6}Z$")


class TestUtcNowIso:
    def test_whole_second_keeps_microsecond_field(self):
        now = datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
        assert utc_now_iso(now) == "2026-01-01T12:00:00.000000Z"

    def test_fractional_second(self):
        now = datetime(2026, 1, 1, 12, 0, 0, 123456, tzinfo=timezone.utc)
        assert utc_now_iso(now) == "2026-01-01T12:00:00.123456Z"

    def test_offset_instant_is_converted_to_utc(self):
        now = datetime(2026, 1, 1, 14, 0, 0, tzinfo=timezone(timedelta(hours=2)))
        assert utc_now_iso(now) == "2026-01-01T12:00:00.000000Z"

    def test_current_time_has_fixed_width(self):
        assert RECEIVED_AT_PATTERN.match(utc_now_iso())


def test_ingest_ids_are_prefixed_and_unique():
    ids = {new_ingest_id() for _ in range(100)}
    assert len(ids) == 100
    assert all(i.startswith("ing_") for i in ids)


@pytest.mark.parametrize("stamp", [
    "2026-01-01T12:00:00.000000Z",
    "2026-12-31T23:59:59.999999Z",
])
def test_fixed_width_stamps_sort_chronologically(stamp):
    assert sorted([stamp, "2026-01-01T11:59:59.999999Z"])[0] == "2026-01-01T11:59:59.999999Z"
