"""Tests for admin lookup path parsing."""
import pytest

from app.domain.errors import ErrorCode, IngestError
from app.domain.services.lookup_path import is_lookup_path, parse_lookup_path


@pytest.mark.parametrize("path, expected", [
    ("/admin/ingest/vnd_1/evt_1", ("vnd_1", "evt_1")),
    ("/dev/admin/ingest/vnd_1/evt_1", ("vnd_1", "evt_1")),
    ("/prod/admin/ingest/vnd_1/evt-9/", ("vnd_1", "evt-9")),
])
def test_parse_valid_paths(path, expected):
    assert parse_lookup_path(path) == expected


@pytest.mark.parametrize("path", [
    "/admin/ingest/",
    "/admin/ingest/vnd_1",
    "/dev/admin/ingest/vnd_1",
    "/a/b/admin/ingest/vnd_1/evt_1",
    "/admin/ingest/vnd_1/evt_1/extra",
    "/admin/other/vnd_1/evt_1",
])
def test_parse_bad_paths(path):
    with pytest.raises(IngestError) as exc:
        parse_lookup_path(path)
    assert exc.value.code == ErrorCode.BAD_PATH
    assert exc.value.status_code == 400


def test_is_lookup_path():
    assert is_lookup_path("/dev/admin/ingest/v/e")
    assert not is_lookup_path("/v1/inventory-updates")
    assert not is_lookup_path("")
