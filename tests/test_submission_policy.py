"""Tests for submission admission rules."""
import json

import pytest

from app.domain.errors import ErrorCode, IngestError
from app.domain.models.ingest_record import EventType
from app.domain.services.submission_policy import SubmissionPolicy


def body(**fields) -> bytes:
    return json.dumps(fields).encode("utf-8")


INVENTORY = "/v1/inventory-updates"
ORDER_STATUS = "/v1/order-status-updates"


class TestBodyParsing:
    @pytest.mark.parametrize("raw", [None, b"", b"   ", b"\n\t"])
    def test_blank_body_is_invalid_json(self, raw):
        with pytest.raises(IngestError) as exc:
            SubmissionPolicy.validate(raw, INVENTORY)
        assert exc.value.code == ErrorCode.INVALID_JSON
        assert exc.value.status_code == 400

    @pytest.mark.parametrize("raw", [b"{not json", b"[1, 2]", b"\"text\"", b"\xff\xfe"])
    def test_non_object_body_is_invalid_json(self, raw):
        with pytest.raises(IngestError) as exc:
            SubmissionPolicy.validate(raw, INVENTORY)
        assert exc.value.code == ErrorCode.INVALID_JSON


class TestFieldRules:
    def test_missing_external_event_id(self):
        with pytest.raises(IngestError) as exc:
            SubmissionPolicy.validate(body(vendorProductKey="p1"), INVENTORY)
        assert exc.value.code == ErrorCode.MISSING_REQUIRED_FIELD
        assert "externalEventId" in exc.value.message

    def test_blank_external_event_id(self):
        with pytest.raises(IngestError) as exc:
            SubmissionPolicy.validate(body(externalEventId="  "), INVENTORY)
        assert exc.value.code == ErrorCode.MISSING_REQUIRED_FIELD

    def test_vendor_id_rejected_before_route_checks(self):
        raw = b'{"externalEventId":"e1","vendorId":"x"}'
        for path in (INVENTORY, ORDER_STATUS, "/v1/widgets-updates"):
            with pytest.raises(IngestError) as exc:
                SubmissionPolicy.validate(raw, path)
            assert exc.value.code == ErrorCode.VENDOR_ID_NOT_ALLOWED

    def test_vendor_id_rejected_even_when_null(self):
        with pytest.raises(IngestError) as exc:
            SubmissionPolicy.validate(b'{"externalEventId":"e1","vendorId":null}', INVENTORY)
        assert exc.value.code == ErrorCode.VENDOR_ID_NOT_ALLOWED

    def test_unknown_route(self):
        with pytest.raises(IngestError) as exc:
            SubmissionPolicy.validate(body(externalEventId="e1"), "/v1/widgets-updates")
        assert exc.value.code == ErrorCode.UNKNOWN_ROUTE
        assert exc.value.status_code == 404

    def test_inventory_reports_first_missing_field(self):
        with pytest.raises(IngestError) as exc:
            SubmissionPolicy.validate(body(externalEventId="e1", semantics="ABSOLUTE"), INVENTORY)
        assert exc.value.code == ErrorCode.MISSING_REQUIRED_FIELD
        assert exc.value.message == "vendorProductKey is required."

    def test_inventory_reports_unit_then_semantics(self):
        with pytest.raises(IngestError) as exc:
            SubmissionPolicy.validate(body(externalEventId="e1", vendorProductKey="p1"), INVENTORY)
        assert exc.value.message == "unit is required."

        with pytest.raises(IngestError) as exc:
            SubmissionPolicy.validate(
                body(externalEventId="e1", vendorProductKey="p1", unit="EA", semantics=""),
                INVENTORY
            )
        assert exc.value.message == "semantics is required."

    def test_order_status_required_fields(self):
        with pytest.raises(IngestError) as exc:
            SubmissionPolicy.validate(body(externalEventId="e1", status="SHIPPED"), ORDER_STATUS)
        assert exc.value.message == "vendorOrderKey is required."

        with pytest.raises(IngestError) as exc:
            SubmissionPolicy.validate(body(externalEventId="e1", vendorOrderKey="o1"), ORDER_STATUS)
        assert exc.value.message == "status is required."

    def test_structured_values_count_as_missing(self):
        with pytest.raises(IngestError) as exc:
            SubmissionPolicy.validate(
                body(externalEventId="e1", vendorOrderKey={"id": 1}, status="SHIPPED"),
                ORDER_STATUS
            )
        assert exc.value.message == "vendorOrderKey is required."


class TestValidSubmissions:
    def test_inventory_update(self):
        submission = SubmissionPolicy.validate(
            body(externalEventId="e1", vendorProductKey="p1", unit="EA", semantics="DELTA", quantity=4),
            "/dev/v1/inventory-updates"
        )
        assert submission.event_type == EventType.INVENTORY_UPDATE
        assert submission.external_event_id == "e1"
        assert submission.document["quantity"] == 4

    def test_order_status_update(self):
        submission = SubmissionPolicy.validate(
            body(externalEventId="e2", vendorOrderKey="o1", status="SHIPPED"),
            ORDER_STATUS
        )
        assert submission.event_type == EventType.ORDER_STATUS_UPDATE

    def test_numeric_external_event_id_is_accepted_as_text(self):
        submission = SubmissionPolicy.validate(
            body(externalEventId=123, vendorOrderKey="o1", status="SHIPPED"),
            ORDER_STATUS
        )
        assert submission.external_event_id == "123"
