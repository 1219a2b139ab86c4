"""Tests for shipment status parsing and lifecycle rules."""

from datetime import UTC, datetime, timedelta

import pytest
from protean.exceptions import ValidationError

from brewery.shared.errors import BusinessRuleViolation
from brewery.shipment.events import ShipmentCreated, ShipmentUpdated
from brewery.shipment.shipment import (
    Shipment,
    ShipmentStatus,
    enforce_shipment_rules,
    parse_shipment_status,
)


def _make_shipment(**fields):
    return Shipment.create(shipment_id=1, beer_order_id=10, **fields)


class TestShipmentStatus:
    def test_ranks_follow_declaration_order(self):
        ranks = [status.rank for status in ShipmentStatus]
        assert ranks == [0, 1, 2, 3, 4, 5]

    def test_cancelled_ranks_highest(self):
        assert ShipmentStatus.CANCELLED.rank > ShipmentStatus.DELIVERED.rank

    def test_parse_exact_name(self):
        assert parse_shipment_status("OUT_FOR_DELIVERY") is ShipmentStatus.OUT_FOR_DELIVERY

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_parse_blank_is_absent(self, value):
        assert parse_shipment_status(value) is None

    @pytest.mark.parametrize("value", ["in_transit", "SHIPPED", "Delivered"])
    def test_parse_unknown_raises(self, value):
        with pytest.raises(ValidationError) as exc:
            parse_shipment_status(value)
        assert "shipment_status" in exc.value.messages


class TestEnforceShipmentRules:
    def test_missing_status_defaults_to_pending(self):
        status, shipped_date = enforce_shipment_rules(None, None, None, None)
        assert status is ShipmentStatus.PENDING
        assert shipped_date is None

    def test_packed_needs_no_tracking(self):
        status, shipped_date = enforce_shipment_rules(ShipmentStatus.PACKED, None, None, None)
        assert status is ShipmentStatus.PACKED
        assert shipped_date is None

    @pytest.mark.parametrize(
        "status",
        [
            ShipmentStatus.IN_TRANSIT,
            ShipmentStatus.OUT_FOR_DELIVERY,
            ShipmentStatus.DELIVERED,
            ShipmentStatus.CANCELLED,
        ],
    )
    def test_shipped_statuses_require_tracking_and_carrier(self, status):
        with pytest.raises(BusinessRuleViolation) as exc:
            enforce_shipment_rules(status, None, "TRK-1", "  ")
        assert set(exc.value.messages) == {"tracking_number", "carrier"}

    def test_in_transit_sets_shipped_date(self):
        now = datetime(2025, 8, 20, 14, 13, tzinfo=UTC)
        _, shipped_date = enforce_shipment_rules(ShipmentStatus.IN_TRANSIT, None, "TRK-1", "UPS", now)
        assert shipped_date == now

    def test_existing_shipped_date_is_kept(self):
        earlier = datetime.now(UTC) - timedelta(days=2)
        _, shipped_date = enforce_shipment_rules(ShipmentStatus.DELIVERED, earlier, "TRK-1", "UPS")
        assert shipped_date == earlier


class TestShipmentAggregate:
    def test_create_defaults_to_pending(self):
        shipment = _make_shipment()
        assert shipment.shipment_status == "PENDING"
        assert shipment.status is ShipmentStatus.PENDING
        assert shipment.version == 0

    def test_create_raises_event(self):
        shipment = _make_shipment()
        assert len(shipment._events) == 1
        assert isinstance(shipment._events[0], ShipmentCreated)
        assert shipment._events[0].beer_order_id == "10"

    def test_create_in_transit_without_carrier_fails(self):
        with pytest.raises(BusinessRuleViolation):
            _make_shipment(shipment_status=ShipmentStatus.IN_TRANSIT, tracking_number="TRK-1")

    def test_revise_keeps_absent_fields(self):
        shipment = _make_shipment(tracking_number="TRK-1", carrier="UPS")
        shipment.revise(tracking_number="TRK-2")
        assert shipment.tracking_number == "TRK-2"
        assert shipment.carrier == "UPS"

    def test_revise_uses_stored_tracking_details(self):
        shipment = _make_shipment(tracking_number="TRK-1", carrier="UPS")
        before = datetime.now(UTC)
        shipment.revise(shipment_status=ShipmentStatus.IN_TRANSIT)
        assert shipment.shipment_status == "IN_TRANSIT"
        assert shipment.shipped_date >= before

    def test_rejected_revision_leaves_shipment_untouched(self):
        shipment = _make_shipment(notes="fragile")
        with pytest.raises(BusinessRuleViolation):
            shipment.revise(shipment_status=ShipmentStatus.DELIVERED, notes="changed")
        assert shipment.shipment_status == "PENDING"
        assert shipment.notes == "fragile"
        assert shipment.shipped_date is None

    def test_revise_raises_event(self):
        shipment = _make_shipment()
        shipment.revise(notes="leave at the door")
        assert isinstance(shipment._events[-1], ShipmentUpdated)
