"""Shipment aggregate — the physical dispatch of a beer order.

A shipment references its order by identity and never changes which order it
belongs to. Its status follows a ranked lifecycle:

    PENDING < PACKED < IN_TRANSIT < OUT_FOR_DELIVERY < DELIVERED < CANCELLED

Once a shipment is at IN_TRANSIT or beyond it must carry both a tracking
number and a carrier, and it acquires a shipped date if it has none.
CANCELLED ranks highest, so it is held to the same rule.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change
from protean.exceptions import ValidationError
from protean.fields import DateTime, Integer, String

from brewery.domain import brewery
from brewery.shared.errors import BusinessRuleViolation
from brewery.shipment.events import ShipmentCreated, ShipmentUpdated


class ShipmentStatus(Enum):
    PENDING = "PENDING"
    PACKED = "PACKED"
    IN_TRANSIT = "IN_TRANSIT"
    OUT_FOR_DELIVERY = "OUT_FOR_DELIVERY"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"

    @property
    def rank(self) -> int:
        return list(ShipmentStatus).index(self)


def parse_shipment_status(value: str | None) -> ShipmentStatus | None:
    """Parse a client-supplied status name.

    Names are matched exactly (``"in_transit"`` is not ``IN_TRANSIT``).
    Blank input means no status was given.
    """
    if value is None or not value.strip():
        return None
    try:
        return ShipmentStatus(value)
    except ValueError:
        raise ValidationError({"shipment_status": [f"Unknown shipment status '{value}'"]}) from None


def _blank(value: str | None) -> bool:
    return value is None or not value.strip()


def enforce_shipment_rules(status, shipped_date, tracking_number, carrier, now=None):
    """Check a shipment state and fill in what the lifecycle implies.

    Returns the effective ``(status, shipped_date)`` pair.
    """
    now = now or datetime.now(UTC)
    status = status or ShipmentStatus.PENDING

    if status.rank >= ShipmentStatus.IN_TRANSIT.rank:
        if _blank(tracking_number) or _blank(carrier):
            message = f"Tracking number and carrier are required once a shipment is {status.value}"
            raise BusinessRuleViolation({"tracking_number": [message], "carrier": [message]})
        if shipped_date is None:
            shipped_date = now

    if status is ShipmentStatus.DELIVERED and shipped_date is None:
        shipped_date = now

    return status, shipped_date


@brewery.aggregate
class Shipment:
    id = Integer(identifier=True)
    version = Integer(default=0)
    beer_order_id = Integer(required=True)
    shipment_status = String(max_length=30, choices=ShipmentStatus, default=ShipmentStatus.PENDING.value)
    shipped_date = DateTime()
    tracking_number = String(max_length=255)
    carrier = String(max_length=255)
    notes = String(max_length=1000)
    created_date = DateTime()
    updated_date = DateTime()

    @property
    def status(self) -> ShipmentStatus:
        return ShipmentStatus(self.shipment_status)

    @classmethod
    def create(
        cls,
        shipment_id,
        beer_order_id,
        shipment_status=None,
        shipped_date=None,
        tracking_number=None,
        carrier=None,
        notes=None,
    ):
        now = datetime.now(UTC)
        status, shipped_date = enforce_shipment_rules(shipment_status, shipped_date, tracking_number, carrier, now)

        shipment = cls(
            id=shipment_id,
            beer_order_id=beer_order_id,
            shipment_status=status.value,
            shipped_date=shipped_date,
            tracking_number=tracking_number,
            carrier=carrier,
            notes=notes,
            created_date=now,
            updated_date=now,
        )
        shipment.raise_(
            ShipmentCreated(
                shipment_id=str(shipment.id),
                beer_order_id=str(beer_order_id),
                shipment_status=status.value,
                created_at=now,
            )
        )
        return shipment

    def revise(self, shipment_status=None, shipped_date=None, tracking_number=None, carrier=None, notes=None):
        """Merge a partial change into this shipment.

        ``None`` leaves the current value in place. The rules are checked
        against the merged state before anything is assigned, so a rejected
        change leaves the shipment untouched.
        """
        merged_tracking = tracking_number if tracking_number is not None else self.tracking_number
        merged_carrier = carrier if carrier is not None else self.carrier
        status, merged_shipped_date = enforce_shipment_rules(
            shipment_status or self.status,
            shipped_date if shipped_date is not None else self.shipped_date,
            merged_tracking,
            merged_carrier,
        )

        with atomic_change(self):
            self.shipment_status = status.value
            self.shipped_date = merged_shipped_date
            self.tracking_number = merged_tracking
            self.carrier = merged_carrier
            if notes is not None:
                self.notes = notes

        self.raise_(
            ShipmentUpdated(
                shipment_id=str(self.id),
                shipment_status=status.value,
                shipped_date=merged_shipped_date,
                tracking_number=merged_tracking,
                carrier=merged_carrier,
                updated_at=datetime.now(UTC),
            )
        )
