"""Shipment domain events."""

from protean.fields import DateTime, Identifier, String

from brewery.domain import brewery


@brewery.event(part_of="Shipment")
class ShipmentCreated:
    """A shipment was recorded against an order."""

    __version__ = 1

    shipment_id = Identifier(required=True)
    beer_order_id = Identifier(required=True)
    shipment_status = String(required=True)
    created_at = DateTime(required=True)


@brewery.event(part_of="Shipment")
class ShipmentUpdated:
    """A shipment's status or tracking details changed."""

    __version__ = 1

    shipment_id = Identifier(required=True)
    shipment_status = String(required=True)
    shipped_date = DateTime()
    tracking_number = String()
    carrier = String()
    updated_at = DateTime(required=True)
