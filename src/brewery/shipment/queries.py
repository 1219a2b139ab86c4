"""Read side of the shipment store."""

from protean.utils.globals import current_domain

from brewery.shipment.shipment import Shipment


def get_shipment(shipment_id: int) -> Shipment:
    return current_domain.repository_for(Shipment).get(shipment_id)


def list_shipments_for_order(beer_order_id: int) -> list[Shipment]:
    """Shipments recorded against an order, oldest first.

    Does not check that the order exists; an unknown order has no shipments.
    """
    return (
        current_domain.repository_for(Shipment)
        ._dao.query.filter(beer_order_id=beer_order_id)
        .order_by("id")
        .all()
        .items
    )
