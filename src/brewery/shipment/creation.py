"""Shipment creation — command and handler."""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import DateTime, Integer, String
from protean.utils.globals import current_domain

from brewery.domain import brewery
from brewery.order.order import BeerOrder
from brewery.shared.identity import next_identity
from brewery.shipment.shipment import Shipment, parse_shipment_status
from brewery.utils.logging import get_logger

logger = get_logger(__name__)


@brewery.command(part_of="Shipment")
class CreateShipment:
    beer_order_id = Integer(required=True)
    shipment_status = String(max_length=30)
    shipped_date = DateTime()
    tracking_number = String(max_length=255)
    carrier = String(max_length=255)
    notes = String(max_length=1000)


@brewery.command_handler(part_of=Shipment)
class CreateShipmentHandler:
    @handle(CreateShipment)
    def create_shipment(self, command):
        try:
            current_domain.repository_for(BeerOrder).get(command.beer_order_id)
        except ObjectNotFoundError as exc:
            raise ObjectNotFoundError({"beer_order_id": f"Beer order {command.beer_order_id} does not exist"}) from exc

        shipment = Shipment.create(
            shipment_id=next_identity("shipment"),
            beer_order_id=command.beer_order_id,
            shipment_status=parse_shipment_status(command.shipment_status),
            shipped_date=command.shipped_date,
            tracking_number=command.tracking_number,
            carrier=command.carrier,
            notes=command.notes,
        )
        current_domain.repository_for(Shipment).add(shipment)
        logger.info(
            "Created shipment",
            shipment_id=shipment.id,
            beer_order_id=shipment.beer_order_id,
            shipment_status=shipment.shipment_status,
        )
        return shipment.id
