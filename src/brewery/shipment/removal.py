"""Shipment removal — command and handler. The order itself is not touched."""

from protean import handle
from protean.fields import Integer
from protean.utils.globals import current_domain

from brewery.domain import brewery
from brewery.shipment.shipment import Shipment
from brewery.utils.logging import get_logger

logger = get_logger(__name__)


@brewery.command(part_of="Shipment")
class RemoveShipment:
    shipment_id = Integer(required=True)


@brewery.command_handler(part_of=Shipment)
class RemoveShipmentHandler:
    @handle(RemoveShipment)
    def remove_shipment(self, command):
        repo = current_domain.repository_for(Shipment)
        shipment = repo.get(command.shipment_id)
        repo._dao.delete(shipment)
        logger.info("Removed shipment", shipment_id=command.shipment_id)
