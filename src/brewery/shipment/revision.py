"""Shipment revision — partial update command and handler."""

from protean import handle
from protean.fields import DateTime, Integer, String
from protean.utils.globals import current_domain

from brewery.domain import brewery
from brewery.shared.versioning import assert_expected_version, mark_revised
from brewery.shipment.shipment import Shipment, parse_shipment_status
from brewery.utils.logging import get_logger

logger = get_logger(__name__)


@brewery.command(part_of="Shipment")
class UpdateShipment:
    """Change some fields of a shipment; fields left out keep their value."""

    shipment_id = Integer(required=True)
    version = Integer()
    shipment_status = String(max_length=30)
    shipped_date = DateTime()
    tracking_number = String(max_length=255)
    carrier = String(max_length=255)
    notes = String(max_length=1000)


@brewery.command_handler(part_of=Shipment)
class UpdateShipmentHandler:
    @handle(UpdateShipment)
    def update_shipment(self, command):
        repo = current_domain.repository_for(Shipment)
        shipment = repo.get(command.shipment_id)
        assert_expected_version(shipment, command.version)

        shipment.revise(
            shipment_status=parse_shipment_status(command.shipment_status),
            shipped_date=command.shipped_date,
            tracking_number=command.tracking_number,
            carrier=command.carrier,
            notes=command.notes,
        )
        mark_revised(shipment)
        repo.add(shipment)
        logger.info(
            "Updated shipment",
            shipment_id=shipment.id,
            shipment_status=shipment.shipment_status,
            version=shipment.version,
        )
