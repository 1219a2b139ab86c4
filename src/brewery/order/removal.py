"""Order removal — command and handler.

An order that has shipments cannot be removed; the shipments must be
removed first.
"""

from protean import handle
from protean.fields import Integer
from protean.utils.globals import current_domain

from brewery.domain import brewery
from brewery.order.order import BeerOrder
from brewery.shared.errors import BusinessRuleViolation
from brewery.shipment.shipment import Shipment
from brewery.utils.logging import get_logger

logger = get_logger(__name__)


@brewery.command(part_of="BeerOrder")
class RemoveBeerOrder:
    order_id = Integer(required=True)


@brewery.command_handler(part_of=BeerOrder)
class RemoveBeerOrderHandler:
    @handle(RemoveBeerOrder)
    def remove_beer_order(self, command):
        repo = current_domain.repository_for(BeerOrder)
        order = repo.get(command.order_id)

        shipments = (
            current_domain.repository_for(Shipment)._dao.query.filter(beer_order_id=order.id).all()
        )
        if shipments.total:
            raise BusinessRuleViolation(
                {"shipments": [f"Order {order.id} has {shipments.total} shipment(s) and cannot be removed"]}
            )

        order.clear_lines()
        repo.add(order)
        repo._dao.delete(order)
        logger.info("Removed beer order", order_id=command.order_id)
