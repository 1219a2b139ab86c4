"""Order placement — command and handler.

Placement is all-or-nothing. Every referenced beer is checked before any
identifier is reserved or any record is written. The whole handler runs in
one unit of work, so a failure part way through persists nothing.
"""

import json

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Float, String, Text
from protean.utils.globals import current_domain

from brewery.beer.beer import Beer
from brewery.domain import brewery
from brewery.order.order import BeerOrder
from brewery.shared.identity import next_identities, next_identity
from brewery.utils.logging import get_logger

logger = get_logger(__name__)


@brewery.command(part_of="BeerOrder")
class PlaceBeerOrder:
    customer_ref = String(max_length=255)
    payment_amount = Float(required=True, min_value=0.0)
    items = Text(required=True)  # JSON: list of {"beer_id", "quantity"}


def _ensure_beers_exist(beer_ids):
    repo = current_domain.repository_for(Beer)
    for beer_id in beer_ids:
        try:
            repo.get(beer_id)
        except ObjectNotFoundError as exc:
            raise ObjectNotFoundError({"beer_id": f"Beer {beer_id} does not exist"}) from exc


@brewery.command_handler(part_of=BeerOrder)
class PlaceBeerOrderHandler:
    @handle(PlaceBeerOrder)
    def place_beer_order(self, command):
        items = json.loads(command.items) if isinstance(command.items, str) else command.items

        _ensure_beers_exist(item["beer_id"] for item in items)

        line_ids = next_identities("beer_order_line", len(items))
        lines_data = [
            {"id": line_id, "beer_id": item["beer_id"], "quantity": item["quantity"]}
            for line_id, item in zip(line_ids, items)
        ]

        order = BeerOrder.place(
            order_id=next_identity("beer_order"),
            customer_ref=command.customer_ref,
            payment_amount=command.payment_amount,
            lines_data=lines_data,
        )
        current_domain.repository_for(BeerOrder).add(order)
        logger.info("Placed beer order", order_id=order.id, line_count=len(lines_data))
        return order.id
