"""BeerOrder domain events."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from brewery.domain import brewery


@brewery.event(part_of="BeerOrder")
class BeerOrderPlaced:
    """A new order and all of its lines were accepted."""

    __version__ = 1

    order_id = Identifier(required=True)
    customer_ref = String(max_length=255)
    payment_amount = Float(required=True)
    line_count = Integer(required=True)
    placed_at = DateTime(required=True)
