"""BeerOrder aggregate — an order and the lines it owns.

A BeerOrder is created in one step with all of its lines and persisted as a
single unit. Lines refer to beers by identity only; the order neither loads
nor owns the catalog records. Stock is not allocated at placement time, so
every new line starts with nothing allocated.
"""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Integer, String

from brewery.domain import brewery
from brewery.order.events import BeerOrderPlaced

NEW = "NEW"


@brewery.entity(part_of="BeerOrder")
class BeerOrderLine:
    """A requested quantity of one beer within an order."""

    id = Integer(identifier=True)
    version = Integer(default=0)
    beer_id = Integer(required=True)
    order_quantity = Integer(required=True, min_value=1)
    quantity_allocated = Integer(default=0, min_value=0)
    status = String(max_length=50, default=NEW)
    created_date = DateTime()
    updated_date = DateTime()


@brewery.aggregate
class BeerOrder:
    id = Integer(identifier=True)
    version = Integer(default=0)
    customer_ref = String(max_length=255)
    payment_amount = Float(required=True, min_value=0.0)
    status = String(max_length=50, default=NEW)
    lines = HasMany(BeerOrderLine)
    created_date = DateTime()
    updated_date = DateTime()

    @classmethod
    def place(cls, order_id, customer_ref, payment_amount, lines_data):
        """Create a new order with one line per requested beer.

        Args:
            order_id: Identifier reserved for the order.
            customer_ref: Free-text reference supplied by the client.
            payment_amount: Amount paid for the order, zero or more.
            lines_data: List of dicts with id, beer_id and quantity.
        """
        if not lines_data:
            raise ValidationError({"items": ["An order needs at least one item"]})

        now = datetime.now(UTC)
        order = cls(
            id=order_id,
            customer_ref=customer_ref,
            payment_amount=payment_amount,
            status=NEW,
            created_date=now,
            updated_date=now,
        )
        for line_data in lines_data:
            order.add_lines(
                BeerOrderLine(
                    id=line_data["id"],
                    beer_id=line_data["beer_id"],
                    order_quantity=line_data["quantity"],
                    quantity_allocated=0,
                    status=NEW,
                    created_date=now,
                    updated_date=now,
                )
            )

        order.raise_(
            BeerOrderPlaced(
                order_id=str(order.id),
                customer_ref=customer_ref,
                payment_amount=payment_amount,
                line_count=len(lines_data),
                placed_at=now,
            )
        )
        return order

    def remove_line(self, line_id):
        """Detach a line from this order; a detached line is deleted, never kept."""
        line = next((line for line in self.lines if line.id == line_id), None)
        if line is None:
            raise ValidationError({"lines": [f"Line {line_id} not found"]})

        self.remove_lines(line)
        self.updated_date = datetime.now(UTC)

    def clear_lines(self):
        for line in list(self.lines):
            self.remove_line(line.id)
