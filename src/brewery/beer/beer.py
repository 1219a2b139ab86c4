"""Beer aggregate — an item in the brewery's catalog.

Beers are referenced by identity from order lines; an order never owns or
loads a Beer as part of its own aggregate.
"""

from datetime import UTC, datetime

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Integer, String, Text

from brewery.domain import brewery


@brewery.aggregate
class Beer:
    id = Integer(identifier=True)
    version = Integer(default=0)
    beer_name = String(required=True, max_length=255)
    beer_style = String(required=True, max_length=50)
    upc = String(required=True, max_length=20)
    quantity_on_hand = Integer(default=0, min_value=0)
    price = Float(required=True)
    description = Text()
    created_date = DateTime()
    updated_date = DateTime()

    @invariant.post
    def price_must_be_positive(self):
        if self.price is not None and self.price <= 0:
            raise ValidationError({"price": ["Price must be greater than 0"]})

    @invariant.post
    def description_fits_column(self):
        if self.description and len(self.description) > 1000:
            raise ValidationError({"description": ["Description cannot exceed 1000 characters"]})

    @classmethod
    def create(
        cls,
        beer_id,
        beer_name,
        beer_style,
        upc,
        price,
        quantity_on_hand=0,
        description=None,
    ):
        now = datetime.now(UTC)
        return cls(
            id=beer_id,
            beer_name=beer_name,
            beer_style=beer_style,
            upc=upc,
            price=price,
            quantity_on_hand=quantity_on_hand or 0,
            description=description,
            created_date=now,
            updated_date=now,
        )

    def revise(self, beer_name, beer_style, upc, price, quantity_on_hand=0, description=None):
        """Replace the catalog details of this beer (full update)."""
        with atomic_change(self):
            self.beer_name = beer_name
            self.beer_style = beer_style
            self.upc = upc
            self.price = price
            self.quantity_on_hand = quantity_on_hand or 0
            self.description = description
