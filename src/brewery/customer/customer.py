"""Customer aggregate — a person or business that buys from the brewery.

Orders refer to customers only through a free-text reference, so a Customer
can be changed or removed without touching any order.
"""

from datetime import UTC, datetime

from protean import atomic_change
from protean.fields import DateTime, Integer, String

from brewery.domain import brewery


@brewery.aggregate
class Customer:
    id = Integer(identifier=True)
    version = Integer(default=0)
    name = String(required=True, max_length=120)
    email = String(required=True, max_length=255)
    phone = String(max_length=40)
    address_line1 = String(required=True, max_length=200)
    address_line2 = String(max_length=200)
    city = String(max_length=120)
    state = String(max_length=80)
    postal_code = String(max_length=20)
    created_date = DateTime()
    updated_date = DateTime()

    @classmethod
    def register(cls, customer_id, name, email, address_line1, **details):
        now = datetime.now(UTC)
        return cls(
            id=customer_id,
            name=name,
            email=email,
            address_line1=address_line1,
            phone=details.get("phone"),
            address_line2=details.get("address_line2"),
            city=details.get("city"),
            state=details.get("state"),
            postal_code=details.get("postal_code"),
            created_date=now,
            updated_date=now,
        )

    def revise(self, name, email, address_line1, **details):
        """Replace the contact details of this customer (full update)."""
        with atomic_change(self):
            self.name = name
            self.email = email
            self.address_line1 = address_line1
            self.phone = details.get("phone")
            self.address_line2 = details.get("address_line2")
            self.city = details.get("city")
            self.state = details.get("state")
            self.postal_code = details.get("postal_code")
