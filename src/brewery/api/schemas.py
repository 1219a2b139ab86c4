"""Pydantic request/response schemas for the brewery HTTP API.

These are external contracts, kept separate from the Protean commands they
are translated into. Field names are snake_case in Python and camelCase on
the wire; both spellings are accepted on input.
"""

from datetime import datetime
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PageResponse(CamelModel, Generic[T]):
    content: list[T]
    total_elements: int
    total_pages: int
    number: int
    size: int


# ---------------------------------------------------------------------------
# Beers
# ---------------------------------------------------------------------------
class BeerRequest(CamelModel):
    version: int | None = None
    beer_name: str = Field(min_length=1, max_length=255)
    beer_style: str = Field(min_length=1, max_length=50)
    upc: str = Field(min_length=1, max_length=20)
    quantity_on_hand: int = Field(default=0, ge=0)
    price: float = Field(gt=0)
    description: str | None = Field(default=None, max_length=1000)

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "beerName": "Galaxy Cat IPA",
                    "beerStyle": "IPA",
                    "upc": "0123456789012",
                    "quantityOnHand": 120,
                    "price": 12.99,
                }
            ]
        }
    )


class BeerResponse(CamelModel):
    id: int
    version: int
    beer_name: str
    beer_style: str
    upc: str
    quantity_on_hand: int
    price: float
    description: str | None = None
    created_date: datetime | None = None
    updated_date: datetime | None = None


# ---------------------------------------------------------------------------
# Customers
# ---------------------------------------------------------------------------
class CustomerRequest(CamelModel):
    version: int | None = None
    name: str = Field(min_length=1, max_length=120)
    email: str = Field(min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+$")
    phone: str | None = Field(default=None, max_length=40)
    address_line1: str = Field(min_length=1, max_length=200)
    address_line2: str | None = Field(default=None, max_length=200)
    city: str | None = Field(default=None, max_length=120)
    state: str | None = Field(default=None, max_length=80)
    postal_code: str | None = Field(default=None, max_length=20)


class CustomerResponse(CamelModel):
    id: int
    version: int
    name: str
    email: str
    phone: str | None = None
    address_line1: str
    address_line2: str | None = None
    city: str | None = None
    state: str | None = None
    postal_code: str | None = None
    created_date: datetime | None = None
    updated_date: datetime | None = None


# ---------------------------------------------------------------------------
# Beer orders
# ---------------------------------------------------------------------------
class OrderItemRequest(CamelModel):
    beer_id: int = Field(gt=0)
    quantity: int = Field(gt=0)


class CreateBeerOrderRequest(CamelModel):
    customer_ref: str | None = Field(default=None, max_length=255)
    payment_amount: float = Field(ge=0)
    items: list[OrderItemRequest] = Field(min_length=1)

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "customerRef": "PO-2025-0001",
                    "paymentAmount": 24.99,
                    "items": [{"beerId": 1, "quantity": 2}],
                }
            ]
        }
    )


class BeerOrderLineResponse(CamelModel):
    id: int
    beer_id: int
    beer_name: str | None = None
    order_quantity: int
    quantity_allocated: int
    status: str | None = None


class BeerOrderResponse(CamelModel):
    id: int
    version: int
    customer_ref: str | None = None
    payment_amount: float
    status: str | None = None
    lines: list[BeerOrderLineResponse]
    created_date: datetime | None = None
    updated_date: datetime | None = None


class BeerOrderSummaryResponse(CamelModel):
    id: int
    customer_ref: str | None = None
    payment_amount: float
    status: str | None = None
    created_date: datetime | None = None


# ---------------------------------------------------------------------------
# Shipments
# ---------------------------------------------------------------------------
class CreateShipmentRequest(CamelModel):
    # Optional; the order id in the path is used when omitted.
    beer_order_id: int | None = None
    shipment_status: str | None = None
    shipped_date: datetime | None = None
    tracking_number: str | None = Field(default=None, max_length=255)
    carrier: str | None = Field(default=None, max_length=255)
    notes: str | None = Field(default=None, max_length=1000)


class UpdateShipmentRequest(CamelModel):
    version: int | None = None
    shipment_status: str | None = None
    shipped_date: datetime | None = None
    tracking_number: str | None = Field(default=None, max_length=255)
    carrier: str | None = Field(default=None, max_length=255)
    notes: str | None = Field(default=None, max_length=1000)


class ShipmentResponse(CamelModel):
    id: int
    version: int
    beer_order_id: int
    shipment_status: str
    shipped_date: datetime | None = None
    tracking_number: str | None = None
    carrier: str | None = None
    notes: str | None = None
    created_date: datetime | None = None
    updated_date: datetime | None = None
