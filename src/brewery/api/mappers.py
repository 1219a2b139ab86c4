"""Explicit mapping from aggregates to response schemas."""

from brewery.api.schemas import (
    BeerOrderLineResponse,
    BeerOrderResponse,
    BeerOrderSummaryResponse,
    BeerResponse,
    CustomerResponse,
    PageResponse,
    ShipmentResponse,
)
from brewery.order.order import NEW

# Orders and lines are stored as NEW; clients know that state as PENDING.
PRESENTED_STATUSES = {NEW: "PENDING"}


def present_status(status: str | None) -> str | None:
    return PRESENTED_STATUSES.get(status, status)


def beer_to_response(beer) -> BeerResponse:
    return BeerResponse(
        id=beer.id,
        version=beer.version,
        beer_name=beer.beer_name,
        beer_style=beer.beer_style,
        upc=beer.upc,
        quantity_on_hand=beer.quantity_on_hand,
        price=beer.price,
        description=beer.description,
        created_date=beer.created_date,
        updated_date=beer.updated_date,
    )


def customer_to_response(customer) -> CustomerResponse:
    return CustomerResponse(
        id=customer.id,
        version=customer.version,
        name=customer.name,
        email=customer.email,
        phone=customer.phone,
        address_line1=customer.address_line1,
        address_line2=customer.address_line2,
        city=customer.city,
        state=customer.state,
        postal_code=customer.postal_code,
        created_date=customer.created_date,
        updated_date=customer.updated_date,
    )


def order_to_response(order, beer_names: dict[int, str | None]) -> BeerOrderResponse:
    return BeerOrderResponse(
        id=order.id,
        version=order.version,
        customer_ref=order.customer_ref,
        payment_amount=order.payment_amount,
        status=present_status(order.status),
        lines=[
            BeerOrderLineResponse(
                id=line.id,
                beer_id=line.beer_id,
                beer_name=beer_names.get(line.beer_id),
                order_quantity=line.order_quantity,
                quantity_allocated=line.quantity_allocated,
                status=present_status(line.status),
            )
            for line in sorted(order.lines, key=lambda line: line.id)
        ],
        created_date=order.created_date,
        updated_date=order.updated_date,
    )


def order_to_summary(order) -> BeerOrderSummaryResponse:
    return BeerOrderSummaryResponse(
        id=order.id,
        customer_ref=order.customer_ref,
        payment_amount=order.payment_amount,
        status=present_status(order.status),
        created_date=order.created_date,
    )


def shipment_to_response(shipment) -> ShipmentResponse:
    return ShipmentResponse(
        id=shipment.id,
        version=shipment.version,
        beer_order_id=shipment.beer_order_id,
        shipment_status=shipment.shipment_status,
        shipped_date=shipment.shipped_date,
        tracking_number=shipment.tracking_number,
        carrier=shipment.carrier,
        notes=shipment.notes,
        created_date=shipment.created_date,
        updated_date=shipment.updated_date,
    )


def page_to_response(page, to_response) -> PageResponse:
    return PageResponse(
        content=[to_response(item) for item in page.items],
        total_elements=page.total,
        total_pages=page.total_pages,
        number=page.number,
        size=page.size,
    )
