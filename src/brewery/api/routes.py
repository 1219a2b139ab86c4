"""FastAPI routes for the brewery — beers, customers, orders and shipments."""

import html
import json

from fastapi import APIRouter, Query, Response
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from brewery.api.mappers import (
    beer_to_response,
    customer_to_response,
    order_to_response,
    order_to_summary,
    page_to_response,
    shipment_to_response,
)
from brewery.api.schemas import (
    BeerOrderResponse,
    BeerOrderSummaryResponse,
    BeerRequest,
    BeerResponse,
    CreateBeerOrderRequest,
    CreateShipmentRequest,
    CustomerRequest,
    CustomerResponse,
    PageResponse,
    ShipmentResponse,
    UpdateShipmentRequest,
)
from brewery.beer import queries as beer_queries
from brewery.beer.management import AddBeer, RemoveBeer, UpdateBeer
from brewery.customer import queries as customer_queries
from brewery.customer.management import CreateCustomer, DeleteCustomer, UpdateCustomer
from brewery.order import queries as order_queries
from brewery.order.placement import PlaceBeerOrder
from brewery.order.removal import RemoveBeerOrder
from brewery.shared.paging import parse_sort
from brewery.shipment import queries as shipment_queries
from brewery.shipment.creation import CreateShipment
from brewery.shipment.removal import RemoveShipment
from brewery.shipment.revision import UpdateShipment


def _escape(value: str | None) -> str | None:
    return html.escape(value) if value is not None else None


# ---------------------------------------------------------------------------
# Beer Router
# ---------------------------------------------------------------------------
beer_router = APIRouter(prefix="/api/v1/beers", tags=["beers"])


def _beer_fields(body: BeerRequest) -> dict:
    # Catalog text is stored HTML-escaped
    return {
        "beer_name": _escape(body.beer_name),
        "beer_style": _escape(body.beer_style),
        "upc": _escape(body.upc),
        "quantity_on_hand": body.quantity_on_hand,
        "price": body.price,
        "description": _escape(body.description),
    }


@beer_router.get("", response_model=PageResponse[BeerResponse])
async def list_beers(
    beer_name: str | None = Query(default=None, alias="beerName"),
    page: int = Query(default=0, ge=0),
    size: int = Query(default=20, ge=1, le=1000),
    sort: list[str] | None = Query(default=None),
) -> PageResponse[BeerResponse]:
    # Stored names are escaped, so the filter is too
    result = beer_queries.list_beers(beer_name=_escape(beer_name), page=page, size=size, sort=parse_sort(sort))
    return page_to_response(result, beer_to_response)


@beer_router.get("/{beer_id}", response_model=BeerResponse)
async def get_beer(beer_id: int) -> BeerResponse:
    return beer_to_response(beer_queries.get_beer(beer_id))


@beer_router.post("", status_code=201, response_model=BeerResponse)
async def create_beer(body: BeerRequest, response: Response) -> BeerResponse:
    command = AddBeer(**_beer_fields(body))
    beer_id = current_domain.process(command, asynchronous=False)
    response.headers["Location"] = f"/api/v1/beers/{beer_id}"
    return beer_to_response(beer_queries.get_beer(beer_id))


@beer_router.put("/{beer_id}", response_model=BeerResponse)
async def update_beer(beer_id: int, body: BeerRequest) -> BeerResponse:
    command = UpdateBeer(beer_id=beer_id, version=body.version, **_beer_fields(body))
    current_domain.process(command, asynchronous=False)
    return beer_to_response(beer_queries.get_beer(beer_id))


@beer_router.delete("/{beer_id}", status_code=204)
async def delete_beer(beer_id: int) -> Response:
    current_domain.process(RemoveBeer(beer_id=beer_id), asynchronous=False)
    return Response(status_code=204)


# ---------------------------------------------------------------------------
# Customer Router
# ---------------------------------------------------------------------------
customer_router = APIRouter(prefix="/api/v1/customers", tags=["customers"])


def _customer_fields(body: CustomerRequest) -> dict:
    return body.model_dump(exclude={"version"})


@customer_router.get("", response_model=list[CustomerResponse])
async def list_customers() -> list[CustomerResponse]:
    return [customer_to_response(customer) for customer in customer_queries.list_customers()]


@customer_router.get("/{customer_id}", response_model=CustomerResponse)
async def get_customer(customer_id: int) -> CustomerResponse:
    return customer_to_response(customer_queries.get_customer(customer_id))


@customer_router.post("", status_code=201, response_model=CustomerResponse)
async def create_customer(body: CustomerRequest, response: Response) -> CustomerResponse:
    command = CreateCustomer(**_customer_fields(body))
    customer_id = current_domain.process(command, asynchronous=False)
    response.headers["Location"] = f"/api/v1/customers/{customer_id}"
    return customer_to_response(customer_queries.get_customer(customer_id))


@customer_router.put("/{customer_id}", response_model=CustomerResponse)
async def update_customer(customer_id: int, body: CustomerRequest) -> CustomerResponse:
    command = UpdateCustomer(customer_id=customer_id, version=body.version, **_customer_fields(body))
    current_domain.process(command, asynchronous=False)
    return customer_to_response(customer_queries.get_customer(customer_id))


@customer_router.delete("/{customer_id}", status_code=204)
async def delete_customer(customer_id: int) -> Response:
    current_domain.process(DeleteCustomer(customer_id=customer_id), asynchronous=False)
    return Response(status_code=204)


# ---------------------------------------------------------------------------
# Beer Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/api/v1/beer-orders", tags=["beer-orders"])


@order_router.get("", response_model=PageResponse[BeerOrderSummaryResponse])
@order_router.get("/list", response_model=PageResponse[BeerOrderSummaryResponse])
async def list_orders(
    page: int = Query(default=0, ge=0),
    size: int = Query(default=20, ge=1, le=1000),
    sort: list[str] | None = Query(default=None),
) -> PageResponse[BeerOrderSummaryResponse]:
    result = order_queries.list_orders(page=page, size=size, sort=parse_sort(sort))
    return page_to_response(result, order_to_summary)


@order_router.post("", status_code=201, response_model=BeerOrderResponse)
async def create_order(body: CreateBeerOrderRequest, response: Response) -> BeerOrderResponse:
    command = PlaceBeerOrder(
        customer_ref=body.customer_ref,
        payment_amount=body.payment_amount,
        items=json.dumps([{"beer_id": item.beer_id, "quantity": item.quantity} for item in body.items]),
    )
    order_id = current_domain.process(command, asynchronous=False)
    response.headers["Location"] = f"/api/v1/beer-orders/{order_id}"

    order = order_queries.get_order(order_id)
    return order_to_response(order, order_queries.beer_names_for(order))


@order_router.get("/{order_id}", response_model=BeerOrderResponse)
async def get_order(order_id: int) -> BeerOrderResponse:
    order = order_queries.get_order(order_id)
    return order_to_response(order, order_queries.beer_names_for(order))


@order_router.delete("/{order_id}", status_code=204)
async def delete_order(order_id: int) -> Response:
    current_domain.process(RemoveBeerOrder(order_id=order_id), asynchronous=False)
    return Response(status_code=204)


# ---------------------------------------------------------------------------
# Shipment Router
# ---------------------------------------------------------------------------
shipment_router = APIRouter(prefix="/api/v1/beerorders/{beer_order_id}/shipments", tags=["shipments"])


def _shipment_of_order(beer_order_id: int, shipment_id: int):
    """Load a shipment, treating one recorded against another order as missing."""
    shipment = shipment_queries.get_shipment(shipment_id)
    if shipment.beer_order_id != beer_order_id:
        raise ObjectNotFoundError(
            {"_entity": f"Shipment {shipment_id} does not exist for beer order {beer_order_id}"}
        )
    return shipment


@shipment_router.post("", status_code=201, response_model=ShipmentResponse)
async def create_shipment(beer_order_id: int, body: CreateShipmentRequest, response: Response) -> ShipmentResponse:
    if body.beer_order_id is not None and body.beer_order_id != beer_order_id:
        raise ValidationError({"beer_order_id": ["Beer order id in the body does not match the path"]})

    command = CreateShipment(
        beer_order_id=beer_order_id,
        shipment_status=body.shipment_status,
        shipped_date=body.shipped_date,
        tracking_number=body.tracking_number,
        carrier=body.carrier,
        notes=body.notes,
    )
    shipment_id = current_domain.process(command, asynchronous=False)
    response.headers["Location"] = f"/api/v1/beerorders/{beer_order_id}/shipments/{shipment_id}"
    return shipment_to_response(shipment_queries.get_shipment(shipment_id))


@shipment_router.get("", response_model=list[ShipmentResponse])
async def list_shipments(beer_order_id: int) -> list[ShipmentResponse]:
    order_queries.get_order(beer_order_id)
    return [shipment_to_response(s) for s in shipment_queries.list_shipments_for_order(beer_order_id)]


@shipment_router.get("/{shipment_id}", response_model=ShipmentResponse)
async def get_shipment(beer_order_id: int, shipment_id: int) -> ShipmentResponse:
    return shipment_to_response(_shipment_of_order(beer_order_id, shipment_id))


@shipment_router.patch("/{shipment_id}", status_code=204)
async def update_shipment(beer_order_id: int, shipment_id: int, body: UpdateShipmentRequest) -> Response:
    _shipment_of_order(beer_order_id, shipment_id)
    command = UpdateShipment(
        shipment_id=shipment_id,
        version=body.version,
        shipment_status=body.shipment_status,
        shipped_date=body.shipped_date,
        tracking_number=body.tracking_number,
        carrier=body.carrier,
        notes=body.notes,
    )
    current_domain.process(command, asynchronous=False)
    return Response(status_code=204)


@shipment_router.delete("/{shipment_id}", status_code=204)
async def delete_shipment(beer_order_id: int, shipment_id: int) -> Response:
    _shipment_of_order(beer_order_id, shipment_id)
    current_domain.process(RemoveShipment(shipment_id=shipment_id), asynchronous=False)
    return Response(status_code=204)
