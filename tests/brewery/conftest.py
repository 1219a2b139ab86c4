"""Shared fixtures for brewery tests."""

import json

import pytest
from protean import current_domain

from brewery.beer.management import AddBeer
from brewery.order.placement import PlaceBeerOrder
from brewery.shipment.creation import CreateShipment


def _add_beer(beer_name="Galaxy Cat IPA", beer_style="IPA", upc="0123456789012", price=12.99, **extra):
    command = AddBeer(beer_name=beer_name, beer_style=beer_style, upc=upc, price=price, **extra)
    return current_domain.process(command, asynchronous=False)


def _place_order(items, payment_amount=24.99, customer_ref="PO-2025-0001"):
    command = PlaceBeerOrder(
        customer_ref=customer_ref,
        payment_amount=payment_amount,
        items=json.dumps([{"beer_id": beer_id, "quantity": quantity} for beer_id, quantity in items]),
    )
    return current_domain.process(command, asynchronous=False)


def _create_shipment(beer_order_id, **fields):
    command = CreateShipment(beer_order_id=beer_order_id, **fields)
    return current_domain.process(command, asynchronous=False)


@pytest.fixture()
def add_beer():
    return _add_beer


@pytest.fixture()
def place_order():
    return _place_order


@pytest.fixture()
def create_shipment():
    return _create_shipment


@pytest.fixture()
def beer_id():
    return _add_beer()


@pytest.fixture()
def order_id(beer_id):
    return _place_order([(beer_id, 2)])
