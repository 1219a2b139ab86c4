"""Integration tests for the brewery HTTP API via TestClient."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from protean import current_domain

from brewery.api import (
    beer_router,
    customer_router,
    order_router,
    register_exception_handlers,
    shipment_router,
)
from brewery.order.order import BeerOrder


@pytest.fixture()
def client():
    app = FastAPI()
    app.include_router(beer_router)
    app.include_router(customer_router)
    app.include_router(order_router)
    app.include_router(shipment_router)
    register_exception_handlers(app)
    return TestClient(app)


def _create_beer(client, **overrides):
    body = {
        "beerName": "Galaxy Cat IPA",
        "beerStyle": "IPA",
        "upc": "0123456789012",
        "quantityOnHand": 120,
        "price": 12.99,
    }
    body.update(overrides)
    response = client.post("/api/v1/beers", json=body)
    assert response.status_code == 201
    return response.json()["id"]


def _create_order(client, beer_id, quantity=2):
    response = client.post(
        "/api/v1/beer-orders",
        json={"customerRef": "PO-1", "paymentAmount": 24.99, "items": [{"beerId": beer_id, "quantity": quantity}]},
    )
    assert response.status_code == 201
    return response.json()["id"]


def _shipments_url(order_id):
    return f"/api/v1/beerorders/{order_id}/shipments"


class TestBeerEndpoints:
    def test_create_returns_location_and_body(self, client):
        response = client.post(
            "/api/v1/beers",
            json={"beerName": "Moon Dog", "beerStyle": "STOUT", "upc": "42", "price": 9.99},
        )
        assert response.status_code == 201
        data = response.json()
        assert response.headers["location"] == f"/api/v1/beers/{data['id']}"
        assert data["beerName"] == "Moon Dog"
        assert data["quantityOnHand"] == 0
        assert data["version"] == 0

    def test_text_is_html_escaped(self, client):
        beer_id = _create_beer(client, beerName="<b>Bold</b> Ale")
        assert client.get(f"/api/v1/beers/{beer_id}").json()["beerName"] == "&lt;b&gt;Bold&lt;/b&gt; Ale"

    def test_list_filters_and_pages(self, client):
        _create_beer(client, beerName="Galaxy Cat IPA", upc="1")
        _create_beer(client, beerName="Moon Dog Stout", upc="2")

        response = client.get("/api/v1/beers", params={"beerName": "galaxy", "size": 10})
        assert response.status_code == 200
        data = response.json()
        assert data["totalElements"] == 1
        assert data["totalPages"] == 1
        assert data["number"] == 0
        assert data["size"] == 10
        assert data["content"][0]["upc"] == "1"

    def test_list_filter_matches_names_with_escaped_characters(self, client):
        _create_beer(client, beerName="Bob's Ale", upc="1")
        _create_beer(client, beerName="Salt & Stone", upc="2")

        data = client.get("/api/v1/beers", params={"beerName": "Bob's"}).json()
        assert data["totalElements"] == 1
        assert data["content"][0]["upc"] == "1"

        data = client.get("/api/v1/beers", params={"beerName": "salt & stone"}).json()
        assert data["totalElements"] == 1
        assert data["content"][0]["upc"] == "2"

    def test_unknown_sort_property(self, client):
        response = client.get("/api/v1/beers", params={"sort": "color,asc"})
        assert response.status_code == 400
        assert "sort" in response.json()["errors"]

    def test_update(self, client):
        beer_id = _create_beer(client)
        response = client.put(
            f"/api/v1/beers/{beer_id}",
            json={"beerName": "Renamed", "beerStyle": "IPA", "upc": "1", "price": 5.0, "version": 0},
        )
        assert response.status_code == 200
        assert response.json()["beerName"] == "Renamed"
        assert response.json()["version"] == 1

    def test_update_with_stale_version(self, client):
        beer_id = _create_beer(client)
        body = {"beerName": "Renamed", "beerStyle": "IPA", "upc": "1", "price": 5.0, "version": 3}
        response = client.put(f"/api/v1/beers/{beer_id}", json=body)
        assert response.status_code == 409
        assert response.json()["type"] == "about:blank#optimistic-lock-conflict"

    def test_invalid_price(self, client):
        response = client.post("/api/v1/beers", json={"beerName": "X", "beerStyle": "IPA", "upc": "1", "price": 0})
        assert response.status_code == 400
        assert response.headers["content-type"].startswith("application/problem+json")

    def test_delete(self, client):
        beer_id = _create_beer(client)
        assert client.delete(f"/api/v1/beers/{beer_id}").status_code == 204
        assert client.get(f"/api/v1/beers/{beer_id}").status_code == 404
        assert client.delete(f"/api/v1/beers/{beer_id}").status_code == 404


class TestCustomerEndpoints:
    def _create(self, client, email="jane@example.com"):
        return client.post(
            "/api/v1/customers",
            json={"name": "Jane Brewer", "email": email, "addressLine1": "1 Hop Street", "postalCode": "97201"},
        )

    def test_create(self, client):
        response = self._create(client)
        assert response.status_code == 201
        data = response.json()
        assert response.headers["location"] == f"/api/v1/customers/{data['id']}"
        assert data["addressLine1"] == "1 Hop Street"
        assert data["postalCode"] == "97201"

    def test_duplicate_email(self, client):
        self._create(client)
        response = self._create(client)
        assert response.status_code == 409
        body = response.json()
        assert body["type"] == "about:blank#uniqueness-conflict"
        assert "email" in body["errors"]

    def test_list_and_get(self, client):
        customer_id = self._create(client).json()["id"]
        self._create(client, email="other@example.com")

        assert len(client.get("/api/v1/customers").json()) == 2
        assert client.get(f"/api/v1/customers/{customer_id}").json()["email"] == "jane@example.com"

    def test_update(self, client):
        customer_id = self._create(client).json()["id"]
        response = client.put(
            f"/api/v1/customers/{customer_id}",
            json={"name": "Jane B.", "email": "jane@example.com", "addressLine1": "2 Malt Road"},
        )
        assert response.status_code == 200
        assert response.json()["name"] == "Jane B."
        assert response.json()["postalCode"] is None

    def test_missing_required_field(self, client):
        response = client.post("/api/v1/customers", json={"name": "No Email", "addressLine1": "1 Street"})
        assert response.status_code == 400
        assert "email" in response.json()["errors"]

    def test_delete(self, client):
        customer_id = self._create(client).json()["id"]
        assert client.delete(f"/api/v1/customers/{customer_id}").status_code == 204
        assert client.delete(f"/api/v1/customers/{customer_id}").status_code == 404


class TestBeerOrderEndpoints:
    def test_create_order_presents_pending(self, client):
        beer_id = _create_beer(client)
        response = client.post(
            "/api/v1/beer-orders",
            json={"paymentAmount": 24.99, "items": [{"beerId": beer_id, "quantity": 2}]},
        )
        assert response.status_code == 201
        data = response.json()
        assert data["id"] > 0
        assert response.headers["location"] == f"/api/v1/beer-orders/{data['id']}"
        assert data["status"] == "PENDING"
        assert data["paymentAmount"] == 24.99
        assert len(data["lines"]) == 1
        line = data["lines"][0]
        assert line["beerId"] == beer_id
        assert line["beerName"] == "Galaxy Cat IPA"
        assert line["orderQuantity"] == 2
        assert line["quantityAllocated"] == 0
        assert line["status"] == "PENDING"

        assert current_domain.repository_for(BeerOrder).get(data["id"]).status == "NEW"

    def test_empty_items(self, client):
        response = client.post("/api/v1/beer-orders", json={"paymentAmount": 1.0, "items": []})
        assert response.status_code == 400

    def test_zero_quantity(self, client):
        beer_id = _create_beer(client)
        response = client.post(
            "/api/v1/beer-orders", json={"paymentAmount": 1.0, "items": [{"beerId": beer_id, "quantity": 0}]}
        )
        assert response.status_code == 400

    def test_unknown_beer(self, client):
        response = client.post(
            "/api/v1/beer-orders", json={"paymentAmount": 1.0, "items": [{"beerId": 9, "quantity": 1}]}
        )
        assert response.status_code == 404
        assert response.json()["type"] == "about:blank#not-found"

    def test_list_and_list_alias(self, client):
        beer_id = _create_beer(client)
        _create_order(client, beer_id)
        _create_order(client, beer_id)

        for path in ("/api/v1/beer-orders", "/api/v1/beer-orders/list"):
            data = client.get(path, params={"sort": "createdAt,desc"}).json()
            assert data["totalElements"] == 2
            assert "lines" not in data["content"][0]
            assert data["content"][0]["status"] == "PENDING"

    def test_get_missing(self, client):
        assert client.get("/api/v1/beer-orders/31337").status_code == 404

    def test_delete_with_shipments_is_a_conflict(self, client):
        order_id = _create_order(client, _create_beer(client))
        client.post(_shipments_url(order_id), json={})

        response = client.delete(f"/api/v1/beer-orders/{order_id}")
        assert response.status_code == 409
        assert response.json()["type"] == "about:blank#business-rule-violation"

    def test_delete(self, client):
        order_id = _create_order(client, _create_beer(client))
        assert client.delete(f"/api/v1/beer-orders/{order_id}").status_code == 204
        assert client.get(f"/api/v1/beer-orders/{order_id}").status_code == 404


class TestShipmentEndpoints:
    @pytest.fixture()
    def order_id(self, client):
        return _create_order(client, _create_beer(client))

    def test_create_defaults_to_pending(self, client, order_id):
        response = client.post(_shipments_url(order_id), json={"beerOrderId": order_id})
        assert response.status_code == 201
        data = response.json()
        assert data["shipmentStatus"] == "PENDING"
        assert data["beerOrderId"] == order_id
        assert response.headers["location"] == f"{_shipments_url(order_id)}/{data['id']}"

    def test_mismatched_order_id(self, client, order_id):
        response = client.post(_shipments_url(order_id), json={"beerOrderId": order_id + 1})
        assert response.status_code == 400

    def test_unknown_order(self, client):
        assert client.post(_shipments_url(999), json={}).status_code == 404
        assert client.get(_shipments_url(999)).status_code == 404

    def test_unknown_status(self, client, order_id):
        response = client.post(_shipments_url(order_id), json={"shipmentStatus": "in_transit"})
        assert response.status_code == 400
        assert "shipment_status" in response.json()["errors"]

    def test_patch_rule_violation(self, client, order_id):
        shipment_id = client.post(_shipments_url(order_id), json={}).json()["id"]

        response = client.patch(f"{_shipments_url(order_id)}/{shipment_id}", json={"shipmentStatus": "IN_TRANSIT"})
        assert response.status_code == 409
        body = response.json()
        assert body["status"] == 409
        assert set(body["errors"]) == {"tracking_number", "carrier"}

        assert client.get(f"{_shipments_url(order_id)}/{shipment_id}").json()["shipmentStatus"] == "PENDING"

    def test_patch_partial_update(self, client, order_id):
        shipment_id = client.post(
            _shipments_url(order_id), json={"trackingNumber": "OLD", "carrier": "DHL"}
        ).json()["id"]

        response = client.patch(f"{_shipments_url(order_id)}/{shipment_id}", json={"trackingNumber": "NEW"})
        assert response.status_code == 204

        data = client.get(f"{_shipments_url(order_id)}/{shipment_id}").json()
        assert data["trackingNumber"] == "NEW"
        assert data["carrier"] == "DHL"

    def test_patch_missing_shipment(self, client, order_id):
        response = client.patch(f"{_shipments_url(order_id)}/999", json={"notes": "x"})
        assert response.status_code == 404
        assert response.json()["type"] == "about:blank#not-found"

    def test_list(self, client, order_id):
        first = client.post(_shipments_url(order_id), json={}).json()["id"]
        second = client.post(_shipments_url(order_id), json={}).json()["id"]

        data = client.get(_shipments_url(order_id)).json()
        assert [s["id"] for s in data] == [first, second]

    def test_shipment_of_another_order(self, client, order_id):
        other_order = _create_order(client, _create_beer(client, upc="2"))
        shipment_id = client.post(_shipments_url(other_order), json={}).json()["id"]
        assert client.get(f"{_shipments_url(order_id)}/{shipment_id}").status_code == 404

    def test_delete(self, client, order_id):
        shipment_id = client.post(_shipments_url(order_id), json={}).json()["id"]
        assert client.delete(f"{_shipments_url(order_id)}/{shipment_id}").status_code == 204
        assert client.delete(f"{_shipments_url(order_id)}/{shipment_id}").status_code == 404
