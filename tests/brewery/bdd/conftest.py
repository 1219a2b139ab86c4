"""Shared BDD fixtures and step definitions for the brewery."""

import pytest
from pytest_bdd import given, parsers


@pytest.fixture()
def error():
    """Container for captured errors."""
    return {"exc": None}


@pytest.fixture()
def catalog():
    """Beer name -> id for beers added during a scenario."""
    return {}


@given(parsers.cfparse('a beer order for {quantity:d} cases of "{beer_name}"'), target_fixture="order_id")
def beer_order(quantity, beer_name, add_beer, place_order, catalog):
    catalog[beer_name] = add_beer(beer_name=beer_name)
    return place_order([(catalog[beer_name], quantity)])
