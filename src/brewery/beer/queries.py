"""Read side of the catalog."""

from protean.utils.globals import current_domain

from brewery.beer.beer import Beer
from brewery.shared.paging import Page, SortTerm, fetch_page, resolve_order_by

# Client-facing property -> Beer attribute
SORTABLE_PROPERTIES = {
    "id": "id",
    "beerName": "beer_name",
    "beerStyle": "beer_style",
    "upc": "upc",
    "quantityOnHand": "quantity_on_hand",
    "price": "price",
    "createdDate": "created_date",
    "updatedDate": "updated_date",
}


def get_beer(beer_id: int) -> Beer:
    return current_domain.repository_for(Beer).get(beer_id)


def list_beers(beer_name: str | None = None, page: int = 0, size: int = 20, sort: list[SortTerm] | None = None) -> Page:
    """List beers, optionally narrowed to names containing ``beer_name`` (any case)."""
    filters = {}
    if beer_name and beer_name.strip():
        filters["beer_name__icontains"] = beer_name.strip()

    order_by = resolve_order_by(sort or [], SORTABLE_PROPERTIES)
    return fetch_page(Beer, page, size, order_by=order_by, sort=sort, **filters)
