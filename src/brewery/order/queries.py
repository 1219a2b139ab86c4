"""Read side of the order store."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from brewery.beer.beer import Beer
from brewery.order.order import BeerOrder
from brewery.shared.paging import Page, SortTerm, fetch_page, resolve_order_by, translate_sort_aliases

# Older clients sort orders by ``createdAt``; the stored property is ``createdDate``.
ORDER_SORT_ALIASES = {"createdAt": "createdDate"}

SORTABLE_PROPERTIES = {
    "id": "id",
    "customerRef": "customer_ref",
    "paymentAmount": "payment_amount",
    "status": "status",
    "createdDate": "created_date",
    "updatedDate": "updated_date",
}


def get_order(order_id: int) -> BeerOrder:
    return current_domain.repository_for(BeerOrder).get(order_id)


def beer_names_for(order: BeerOrder) -> dict[int, str | None]:
    """Current names of the beers on an order's lines.

    A beer removed from the catalog after the order was placed maps to ``None``.
    """
    repo = current_domain.repository_for(Beer)
    names = {}
    for line in order.lines:
        if line.beer_id in names:
            continue
        try:
            names[line.beer_id] = repo.get(line.beer_id).beer_name
        except ObjectNotFoundError:
            names[line.beer_id] = None
    return names


def list_orders(page: int = 0, size: int = 20, sort: list[SortTerm] | None = None) -> Page:
    terms = translate_sort_aliases(sort or [], ORDER_SORT_ALIASES)
    order_by = resolve_order_by(terms, SORTABLE_PROPERTIES)
    return fetch_page(BeerOrder, page, size, order_by=order_by, sort=terms)
