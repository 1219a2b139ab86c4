"""Paging and sorting for list queries.

Sort terms arrive from clients as ``property[,property...][,asc|desc]``
strings, one per ``sort`` query parameter. They are parsed into ``SortTerm``
values, client-facing aliases are rewritten, and the result is resolved to
aggregate attribute names before it reaches the repository.
"""

from dataclasses import dataclass, field
from math import ceil

from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

_DIRECTIONS = {"asc": False, "desc": True}


@dataclass(frozen=True)
class SortTerm:
    property: str
    descending: bool = False

    def __str__(self) -> str:
        return f"{self.property},{'desc' if self.descending else 'asc'}"


@dataclass
class Page:
    items: list
    total: int
    number: int
    size: int
    sort: list[SortTerm] = field(default_factory=list)

    @property
    def total_pages(self) -> int:
        return ceil(self.total / self.size) if self.size else 0


def parse_sort(values: list[str] | None) -> list[SortTerm]:
    """Parse ``sort`` parameters, keeping the order in which terms were given."""
    terms = []
    for value in values or []:
        tokens = [token.strip() for token in value.split(",") if token.strip()]
        if not tokens:
            continue

        descending = False
        if len(tokens) > 1 and tokens[-1].lower() in _DIRECTIONS:
            descending = _DIRECTIONS[tokens.pop().lower()]

        terms.extend(SortTerm(property=token, descending=descending) for token in tokens)
    return terms


def translate_sort_aliases(terms: list[SortTerm], aliases: dict[str, str]) -> list[SortTerm]:
    """Rewrite aliased properties, leaving direction and position untouched."""
    return [SortTerm(property=aliases.get(term.property, term.property), descending=term.descending) for term in terms]


def resolve_order_by(terms: list[SortTerm], attributes: dict[str, str]) -> list[str]:
    """Map client property names to aggregate attributes (``-`` prefix for descending)."""
    unknown = [term.property for term in terms if term.property not in attributes]
    if unknown:
        raise ValidationError({"sort": [f"Cannot sort by '{name}'" for name in unknown]})

    return [f"{'-' if term.descending else ''}{attributes[term.property]}" for term in terms]


def fetch_page(
    aggregate_cls,
    page: int,
    size: int,
    order_by: list[str] | None = None,
    sort: list[SortTerm] | None = None,
    **filters,
) -> Page:
    """Load one page of ``aggregate_cls`` records."""
    if page < 0:
        raise ValidationError({"page": ["Page index must not be negative"]})
    if size < 1:
        raise ValidationError({"size": ["Page size must be at least 1"]})

    query = current_domain.repository_for(aggregate_cls)._dao.query
    if filters:
        query = query.filter(**filters)
    query = query.order_by(order_by or ["id"])

    results = query.offset(page * size).limit(size).all()
    return Page(items=list(results.items), total=results.total, number=page, size=size, sort=sort or [])
