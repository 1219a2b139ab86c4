"""Read side of the customer store."""

from protean.utils.globals import current_domain

from brewery.customer.customer import Customer


def get_customer(customer_id: int) -> Customer:
    return current_domain.repository_for(Customer).get(customer_id)


def list_customers() -> list[Customer]:
    return current_domain.repository_for(Customer)._dao.query.order_by("id").all().items
