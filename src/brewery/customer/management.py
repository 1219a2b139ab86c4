"""Customer management — commands and handler.

Email addresses are unique across customers. Uniqueness is checked at write
time inside the same unit of work that stores the customer.
"""

from protean import handle
from protean.fields import Integer, String
from protean.utils.globals import current_domain

from brewery.customer.customer import Customer
from brewery.domain import brewery
from brewery.shared.errors import UniquenessConflict
from brewery.shared.identity import next_identity
from brewery.shared.versioning import assert_expected_version, mark_revised
from brewery.utils.logging import get_logger

logger = get_logger(__name__)

_DETAIL_FIELDS = ("phone", "address_line2", "city", "state", "postal_code")


@brewery.command(part_of="Customer")
class CreateCustomer:
    name = String(required=True, max_length=120)
    email = String(required=True, max_length=255)
    phone = String(max_length=40)
    address_line1 = String(required=True, max_length=200)
    address_line2 = String(max_length=200)
    city = String(max_length=120)
    state = String(max_length=80)
    postal_code = String(max_length=20)


@brewery.command(part_of="Customer")
class UpdateCustomer:
    customer_id = Integer(required=True)
    version = Integer()
    name = String(required=True, max_length=120)
    email = String(required=True, max_length=255)
    phone = String(max_length=40)
    address_line1 = String(required=True, max_length=200)
    address_line2 = String(max_length=200)
    city = String(max_length=120)
    state = String(max_length=80)
    postal_code = String(max_length=20)


@brewery.command(part_of="Customer")
class DeleteCustomer:
    customer_id = Integer(required=True)


def _email_taken(email, exclude_id=None):
    matches = current_domain.repository_for(Customer)._dao.query.filter(email=email).all().items
    return any(customer.id != exclude_id for customer in matches)


def _details(command):
    return {name: getattr(command, name) for name in _DETAIL_FIELDS}


@brewery.command_handler(part_of=Customer)
class CustomerManagementHandler:
    @handle(CreateCustomer)
    def create_customer(self, command):
        if _email_taken(command.email):
            raise UniquenessConflict("email", command.email)

        customer = Customer.register(
            customer_id=next_identity("customer"),
            name=command.name,
            email=command.email,
            address_line1=command.address_line1,
            **_details(command),
        )
        current_domain.repository_for(Customer).add(customer)
        logger.info("Created customer", customer_id=customer.id)
        return customer.id

    @handle(UpdateCustomer)
    def update_customer(self, command):
        repo = current_domain.repository_for(Customer)
        customer = repo.get(command.customer_id)
        assert_expected_version(customer, command.version)

        if command.email != customer.email and _email_taken(command.email, exclude_id=customer.id):
            raise UniquenessConflict("email", command.email)

        customer.revise(
            name=command.name,
            email=command.email,
            address_line1=command.address_line1,
            **_details(command),
        )
        mark_revised(customer)
        repo.add(customer)
        logger.info("Updated customer", customer_id=customer.id, version=customer.version)

    @handle(DeleteCustomer)
    def delete_customer(self, command):
        repo = current_domain.repository_for(Customer)
        customer = repo.get(command.customer_id)
        repo._dao.delete(customer)
        logger.info("Deleted customer", customer_id=command.customer_id)
