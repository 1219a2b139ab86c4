"""Catalog management — commands and handler for adding, revising and removing beers."""

from protean import handle
from protean.fields import Float, Integer, String, Text
from protean.utils.globals import current_domain

from brewery.beer.beer import Beer
from brewery.domain import brewery
from brewery.shared.identity import next_identity
from brewery.shared.versioning import assert_expected_version, mark_revised
from brewery.utils.logging import get_logger

logger = get_logger(__name__)


@brewery.command(part_of="Beer")
class AddBeer:
    """Add a new beer to the catalog."""

    beer_name = String(required=True, max_length=255)
    beer_style = String(required=True, max_length=50)
    upc = String(required=True, max_length=20)
    quantity_on_hand = Integer(default=0)
    price = Float(required=True)
    description = Text()


@brewery.command(part_of="Beer")
class UpdateBeer:
    """Replace the details of an existing beer."""

    beer_id = Integer(required=True)
    version = Integer()
    beer_name = String(required=True, max_length=255)
    beer_style = String(required=True, max_length=50)
    upc = String(required=True, max_length=20)
    quantity_on_hand = Integer(default=0)
    price = Float(required=True)
    description = Text()


@brewery.command(part_of="Beer")
class RemoveBeer:
    beer_id = Integer(required=True)


@brewery.command_handler(part_of=Beer)
class BeerManagementHandler:
    @handle(AddBeer)
    def add_beer(self, command):
        beer = Beer.create(
            beer_id=next_identity("beer"),
            beer_name=command.beer_name,
            beer_style=command.beer_style,
            upc=command.upc,
            price=command.price,
            quantity_on_hand=command.quantity_on_hand,
            description=command.description,
        )
        current_domain.repository_for(Beer).add(beer)
        logger.info("Added beer", beer_id=beer.id, upc=beer.upc)
        return beer.id

    @handle(UpdateBeer)
    def update_beer(self, command):
        repo = current_domain.repository_for(Beer)
        beer = repo.get(command.beer_id)
        assert_expected_version(beer, command.version)

        beer.revise(
            beer_name=command.beer_name,
            beer_style=command.beer_style,
            upc=command.upc,
            price=command.price,
            quantity_on_hand=command.quantity_on_hand,
            description=command.description,
        )
        mark_revised(beer)
        repo.add(beer)
        logger.info("Updated beer", beer_id=beer.id, version=beer.version)

    @handle(RemoveBeer)
    def remove_beer(self, command):
        repo = current_domain.repository_for(Beer)
        beer = repo.get(command.beer_id)
        repo._dao.delete(beer)
        logger.info("Removed beer", beer_id=command.beer_id)
