"""Domain initialization and configuration.

Beers, customers, beer orders and their shipments live in a single bounded
context. Configuration is read from ``domain.toml`` next to this module;
``PROTEAN_ENV`` selects the environment overlay.
"""

from protean.domain import Domain

from brewery.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging()

# Get logger for this module
logger = get_logger(__name__)

# Domain Composition Root
brewery = Domain(name="brewery")
