"""Relational schema management for the brewery domain.

Only providers backed by SQLAlchemy (sqlite, postgresql) have a schema; the
in-memory provider is skipped.
"""

from protean.domain import Domain
from sqlalchemy import create_engine

from brewery.utils.logging import get_logger

logger = get_logger(__name__)

_RELATIONAL_PROVIDERS = ("sqlite", "postgresql")


def _relational_providers(domain: Domain):
    for _, provider in domain.providers.items():
        if provider.conn_info["provider"] in _RELATIONAL_PROVIDERS:
            yield provider


def _register_models(domain: Domain, provider) -> None:
    # A model is attached to the provider's metadata the first time its DAO is built
    for records in (domain.registry.aggregates, domain.registry.entities):
        for _, record in records.items():
            if record.cls.meta_.provider == provider.name:
                domain.repository_for(record.cls)._dao  # noqa: B018


def setup_db(domain: Domain) -> None:
    """Create tables for every aggregate and entity."""
    with domain.domain_context():
        for provider in _relational_providers(domain):
            _register_models(domain, provider)
            provider._metadata.create_all(create_engine(provider.conn_info["database_uri"]))
            logger.info("Database schema created", provider=provider.name)


def drop_db(domain: Domain) -> None:
    """Drop every table created by ``setup_db``."""
    with domain.domain_context():
        for provider in _relational_providers(domain):
            provider._metadata.drop_all(create_engine(provider.conn_info["database_uri"]))
            logger.info("Database schema dropped", provider=provider.name)
