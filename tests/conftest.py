import os
from pathlib import Path

import pytest

_MARKERS_BY_DIRECTORY = {
    "/domain/": "domain",
    "/application/": "application",
    "/integration/": "integration",
    "/bdd/": "bdd",
}


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Initialize the brewery domain before collection.

    Test modules import aggregates and commands at module level, so the
    domain must be configured, and its context active, before they are
    collected.
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env

    from brewery.domain import brewery

    brewery.init()
    brewery.domain_context().push()


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        for directory, marker in _MARKERS_BY_DIRECTORY.items():
            if directory in test_path:
                item.add_marker(getattr(pytest.mark, marker))
                break

        # API tests go through the whole request stack
        if "/integration/" in test_path and not any(m.name == "fast" for m in item.iter_markers()):
            item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session")
def brewery_domain():
    from brewery.domain import brewery

    return brewery


@pytest.fixture(scope="session", autouse=True)
def setup_db(brewery_domain):
    from brewery.utils.db import drop_db, setup_db

    setup_db(brewery_domain)

    yield

    drop_db(brewery_domain)


@pytest.fixture(autouse=True)
def run_around_tests(brewery_domain):
    """Push domain context before each test, cleanup after."""
    ctx = brewery_domain.domain_context()
    ctx.push()

    yield

    from protean import current_domain

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    for _, broker in current_domain.brokers.items():
        broker._data_reset()

    current_domain.event_store.store._data_reset()
    ctx.pop()
