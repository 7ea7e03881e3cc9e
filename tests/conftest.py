import os
from pathlib import Path

import pytest
from protean.integrations.pytest import DomainFixture


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Select the config overlay before the domain module is first imported."""
    os.environ["PROTEAN_ENV"] = session.config.option.env


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session")
def storefront_bed():
    from storefront.domain import storefront

    bed = DomainFixture(storefront)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(storefront_bed):
    """Run every test in a fresh domain context; stores are reset on exit."""
    with storefront_bed.domain_context():
        yield


@pytest.fixture()
def product_data():
    """Payload for a product priced 100, discounted to 80, with 5 units of size M."""
    return {
        "sku": "SHIRT-OXF-001",
        "name": "Oxford Shirt",
        "description": "Classic cotton oxford shirt",
        "price": 100.0,
        "discount_price": 80.0,
        "category": "shirts",
        "brand": "Acme",
        "gender": "men",
        "sizes": [{"size": "M", "stock": 5}, {"size": "L", "stock": 0}],
        "colors": [{"color": "Navy", "color_code": "#000080"}, {"color": "White"}],
        "images": [{"url": "https://cdn.example.com/oxford.jpg", "alt": "Front"}],
        "tags": ["cotton", "office"],
    }


@pytest.fixture()
def create_product(product_data):
    """Persist a product through the CreateProduct command and return its id."""
    from protean import current_domain
    from storefront.product.creation import CreateProduct

    def _create(**overrides):
        payload = {**product_data, **overrides}
        return current_domain.process(CreateProduct(**payload), asynchronous=False)

    return _create
