from datetime import date, timedelta

import pytest
from protean.integrations.pytest import DomainFixture

TODAY = date(2026, 3, 10)


@pytest.fixture(scope="session")
def storefront_bed():
    from storefront.domain import storefront

    bed = DomainFixture(storefront)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(storefront_bed):
    with storefront_bed.domain_context():
        yield


@pytest.fixture()
def clock():
    from storefront.shared.clock import FixedClock

    return FixedClock(TODAY)


@pytest.fixture(autouse=True)
def _domain_clock(clock):
    """Pin the domain clock so nothing depends on the wall-clock date."""
    from storefront.shared.clock import use_clock

    previous = use_clock(clock)
    yield
    use_clock(previous)


@pytest.fixture()
def stocked():
    """Persist products in the catalog repository and hand them back."""
    from protean import current_domain
    from storefront.catalog.product import Product

    def _stock(*products):
        repo = current_domain.repository_for(Product)
        for product in products:
            repo.add(product)
        return products[0] if len(products) == 1 else products

    return _stock


@pytest.fixture()
def cheese():
    from storefront.catalog.product import Product

    return Product.expiring("Cheese", 100, 10, TODAY + timedelta(days=3), 0.4)


@pytest.fixture()
def biscuits():
    from storefront.catalog.product import Product

    return Product.expiring("Biscuits", 150, 5, TODAY + timedelta(days=2), 0.7)


@pytest.fixture()
def tv():
    from storefront.catalog.product import Product

    return Product.durable("TV", 5000, 3, 8)


@pytest.fixture()
def card():
    from storefront.catalog.product import Product

    return Product.digital("Scratch Card", 50, 100)
