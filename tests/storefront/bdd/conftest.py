"""Shared BDD fixtures and step definitions for checkout scenarios."""

from datetime import timedelta

import pytest
from protean import current_domain
from pytest_bdd import given, parsers, then
from storefront.cart.cart import Cart
from storefront.catalog.product import Product, ProductKind
from storefront.customer.customer import Customer


@pytest.fixture()
def catalog():
    """Products by name, as seeded by the Background."""
    return {}


@pytest.fixture()
def cart():
    return Cart.create()


@pytest.fixture()
def shopper():
    return {"customer": None}


@pytest.fixture()
def outcome():
    """Container for the receipt or the error raised by a When step."""
    return {"receipt": None, "exc": None}


@pytest.fixture()
def printed():
    return []


def _build_product(row, today):
    kind = ProductKind(row["kind"])
    price = float(row["price"])
    stock = int(row["stock"])
    if kind == ProductKind.EXPIRING:
        expires_on = today + timedelta(days=int(row["expires_in_days"]))
        return Product.expiring(row["name"], price, stock, expires_on, float(row["weight_kg"]))
    if kind == ProductKind.DURABLE:
        return Product.durable(row["name"], price, stock, float(row["weight_kg"]))
    return Product.digital(row["name"], price, stock)


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("the catalog holds")
def catalog_holds(datatable, catalog, clock):
    header, *rows = datatable
    repo = current_domain.repository_for(Product)
    for values in rows:
        product = _build_product(dict(zip(header, values, strict=True)), clock.today())
        repo.add(product)
        catalog[product.name] = product


@given(parsers.cfparse('a customer "{name}" with a balance of {balance:d}'))
def customer_with_balance(shopper, name, balance):
    customer = Customer.open(name, balance)
    current_domain.repository_for(Customer).add(customer)
    shopper["customer"] = customer


@given(parsers.cfparse('the cart holds {quantity:d} "{name}"'))
def cart_holds(cart, catalog, clock, quantity, name):
    cart.add(catalog[name], quantity, clock.today())


@given(parsers.cfparse("{days:d} days pass"))
def days_pass(clock, days):
    clock.advance(days=days)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the customer's balance is {balance:d}"))
def customer_balance_is(shopper, balance):
    stored = current_domain.repository_for(Customer).get(shopper["customer"].id)
    assert stored.balance == balance


@then(parsers.cfparse('the stock of "{name}" is {stock:d}'))
def stock_is(catalog, name, stock):
    assert current_domain.repository_for(Product).get(catalog[name].id).stock == stock
