"""Demo: walk a small store through one good checkout and four failures.

Seeds the catalog with cheese, biscuits, a TV and a scratch card, then runs:

    1. Bob buys 2x Cheese, 1x Biscuits and 1x Scratch Card (receipt printed)
    2. Bob checks out an empty cart            → Cart is empty
    3. Jane (balance 50) tries to buy a TV     → Insufficient balance for JANE
    4. Someone adds milk that expired yesterday → Milk is expired
    5. Someone adds 99 TVs (3 in stock)         → Invalid quantity for TV

Each failure message is printed and the demo moves on to the next scenario.

Usage:
    storefront-demo
    storefront-demo --log-level DEBUG
    storefront-demo --log-dir logs
"""

import argparse
from datetime import timedelta

from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from storefront.cart.cart import Cart
from storefront.catalog.product import Product
from storefront.checkout.processor import OrderProcessor
from storefront.customer.customer import Customer
from storefront.domain import storefront
from storefront.shared.clock import Clock, SystemClock
from storefront.utils.logging import configure_logging


def seed_catalog(clock: Clock) -> dict[str, Product]:
    today = clock.today()
    products = {
        "cheese": Product.expiring("Cheese", 100, 10, today + timedelta(days=3), 0.4),
        "biscuits": Product.expiring("Biscuits", 150, 5, today + timedelta(days=2), 0.7),
        "tv": Product.durable("TV", 5000, 3, 8),
        "card": Product.digital("Scratch Card", 50, 100),
    }
    repo = current_domain.repository_for(Product)
    for product in products.values():
        repo.add(product)
    return products


def run_scenarios(clock: Clock, echo=print) -> None:
    """Run the five demo scenarios, reporting failures through ``echo``."""
    products = seed_catalog(clock)
    processor = OrderProcessor(clock=clock)

    bob = Customer.open("Bob", 1000)
    cart = Cart.create(customer_id=bob.id)
    cart.add(products["cheese"], 2, clock.today())
    cart.add(products["biscuits"], 1, clock.today())
    cart.add(products["card"], 1, clock.today())
    processor.checkout(bob, cart)

    try:
        processor.checkout(bob, Cart.create(customer_id=bob.id))
    except ValidationError as exc:
        echo(str(exc))

    try:
        jane = Customer.open("JANE", 50)
        big = Cart.create(customer_id=jane.id)
        big.add(products["tv"], 1, clock.today())
        processor.checkout(jane, big)
    except ValidationError as exc:
        echo(str(exc))

    try:
        milk = Product.expiring("Milk", 20, 1, clock.today() - timedelta(days=1), 0.5)
        Cart.create().add(milk, 1, clock.today())
    except ValidationError as exc:
        echo(str(exc))

    try:
        Cart.create().add(products["tv"], 99, clock.today())
    except ValidationError as exc:
        echo(str(exc))


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Run the storefront checkout demo",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Log level for diagnostics written to stderr (default: from LOG_LEVEL / environment)",
    )
    parser.add_argument(
        "--log-dir",
        default=None,
        help="Also write rotating log files to this directory",
    )
    args = parser.parse_args(argv)

    configure_logging(level=args.log_level, log_dir=args.log_dir)

    storefront.init()
    with storefront.domain_context():
        run_scenarios(SystemClock())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
