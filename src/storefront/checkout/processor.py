"""Checkout pipeline — validates, prices, ships and settles a cart.

Stages of one attempt:

    Started → Validating → Pricing → Shipping → BalanceCheck → Committed
                  └────────────┴──────────┴───────────┴──────→ Rejected

Every check runs before anything is mutated, so a rejected attempt leaves
cart, stock and balance exactly as they were. Checks and settlement work on
the stored product and customer records, never on the objects the caller
holds, and run under a process-wide settlement lock so two checkouts cannot
both pass the stock and balance gates. The withdrawal and stock reductions
are persisted in one unit of work; the cart is closed only once that unit of
work has been committed or joined.
"""

import sys
import threading
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

import structlog
from protean import UnitOfWork
from protean.utils.globals import current_domain

from storefront.catalog.product import Product
from storefront.checkout.receipt import Receipt, ReceiptLine
from storefront.customer.customer import Customer
from storefront.shared.clock import Clock, current_clock
from storefront.shared.errors import (
    CheckoutError,
    EmptyCart,
    InsufficientBalance,
    InsufficientStock,
    ProductExpired,
)
from storefront.shipping.calculator import ShippingCalculator
from storefront.utils.logging import log_context

logger = structlog.get_logger(__name__)

_settlement_lock = threading.RLock()


class CheckoutStage(Enum):
    STARTED = "Started"
    VALIDATING = "Validating"
    PRICING = "Pricing"
    SHIPPING = "Shipping"
    BALANCE_CHECK = "BalanceCheck"
    COMMITTED = "Committed"
    REJECTED = "Rejected"


@dataclass
class _Attempt:
    """Progress of a single ``checkout`` call."""

    stage: CheckoutStage = CheckoutStage.STARTED

    def enter(self, stage: CheckoutStage) -> None:
        self.stage = stage
        logger.debug("Checkout stage", stage=stage.value)


def _write_stdout(text: str) -> None:
    sys.stdout.write(text)


def _account_for(customer: Customer) -> Customer:
    """The stored record for ``customer``, or a working copy of a customer never saved."""
    stored = current_domain.repository_for(Customer).get_or_none(customer.id)
    if stored is not None:
        return stored
    return Customer(id=customer.id, name=customer.name, balance=customer.balance)


class OrderProcessor:
    """Runs checkouts.

    ``echo`` receives the shipment notice and receipt text; pass ``None`` to
    run silently (the command handler does). A processor keeps no per-call
    state and can be shared between threads.
    """

    def __init__(
        self,
        clock: Clock | None = None,
        shipping: ShippingCalculator | None = None,
        echo: Callable[[str], None] | None = _write_stdout,
    ) -> None:
        self.clock = clock
        self.shipping = shipping or ShippingCalculator()
        self.echo = echo

    def _today(self):
        return (self.clock or current_clock()).today()

    def _emit(self, text: str) -> None:
        if text and self.echo is not None:
            self.echo(text)

    def checkout(self, customer: Customer, cart) -> Receipt:
        """Settle ``cart`` against ``customer``'s balance and return the receipt.

        A rejected attempt raises a ``CheckoutError`` whose ``rejected_at``
        names the stage that turned it down.
        """
        attempt = _Attempt()

        with log_context(customer=customer.name, cart_id=str(cart.id)):
            try:
                with _settlement_lock:
                    receipt = self._run(attempt, customer, cart)
            except CheckoutError as exc:
                exc.rejected_at = attempt.stage
                attempt.enter(CheckoutStage.REJECTED)
                logger.warning(
                    "Checkout rejected",
                    stage=exc.rejected_at.value,
                    reason=str(exc),
                    error=type(exc).__name__,
                )
                raise

            attempt.enter(CheckoutStage.COMMITTED)
            logger.info(
                "Checkout committed",
                subtotal=receipt.subtotal,
                shipping_fee=receipt.shipping_fee,
                total=receipt.total,
                balance_left=receipt.balance_left,
            )
            self._emit(receipt.render())
            return receipt

    def _run(self, attempt: _Attempt, customer: Customer, cart) -> Receipt:
        attempt.enter(CheckoutStage.VALIDATING)
        if cart.is_empty():
            raise EmptyCart("Cart is empty")

        # Products are loaded once; the same instances are priced, shipped and settled.
        lines = list(cart.lines())
        today = self._today()
        for product, quantity in lines:
            if product.is_expired(today):
                raise ProductExpired(f"{product.name} expired before checkout")
            if quantity > product.stock:
                raise InsufficientStock(f"Not enough {product.name} in stock")

        attempt.enter(CheckoutStage.PRICING)
        receipt_lines = []
        subtotal = 0.0
        for product, quantity in lines:
            amount = product.price * quantity
            receipt_lines.append(ReceiptLine(quantity=quantity, name=product.name, amount=amount))
            subtotal += amount

        attempt.enter(CheckoutStage.SHIPPING)
        shipment = self.shipping.compute_shipment(lines)
        self._emit(shipment.notice())
        total = subtotal + shipment.fee

        attempt.enter(CheckoutStage.BALANCE_CHECK)
        account = _account_for(customer)
        if not account.can_afford(total):
            raise InsufficientBalance(f"Insufficient balance for {account.name}")

        self._settle(account, lines, total)
        cart.mark_checked_out(account.id, subtotal, shipment.fee, total)

        return Receipt(
            lines=tuple(receipt_lines),
            subtotal=subtotal,
            shipping_fee=shipment.fee,
            total=total,
            balance_left=account.balance,
        )

    def _settle(self, account: Customer, lines, total) -> None:
        # Joins the unit of work a command handler already opened.
        with UnitOfWork():
            account.withdraw(total)
            for product, quantity in lines:
                product.reduce_stock(quantity)

            current_domain.repository_for(Customer).add(account)
            product_repo = current_domain.repository_for(Product)
            for product, _ in lines:
                product_repo.add(product)
