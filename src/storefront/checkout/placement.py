"""Checkout command and handler — settles a stored cart for a stored customer."""

import structlog
from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from storefront.cart.cart import Cart
from storefront.checkout.processor import OrderProcessor
from storefront.customer.customer import Customer
from storefront.domain import storefront
from storefront.shared.clock import current_clock

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Cart")
class CheckOutCart:
    """Settle a cart against a customer's balance."""

    cart_id = Identifier(required=True)
    customer_id = Identifier(required=True)


@storefront.command_handler(part_of=Cart)
class CheckOutCartHandler:
    @handle(CheckOutCart)
    def check_out_cart(self, command):
        cart_repo = current_domain.repository_for(Cart)
        cart = cart_repo.get(command.cart_id)
        customer = current_domain.repository_for(Customer).get(command.customer_id)

        receipt = OrderProcessor(clock=current_clock(), echo=None).checkout(customer, cart)
        cart_repo.add(cart)

        logger.info("Cart checked out", cart_id=str(cart.id), total=receipt.total)
        return receipt
