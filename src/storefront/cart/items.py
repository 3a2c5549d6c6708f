"""Cart commands and handler — create a cart and add products to it."""

from protean import handle
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from storefront.cart.cart import Cart
from storefront.catalog.product import Product
from storefront.domain import storefront
from storefront.shared.clock import current_clock


@storefront.command(part_of="Cart")
class CreateCart:
    """Open an empty cart for a customer."""

    customer_id = Identifier()


@storefront.command(part_of="Cart")
class AddToCart:
    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)


@storefront.command_handler(part_of=Cart)
class ManageCartHandler:
    @handle(CreateCart)
    def create_cart(self, command):
        cart = Cart.create(customer_id=command.customer_id)
        current_domain.repository_for(Cart).add(cart)
        return str(cart.id)

    @handle(AddToCart)
    def add_to_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.get(command.cart_id)
        product = current_domain.repository_for(Product).get(command.product_id)
        cart.add(product, command.quantity, current_clock().today())
        repo.add(cart)
