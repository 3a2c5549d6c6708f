"""Cart aggregate — the selections a customer accumulates before checking out.

Lines are keyed by product id and keep the order in which products were
first added; receipts and shipment manifests follow that order. Adding only
validates against the product's stock and expiry, it never touches stock.
When the product is in the catalog, the stored record is what gets checked.
A cart is used for exactly one checkout.
"""

from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import HasMany, Identifier, Integer, String
from protean.utils.globals import current_domain

from storefront.cart.events import CartCheckedOut, CartItemAdded
from storefront.catalog.product import Product
from storefront.domain import storefront
from storefront.shared.errors import InsufficientStock, InvalidQuantity, ProductExpired


class CartStatus(Enum):
    ACTIVE = "Active"
    CHECKED_OUT = "Checked_Out"


@storefront.entity(part_of="Cart")
class CartLine:
    product_id = Identifier(required=True)
    product_name = String(max_length=255)
    quantity = Integer(required=True, min_value=1)


class CartLines:
    """Restartable view over a cart's ``(product, quantity)`` pairs.

    Every iteration walks the lines in insertion order and loads each product
    from the catalog repository, so callers always see current stock. A
    product that is no longer in the catalog has no stock left to sell.
    """

    def __init__(self, cart):
        self._cart = cart

    def __iter__(self):
        repo = current_domain.repository_for(Product)
        for line in self._cart.items:
            product = repo.get_or_none(line.product_id)
            if product is None:
                raise InsufficientStock(f"Not enough {line.product_name} in stock")
            yield product, line.quantity

    def __len__(self):
        return len(self._cart.items)


@storefront.aggregate
class Cart:
    customer_id = Identifier()
    items = HasMany(CartLine)
    status = String(choices=CartStatus, default=CartStatus.ACTIVE.value)

    @classmethod
    def create(cls, customer_id=None):
        return cls(customer_id=customer_id, status=CartStatus.ACTIVE.value)

    def _line_for(self, product_id):
        return next((line for line in self.items if str(line.product_id) == str(product_id)), None)

    def quantity_of(self, product_id):
        line = self._line_for(product_id)
        return line.quantity if line else 0

    def is_empty(self):
        return not self.items

    def lines(self):
        return CartLines(self)

    def add(self, product, quantity, today=None):
        """Add ``quantity`` units of ``product``, merging with an existing line."""
        if CartStatus(self.status) != CartStatus.ACTIVE:
            raise ValidationError({"status": ["Items can only be added to an active cart"]})

        stored = current_domain.repository_for(Product).get_or_none(product.id)
        if stored is not None:
            product = stored

        existing = self._line_for(product.id)
        already_in_cart = existing.quantity if existing else 0

        if quantity <= 0 or already_in_cart + quantity > product.stock:
            raise InvalidQuantity(f"Invalid quantity for {product.name}")
        if product.is_expired(today):
            raise ProductExpired(f"{product.name} is expired")

        if existing:
            existing.quantity += quantity
        else:
            self.add_items(CartLine(product_id=product.id, product_name=product.name, quantity=quantity))

        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                product_id=str(product.id),
                quantity=quantity,
                line_quantity=already_in_cart + quantity,
            )
        )

    def mark_checked_out(self, customer_id, subtotal, shipping_fee, total):
        """Close the cart after a settled checkout. Lines are dropped so it cannot settle twice."""
        if CartStatus(self.status) != CartStatus.ACTIVE:
            raise ValidationError({"status": ["Only active carts can be checked out"]})

        for line in list(self.items):
            self.remove_items(line)
        self.status = CartStatus.CHECKED_OUT.value

        self.raise_(
            CartCheckedOut(
                cart_id=str(self.id),
                customer_id=str(customer_id),
                subtotal=subtotal,
                shipping_fee=shipping_fee,
                total=total,
            )
        )
