"""Checkout error kinds.

Each kind is a Protean ``ValidationError`` so callers that only care about
"a domain rule was violated" can keep catching that, while the checkout
pipeline and its callers can tell the kinds apart. ``str(error)`` is the
human-readable message; ``error.messages`` keeps the usual
``{field: [message]}`` shape.
"""

from protean.exceptions import ValidationError


class CheckoutError(ValidationError):
    """Base class for every failure raised along the checkout pipeline."""

    field = "checkout"
    rejected_at = None

    def __init__(self, message, **kwargs):
        self.message = message
        super().__init__({self.field: [message]}, **kwargs)

    def __str__(self):
        return self.message


class InvalidQuantity(CheckoutError):
    """Non-positive quantity, or more than the product has in stock."""

    field = "quantity"


class ProductExpired(CheckoutError):
    """An expirable product is past its expiry date."""

    field = "product"


class EmptyCart(CheckoutError):
    """Checkout was attempted on a cart with no lines."""

    field = "cart"


class InsufficientStock(CheckoutError):
    """Stock dropped below a line's quantity between add and checkout."""

    field = "stock"


class InsufficientBalance(CheckoutError):
    """The order total exceeds the customer's balance."""

    field = "balance"
