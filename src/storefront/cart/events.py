"""Domain events for the Cart aggregate."""

from protean.fields import Float, Identifier, Integer

from storefront.domain import storefront


@storefront.event(part_of="Cart")
class CartItemAdded:
    """Units of a product were added to the cart."""

    __version__ = 1

    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    line_quantity = Integer(required=True)


@storefront.event(part_of="Cart")
class CartCheckedOut:
    """The cart was settled and can no longer be used."""

    __version__ = 1

    cart_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    subtotal = Float(required=True)
    shipping_fee = Float(required=True)
    total = Float(required=True)
