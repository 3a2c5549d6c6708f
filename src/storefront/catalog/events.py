"""Domain events for the Product aggregate."""

from protean.fields import Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Product")
class StockReduced:
    """Units of a product left the shelf as part of a settled checkout."""

    __version__ = 1

    product_id = Identifier(required=True)
    product_name = String(required=True)
    quantity = Integer(required=True)
    previous_stock = Integer(required=True)
    new_stock = Integer(required=True)
