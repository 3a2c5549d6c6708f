"""Domain events for the Customer aggregate."""

from protean.fields import Float, Identifier, String

from storefront.domain import storefront


@storefront.event(part_of="Customer")
class BalanceWithdrawn:
    """Money left the customer's balance to pay for an order."""

    __version__ = 1

    customer_id = Identifier(required=True)
    customer_name = String(required=True)
    amount = Float(required=True)
    previous_balance = Float(required=True)
    new_balance = Float(required=True)
