"""Customer aggregate — the account a checkout is settled against."""

from protean.exceptions import ValidationError
from protean.fields import Float, String

from storefront.customer.events import BalanceWithdrawn
from storefront.domain import storefront


@storefront.aggregate
class Customer:
    """A shopper with a spendable balance.

    The balance is only ever reduced by a settled checkout, and only after the
    checkout has confirmed it covers the order total.
    """

    name = String(required=True, max_length=100)
    balance = Float(default=0.0)

    @classmethod
    def open(cls, name, balance=0.0):
        return cls(name=name, balance=balance)

    def can_afford(self, amount):
        return self.balance >= amount

    def withdraw(self, amount):
        if amount < 0:
            raise ValidationError({"amount": ["Withdrawal amount must not be negative"]})

        previous_balance = self.balance
        self.balance = previous_balance - amount

        self.raise_(
            BalanceWithdrawn(
                customer_id=str(self.id),
                customer_name=self.name,
                amount=amount,
                previous_balance=previous_balance,
                new_balance=self.balance,
            )
        )
