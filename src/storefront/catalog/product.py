"""Product aggregate — the catalog entry a cart line points at.

A product's shipping and expiry behaviour is carried by two optional fields
rather than by its type:

    expires_on:  set  → expirable (expired once today is past this date)
    weight_kg:   > 0  → shippable (contributes weight to the shipping fee)
    neither           → digital

``kind`` names the canonical combination and the invariant below keeps the
fields consistent with it.
"""

from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Date, Float, Integer, String

from storefront.catalog.events import StockReduced
from storefront.domain import storefront
from storefront.shared.clock import current_clock
from storefront.shared.errors import InvalidQuantity


class ProductKind(Enum):
    EXPIRING = "Expiring"
    DURABLE = "Durable"
    DIGITAL = "Digital"


@storefront.aggregate
class Product:
    """Something the store sells, with a price and a stock count."""

    name = String(required=True, max_length=255)
    kind = String(required=True, choices=ProductKind)
    price = Float(required=True, min_value=0.0)
    stock = Integer(default=0, min_value=0)
    expires_on = Date()
    weight_kg = Float(min_value=0.0)

    @invariant.post
    def capabilities_must_match_kind(self):
        if self.kind is None:
            return
        kind = ProductKind(self.kind)
        shippable = self.weight_kg is not None and self.weight_kg > 0

        if kind == ProductKind.DIGITAL:
            if self.weight_kg is not None or self.expires_on is not None:
                raise ValidationError({"kind": [f"Digital product {self.name} cannot have a weight or an expiry date"]})
            return

        if not shippable:
            raise ValidationError({"weight_kg": [f"{self.name} must have a positive unit weight to be shipped"]})
        if kind == ProductKind.EXPIRING and self.expires_on is None:
            raise ValidationError({"expires_on": [f"Expiring product {self.name} needs an expiry date"]})
        if kind == ProductKind.DURABLE and self.expires_on is not None:
            raise ValidationError({"expires_on": [f"Durable product {self.name} cannot expire"]})

    # -------------------------------------------------------------------
    # Factories
    # -------------------------------------------------------------------
    @classmethod
    def expiring(cls, name, price, stock, expires_on, weight_kg):
        """A perishable, shippable product (cheese, biscuits)."""
        return cls(
            name=name,
            kind=ProductKind.EXPIRING.value,
            price=price,
            stock=stock,
            expires_on=expires_on,
            weight_kg=weight_kg,
        )

    @classmethod
    def durable(cls, name, price, stock, weight_kg):
        """A shippable product that never expires (TV)."""
        return cls(
            name=name,
            kind=ProductKind.DURABLE.value,
            price=price,
            stock=stock,
            weight_kg=weight_kg,
        )

    @classmethod
    def digital(cls, name, price, stock):
        """Neither shipped nor expiring (scratch card)."""
        return cls(name=name, kind=ProductKind.DIGITAL.value, price=price, stock=stock)

    # -------------------------------------------------------------------
    # Capabilities
    # -------------------------------------------------------------------
    def is_expirable(self):
        return self.expires_on is not None

    def is_expired(self, today=None):
        """True once ``today`` is after the expiry date. Never true for non-expirable products."""
        if not self.is_expirable():
            return False
        if today is None:
            today = current_clock().today()
        return today > self.expires_on

    def is_shippable(self):
        return self.weight_kg is not None and self.weight_kg > 0

    def is_digital(self):
        return not self.is_shippable() and not self.is_expirable()

    def weight_per_unit(self):
        """Unit weight in kilograms, 0.0 for products that are not shipped."""
        return self.weight_kg if self.is_shippable() else 0.0

    # -------------------------------------------------------------------
    # Stock
    # -------------------------------------------------------------------
    def reduce_stock(self, quantity):
        """Take ``quantity`` units out of stock. Only called when a checkout settles."""
        if quantity < 0 or quantity > self.stock:
            raise InvalidQuantity(f"Invalid quantity for {self.name}")

        previous_stock = self.stock
        self.stock = previous_stock - quantity

        self.raise_(
            StockReduced(
                product_id=str(self.id),
                product_name=self.name,
                quantity=quantity,
                previous_stock=previous_stock,
                new_stock=self.stock,
            )
        )
