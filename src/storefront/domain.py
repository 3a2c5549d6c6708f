"""Storefront bounded context — Catalog, Cart, Customer accounts and Checkout.

Handles product classification (expiring, durable, digital), cart building
against stock limits, shipping computation and the checkout pipeline that
settles a purchase against the customer's balance.
"""

import structlog
from protean.domain import Domain

storefront = Domain(name="storefront")

logger = structlog.get_logger(__name__)
