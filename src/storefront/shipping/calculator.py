"""Shipping calculator — fee and packing manifest for the shippable part of a cart.

    fee = round_half_up(base_fee + rate_per_kg * total_weight_kg)

Only the final fee is rounded; weights are summed as exact floats. Lines for
products that are not shipped contribute nothing, and a cart with nothing to
ship costs nothing to ship.
"""

from collections.abc import Iterable
from dataclasses import dataclass

import structlog

from storefront.domain import storefront
from storefront.shared.money import format_amount, round_half_up

logger = structlog.get_logger(__name__)

DEFAULT_BASE_FEE = 10.0
DEFAULT_RATE_PER_KG = 20.0


def configured_rates() -> tuple[float, float]:
    """Base fee and per-kg rate from the domain's ``[custom]`` config, falling back to defaults."""
    custom = storefront.config.get("custom") or {}
    return (
        float(custom.get("SHIPPING_BASE_FEE", DEFAULT_BASE_FEE)),
        float(custom.get("SHIPPING_RATE_PER_KG", DEFAULT_RATE_PER_KG)),
    )


@dataclass(frozen=True)
class ManifestEntry:
    """One shippable cart line as it appears on the shipment notice."""

    quantity: int
    name: str
    grams_per_unit: float


@dataclass(frozen=True)
class Shipment:
    """Result of pricing the shippable lines of a cart."""

    fee: float
    manifest: tuple[ManifestEntry, ...] = ()
    total_weight_kg: float = 0.0

    @property
    def is_empty(self) -> bool:
        return not self.manifest

    def notice(self) -> str:
        """Shipment notice text, or an empty string when nothing ships."""
        if self.is_empty:
            return ""

        lines = ["** Shipment notice **"]
        for entry in self.manifest:
            lines.append(f"{entry.quantity}x {entry.name} {format_amount(entry.grams_per_unit)}g")
        lines.append(f"Total package weight {format_amount(self.total_weight_kg, 1)}kg")
        return "\n".join(lines) + "\n\n"


class ShippingCalculator:
    """Prices shipment for a sequence of ``(product, quantity)`` lines."""

    def __init__(self, base_fee: float | None = None, rate_per_kg: float | None = None) -> None:
        configured_base, configured_rate = configured_rates()
        self.base_fee = configured_base if base_fee is None else base_fee
        self.rate_per_kg = configured_rate if rate_per_kg is None else rate_per_kg

    def compute_shipment(self, lines: Iterable) -> Shipment:
        manifest = []
        total_weight_kg = 0.0

        for product, quantity in lines:
            if not product.is_shippable():
                continue
            unit_weight = product.weight_per_unit()
            manifest.append(ManifestEntry(quantity=quantity, name=product.name, grams_per_unit=unit_weight * 1000))
            total_weight_kg += unit_weight * quantity

        if not manifest:
            return Shipment(fee=0.0)

        fee = round_half_up(self.base_fee + self.rate_per_kg * total_weight_kg)
        logger.debug(
            "Shipment priced",
            parcels=len(manifest),
            total_weight_kg=total_weight_kg,
            fee=fee,
        )
        return Shipment(fee=fee, manifest=tuple(manifest), total_weight_kg=total_weight_kg)
