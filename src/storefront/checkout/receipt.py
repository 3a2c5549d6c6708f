"""Receipt produced by a committed checkout."""

from dataclasses import dataclass

from storefront.shared.money import format_amount

RECEIPT_HEADER = "** Checkout receipt **"
RECEIPT_RULE = "-" * 22


@dataclass(frozen=True)
class ReceiptLine:
    quantity: int
    name: str
    amount: float


@dataclass(frozen=True)
class Receipt:
    lines: tuple[ReceiptLine, ...]
    subtotal: float
    shipping_fee: float
    total: float
    balance_left: float

    def render(self) -> str:
        """Receipt text as printed at the till, ending in a blank line."""
        rows = [RECEIPT_HEADER]
        for line in self.lines:
            rows.append(f"{line.quantity}x {line.name:<18} {format_amount(line.amount)}")
        rows.append(RECEIPT_RULE)
        rows.append(f"Subtotal {format_amount(self.subtotal)}")
        rows.append(f"Shipping {format_amount(self.shipping_fee)}")
        rows.append(f"Amount   {format_amount(self.total)}")
        rows.append(f"Balance left: {format_amount(self.balance_left)}")
        return "\n".join(rows) + "\n\n"
