"""
Ticket pricing with the group discount.
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

CENTS = Decimal("0.01")


@dataclass(frozen=True)
class PriceQuote:
    base_amount: Decimal
    discount_amount: Decimal
    total_amount: Decimal
    discount_applied: bool


@dataclass(frozen=True)
class PricingPolicy:
    """Bookings of at least `group_threshold` tickets get `group_rate` off."""

    group_threshold: int = 4
    group_rate: Decimal = Decimal("0.10")

    def quote(self, unit_price: Decimal, ticket_count: int) -> PriceQuote:
        base = Decimal(unit_price) * ticket_count
        applied = ticket_count >= self.group_threshold
        discount = (base * self.group_rate).quantize(CENTS, ROUND_HALF_UP) if applied else Decimal("0")
        return PriceQuote(
            base_amount=base.quantize(CENTS, ROUND_HALF_UP),
            discount_amount=discount.quantize(CENTS),
            total_amount=(base - discount).quantize(CENTS, ROUND_HALF_UP),
            discount_applied=applied,
        )
