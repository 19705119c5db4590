from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

CENTS = Decimal("0.01")


@dataclass(frozen=True)
class Service:
    id: int
    name: str
    category: str  # "hair", "eye", "special" or any other tag
    price: Decimal
    down_payment: Decimal
    duration: int  # minutes
    description: str | None = None
    image: str | None = None

    @property
    def remaining_balance(self) -> Decimal:
        """Amount collected in the salon after the deposit."""
        return (self.price - self.down_payment).quantize(CENTS)
