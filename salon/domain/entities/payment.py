from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum


class PaymentFailure(str, Enum):
    card_error = "card_error"
    sdk_unavailable = "sdk_unavailable"
    gateway_error = "gateway_error"
    gateway_timeout = "gateway_timeout"
    amount_mismatch = "amount_mismatch"


@dataclass(frozen=True)
class GatewayConfig:
    application_id: str
    location_id: str
    environment: str
    currency: str = "USD"


@dataclass(frozen=True)
class TokenizeResult:
    token: str | None = None
    failure: PaymentFailure | None = None
    message: str | None = None

    @property
    def ok(self) -> bool:
        return self.failure is None and bool(self.token)


@dataclass(frozen=True)
class ChargeResult:
    transaction_id: str | None = None
    status: str | None = None  # provider status, e.g. "COMPLETED"
    failure: PaymentFailure | None = None
    message: str | None = None

    @property
    def ok(self) -> bool:
        return self.failure is None and bool(self.transaction_id)


@dataclass(frozen=True)
class PaymentConfirmation:
    transaction_id: str
    amount: Decimal
    metadata: dict[str, str] = field(default_factory=dict)
