from __future__ import annotations

import asyncio
import logging

from salon.application.ports.charge_gateway import ChargeGatewayPort
from salon.domain.entities.payment import ChargeResult, PaymentFailure

# Square sandbox nonces that are refused at charge time.
DECLINED_NONCES = {
    "cnon:card-nonce-declined": "Card declined.",
    "cnon:card-nonce-rejected-cvv": "Card verification code check failed.",
    "cnon:card-nonce-rejected-postalcode": "Postal code check failed.",
    "cnon:card-nonce-rejected-expiration": "Card expiration date is invalid.",
}


class MockChargeGateway(ChargeGatewayPort):
    def __init__(self, delay_seconds: float = 0.0) -> None:
        self._delay = delay_seconds
        self._charges: dict[str, dict[str, object]] = {}
        self._by_idempotency_key: dict[str, str] = {}
        self._logger = logging.getLogger(__name__)

    @property
    def charges(self) -> dict[str, dict[str, object]]:
        return dict(self._charges)

    async def create_payment(
        self,
        source_id: str,
        amount_cents: int,
        currency: str,
        idempotency_key: str,
        metadata: dict[str, str] | None = None,
    ) -> ChargeResult:
        if self._delay:
            await asyncio.sleep(self._delay)

        if source_id in DECLINED_NONCES:
            return ChargeResult(
                status="CARD_DECLINED",
                failure=PaymentFailure.card_error,
                message=DECLINED_NONCES[source_id],
            )

        existing = self._by_idempotency_key.get(idempotency_key)
        if existing:
            return ChargeResult(transaction_id=existing, status="COMPLETED")

        payment_id = f"mock-payment-{len(self._charges) + 1}"
        self._charges[payment_id] = {
            "source_id": source_id,
            "amount_cents": amount_cents,
            "currency": currency,
            "metadata": dict(metadata or {}),
        }
        self._by_idempotency_key[idempotency_key] = payment_id
        self._logger.info("Mock payment completed", extra={"transaction_id": payment_id})
        return ChargeResult(transaction_id=payment_id, status="COMPLETED")
