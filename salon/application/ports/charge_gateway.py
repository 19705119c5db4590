from __future__ import annotations

from abc import ABC, abstractmethod

from salon.domain.entities.payment import ChargeResult


class ChargeGatewayPort(ABC):
    @abstractmethod
    async def create_payment(
        self,
        source_id: str,
        amount_cents: int,
        currency: str,
        idempotency_key: str,
        metadata: dict[str, str] | None = None,
    ) -> ChargeResult:
        """
        Charge a tokenized source. Expected provider failures come back as a
        ChargeResult with `failure` set; transport timeouts raise GatewayTimeout.
        """
        raise NotImplementedError
