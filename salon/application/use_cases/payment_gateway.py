from __future__ import annotations

import asyncio
import logging
import uuid
from contextlib import contextmanager
from decimal import Decimal
from typing import Iterator

from salon.application.exceptions import GatewayTimeout, SdkUnavailable, WidgetAlreadyActive
from salon.application.ports.card_tokenizer import CaptureWidgetPort, CardTokenizerPort
from salon.application.ports.charge_gateway import ChargeGatewayPort
from salon.application.utils.money import format_amount, to_cents
from salon.domain.entities.payment import ChargeResult, GatewayConfig, PaymentFailure, TokenizeResult


class PaymentGatewayAdapter:
    """
    Single entry point to the card SDK and the charge API.

    At most one capture widget may be attached per booking session; the widget
    returned by `initialize` is destroyed when its `with` block exits, however
    it exits.
    """

    def __init__(
        self,
        tokenizer: CardTokenizerPort,
        gateway: ChargeGatewayPort,
        config: GatewayConfig,
        tokenize_timeout_seconds: float = 30.0,
        charge_timeout_seconds: float = 15.0,
    ) -> None:
        self._tokenizer = tokenizer
        self._gateway = gateway
        self._config = config
        self._tokenize_timeout = tokenize_timeout_seconds
        self._charge_timeout = charge_timeout_seconds
        self._active: dict[str, CaptureWidgetPort] = {}
        self._logger = logging.getLogger(__name__)

    @property
    def config(self) -> GatewayConfig:
        return self._config

    def is_active(self, session_id: str) -> bool:
        return session_id in self._active

    @contextmanager
    def initialize(
        self,
        session_id: str,
        config: GatewayConfig | None = None,
        surface: str = "card-container",
        tokenizer: CardTokenizerPort | None = None,
    ) -> Iterator[CaptureWidgetPort]:
        if session_id in self._active:
            raise WidgetAlreadyActive(f"A capture widget is already attached for session {session_id}")

        widget = (tokenizer or self._tokenizer).attach(config or self._config, surface)
        self._active[session_id] = widget
        try:
            yield widget
        finally:
            self._active.pop(session_id, None)
            try:
                widget.destroy()
            except Exception:
                self._logger.exception("Failed to destroy capture widget")

    async def tokenize(self, session_id: str) -> TokenizeResult:
        widget = self._active.get(session_id)
        if widget is None:
            raise RuntimeError(f"No capture widget attached for session {session_id}")
        try:
            return await asyncio.wait_for(widget.tokenize(), timeout=self._tokenize_timeout)
        except asyncio.TimeoutError:
            self._logger.warning("Tokenization timed out", extra={"reason": "timeout"})
            return TokenizeResult(
                failure=PaymentFailure.gateway_timeout,
                message="The payment form did not respond in time. Please try again.",
            )
        except SdkUnavailable as e:
            return TokenizeResult(failure=PaymentFailure.sdk_unavailable, message=str(e))

    async def charge(
        self,
        token: str,
        amount: Decimal,
        metadata: dict[str, str] | None = None,
        expected_amount: Decimal | None = None,
    ) -> ChargeResult:
        if expected_amount is not None and amount != expected_amount:
            self._logger.warning(
                "Rejected charge with mismatched amount",
                extra={"reason": f"expected={format_amount(expected_amount)} got={format_amount(amount)}"},
            )
            return ChargeResult(
                failure=PaymentFailure.amount_mismatch,
                message=f"Deposit amount must be {format_amount(expected_amount)}.",
            )
        if amount <= 0:
            return ChargeResult(failure=PaymentFailure.amount_mismatch, message="Amount must be positive.")

        try:
            result = await asyncio.wait_for(
                self._gateway.create_payment(
                    source_id=token,
                    amount_cents=to_cents(amount),
                    currency=self._config.currency,
                    idempotency_key=str(uuid.uuid4()),
                    metadata=metadata,
                ),
                timeout=self._charge_timeout,
            )
        except (asyncio.TimeoutError, GatewayTimeout):
            self._logger.warning("Charge timed out", extra={"reason": "timeout"})
            return ChargeResult(
                failure=PaymentFailure.gateway_timeout,
                message="The payment provider did not respond in time. Please try again.",
            )

        if result.ok:
            self._logger.info("Charge succeeded", extra={"transaction_id": result.transaction_id})
        else:
            self._logger.info("Charge failed", extra={"reason": result.failure.value if result.failure else None})
        return result
