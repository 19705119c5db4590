from __future__ import annotations

import logging

import httpx

from salon.application.exceptions import GatewayTimeout
from salon.application.ports.charge_gateway import ChargeGatewayPort
from salon.core.config import settings
from salon.domain.entities.payment import ChargeResult, PaymentFailure

SQUARE_BASE_URLS = {
    "production": "https://connect.squareup.com",
    "sandbox": "https://connect.squareupsandbox.com",
}

# Square error categories that mean the buyer's instrument was refused.
_CARD_ERROR_CATEGORIES = {"PAYMENT_METHOD_ERROR"}


class SquareChargeGateway(ChargeGatewayPort):
    def __init__(
        self,
        access_token: str | None = None,
        location_id: str | None = None,
        environment: str | None = None,
        api_version: str | None = None,
        timeout_seconds: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._access_token = access_token or settings.SQUARE_ACCESS_TOKEN
        self._location_id = location_id or settings.SQUARE_LOCATION_ID
        env = (environment or settings.SQUARE_ENVIRONMENT).lower()
        self._base_url = SQUARE_BASE_URLS.get(env, SQUARE_BASE_URLS["sandbox"])
        self._api_version = api_version or settings.SQUARE_API_VERSION
        self._timeout = timeout_seconds or settings.PAYMENT_TIMEOUT_SECONDS
        self._transport = transport
        self._logger = logging.getLogger(__name__)

        if not self._access_token:
            raise ValueError("SQUARE_ACCESS_TOKEN is required for Square payments")

    async def create_payment(
        self,
        source_id: str,
        amount_cents: int,
        currency: str,
        idempotency_key: str,
        metadata: dict[str, str] | None = None,
    ) -> ChargeResult:
        meta = dict(metadata or {})
        payload: dict[str, object] = {
            "source_id": source_id,
            "idempotency_key": idempotency_key,
            "amount_money": {"amount": amount_cents, "currency": currency},
            "location_id": self._location_id,
            "autocomplete": True,
        }
        if meta.get("customer_email"):
            payload["buyer_email_address"] = meta["customer_email"]
        note = meta.get("note") or meta.get("service_name")
        if note:
            payload["note"] = f"Deposit: {note}"[:500]

        headers = {
            "Square-Version": self._api_version,
            "Authorization": f"Bearer {self._access_token}",
            "Content-Type": "application/json",
        }

        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                resp = await client.post(f"{self._base_url}/v2/payments", json=payload, headers=headers)
        except httpx.TimeoutException as e:
            self._logger.warning("Square payment timed out", extra={"reason": str(e)})
            raise GatewayTimeout("The payment provider did not respond in time. Please try again.") from e
        except httpx.HTTPError as e:
            self._logger.error("Square payment request failed", extra={"reason": str(e)})
            return ChargeResult(failure=PaymentFailure.gateway_error, message="Unable to reach the payment provider.")

        try:
            data = resp.json()
        except ValueError:
            data = {}

        if resp.status_code >= 400:
            return self._failure_from_errors(resp.status_code, data.get("errors") or [])

        payment = data.get("payment") or {}
        payment_id = payment.get("id")
        status = payment.get("status")
        if not payment_id or status not in {"COMPLETED", "APPROVED"}:
            self._logger.error("Square payment not completed", extra={"status": status})
            return ChargeResult(
                status=status,
                failure=PaymentFailure.gateway_error,
                message="Payment was not completed.",
            )

        self._logger.info("Square payment completed", extra={"transaction_id": payment_id, "status": status})
        return ChargeResult(transaction_id=str(payment_id), status=status)

    def _failure_from_errors(self, status_code: int, errors: list[dict]) -> ChargeResult:
        first = errors[0] if errors else {}
        category = first.get("category")
        code = first.get("code")
        detail = first.get("detail") or "Payment failed."
        self._logger.error(
            "Square payment failed",
            extra={"status": status_code, "reason": f"{category}:{code}"},
        )
        failure = PaymentFailure.card_error if category in _CARD_ERROR_CATEGORIES else PaymentFailure.gateway_error
        return ChargeResult(status=code, failure=failure, message=detail)
