from __future__ import annotations

import asyncio

from salon.application.exceptions import SdkUnavailable
from salon.application.ports.card_tokenizer import CaptureWidgetPort, CardTokenizerPort
from salon.domain.entities.payment import GatewayConfig, PaymentFailure, TokenizeResult

# Square sandbox test cards mapped to the nonce the Web Payments SDK returns.
TEST_CARD_NONCES = {
    "4111111111111111": "cnon:card-nonce-ok",
    "4000000000000010": "cnon:card-nonce-declined",
}
# Cards the mock SDK refuses before producing a token.
TOKENIZE_ERRORS = {
    "4000000000000002": "Your card was declined.",
    "4000000000000069": "Your card has expired.",
}


class MockCaptureWidget(CaptureWidgetPort):
    def __init__(self, tokenizer: "MockCardTokenizer", surface: str, card_number: str) -> None:
        self._tokenizer = tokenizer
        self.surface = surface
        self._card_number = "".join(ch for ch in card_number if ch.isdigit())
        self.destroyed = False

    async def tokenize(self) -> TokenizeResult:
        if self.destroyed:
            return TokenizeResult(failure=PaymentFailure.card_error, message="Payment form is closed.")
        if self._tokenizer.delay_seconds:
            await asyncio.sleep(self._tokenizer.delay_seconds)
        if self._card_number in TOKENIZE_ERRORS:
            return TokenizeResult(failure=PaymentFailure.card_error, message=TOKENIZE_ERRORS[self._card_number])
        if len(self._card_number) < 13:
            return TokenizeResult(failure=PaymentFailure.card_error, message="Card number is incomplete.")
        token = TEST_CARD_NONCES.get(self._card_number, "cnon:card-nonce-ok")
        return TokenizeResult(token=token)

    def destroy(self) -> None:
        if not self.destroyed:
            self.destroyed = True
            self._tokenizer.active -= 1


class MockCardTokenizer(CardTokenizerPort):
    """Stand-in for the browser card SDK, used in dev and tests."""

    def __init__(
        self,
        card_number: str = "4111 1111 1111 1111",
        sdk_available: bool = True,
        delay_seconds: float = 0.0,
    ) -> None:
        self.card_number = card_number
        self.sdk_available = sdk_available
        self.delay_seconds = delay_seconds
        self.active = 0
        self.attached = 0

    def attach(self, config: GatewayConfig, surface: str) -> MockCaptureWidget:
        if not self.sdk_available:
            raise SdkUnavailable("Payment form could not be loaded. Please try again.")
        self.active += 1
        self.attached += 1
        return MockCaptureWidget(self, surface, self.card_number)


class SubmittedTokenWidget(CaptureWidgetPort):
    def __init__(self, source_id: str | None) -> None:
        self._source_id = (source_id or "").strip()
        self.destroyed = False

    async def tokenize(self) -> TokenizeResult:
        if self.destroyed:
            return TokenizeResult(failure=PaymentFailure.card_error, message="Payment form is closed.")
        if not self._source_id:
            return TokenizeResult(failure=PaymentFailure.card_error, message="Card verification failed")
        return TokenizeResult(token=self._source_id)

    def destroy(self) -> None:
        self.destroyed = True


class SubmittedTokenTokenizer(CardTokenizerPort):
    """
    Server side of the browser SDK: the card was tokenized in the browser and
    only the resulting source id reaches us in the request body.
    """

    def __init__(self, source_id: str | None) -> None:
        self._source_id = source_id

    def attach(self, config: GatewayConfig, surface: str) -> SubmittedTokenWidget:
        return SubmittedTokenWidget(self._source_id)
