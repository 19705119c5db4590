from __future__ import annotations

import asyncio
from decimal import Decimal

import pytest

from salon.application.exceptions import SdkUnavailable, WidgetAlreadyActive
from salon.application.use_cases.payment_gateway import PaymentGatewayAdapter
from salon.domain.entities.payment import GatewayConfig, PaymentFailure
from salon.infrastructure.payments.capture_widgets import MockCardTokenizer, SubmittedTokenTokenizer
from salon.infrastructure.payments.mock_gateway import MockChargeGateway

CONFIG = GatewayConfig(application_id="sandbox-app", location_id="L-TEST", environment="sandbox")


def _adapter(tokenizer=None, gateway=None, **kwargs):
    return PaymentGatewayAdapter(
        tokenizer=tokenizer or MockCardTokenizer(),
        gateway=gateway or MockChargeGateway(),
        config=CONFIG,
        **kwargs,
    )


def test_widget_is_destroyed_when_block_exits():
    tokenizer = MockCardTokenizer()
    adapter = _adapter(tokenizer)
    with adapter.initialize("s1") as widget:
        assert adapter.is_active("s1")
        assert tokenizer.active == 1
    assert widget.destroyed
    assert not adapter.is_active("s1")
    assert tokenizer.active == 0


def test_widget_is_destroyed_when_block_raises():
    tokenizer = MockCardTokenizer()
    adapter = _adapter(tokenizer)
    with pytest.raises(ValueError):
        with adapter.initialize("s1"):
            raise ValueError("boom")
    assert tokenizer.active == 0
    assert not adapter.is_active("s1")


def test_second_widget_for_same_session_is_refused():
    tokenizer = MockCardTokenizer()
    adapter = _adapter(tokenizer)
    with adapter.initialize("s1"):
        with pytest.raises(WidgetAlreadyActive):
            with adapter.initialize("s1"):
                pass
        assert tokenizer.attached == 1
        with adapter.initialize("s2"):
            assert tokenizer.active == 2
    assert tokenizer.active == 0


def test_sdk_unavailable_on_attach():
    adapter = _adapter(MockCardTokenizer(sdk_available=False))
    with pytest.raises(SdkUnavailable):
        with adapter.initialize("s1"):
            pass
    assert not adapter.is_active("s1")


def test_tokenize_results():
    async def run(tokenizer):
        adapter = _adapter(tokenizer)
        with adapter.initialize("s1"):
            return await adapter.tokenize("s1")

    ok = asyncio.run(run(MockCardTokenizer()))
    assert ok.ok and ok.token == "cnon:card-nonce-ok"

    declined = asyncio.run(run(MockCardTokenizer(card_number="4000 0000 0000 0002")))
    assert declined.failure == PaymentFailure.card_error

    missing = asyncio.run(run(SubmittedTokenTokenizer("")))
    assert missing.failure == PaymentFailure.card_error
    assert missing.message == "Card verification failed"


def test_tokenize_without_widget_is_a_programming_error():
    adapter = _adapter()
    with pytest.raises(RuntimeError):
        asyncio.run(adapter.tokenize("nope"))


def test_tokenize_timeout_reports_gateway_timeout():
    async def run():
        adapter = _adapter(MockCardTokenizer(delay_seconds=0.5), tokenize_timeout_seconds=0.01)
        with adapter.initialize("s1"):
            return await adapter.tokenize("s1")

    result = asyncio.run(run())
    assert result.failure == PaymentFailure.gateway_timeout


def test_charge_success_sends_cents():
    gateway = MockChargeGateway()
    adapter = _adapter(gateway=gateway)
    result = asyncio.run(adapter.charge("cnon:card-nonce-ok", Decimal("25.00"), expected_amount=Decimal("25.00")))
    assert result.ok
    assert result.transaction_id == "mock-payment-1"
    assert gateway.charges["mock-payment-1"]["amount_cents"] == 2500
    assert gateway.charges["mock-payment-1"]["currency"] == "USD"


def test_charge_declined_nonce():
    gateway = MockChargeGateway()
    result = asyncio.run(_adapter(gateway=gateway).charge("cnon:card-nonce-declined", Decimal("25.00")))
    assert result.failure == PaymentFailure.card_error
    assert gateway.charges == {}


def test_charge_amount_mismatch_never_reaches_gateway():
    gateway = MockChargeGateway()
    adapter = _adapter(gateway=gateway)
    result = asyncio.run(adapter.charge("cnon:card-nonce-ok", Decimal("10.00"), expected_amount=Decimal("25.00")))
    assert result.failure == PaymentFailure.amount_mismatch
    zero = asyncio.run(adapter.charge("cnon:card-nonce-ok", Decimal("0.00")))
    assert zero.failure == PaymentFailure.amount_mismatch
    assert gateway.charges == {}


def test_charge_timeout():
    adapter = _adapter(gateway=MockChargeGateway(delay_seconds=0.5), charge_timeout_seconds=0.01)
    result = asyncio.run(adapter.charge("cnon:card-nonce-ok", Decimal("25.00")))
    assert result.failure == PaymentFailure.gateway_timeout


def test_mock_gateway_is_idempotent_per_key():
    gateway = MockChargeGateway()

    async def run():
        first = await gateway.create_payment("cnon:card-nonce-ok", 2500, "USD", "key-1")
        again = await gateway.create_payment("cnon:card-nonce-ok", 2500, "USD", "key-1")
        other = await gateway.create_payment("cnon:card-nonce-ok", 2500, "USD", "key-2")
        return first, again, other

    first, again, other = asyncio.run(run())
    assert first.transaction_id == again.transaction_id
    assert other.transaction_id != first.transaction_id
    assert len(gateway.charges) == 2
