from __future__ import annotations

import time

from fastapi import APIRouter, Depends

from salon.api.errors import to_http_exception
from salon.api.schemas import (
    PaymentIntentRequest,
    PaymentIntentResponse,
    SquareConfigResponse,
    SquarePaymentRequest,
    SquarePaymentResponse,
    SquarePaymentSchema,
)
from salon.application.exceptions import SalonError
from salon.application.utils.money import to_cents
from salon.wiring.dependencies import Container, get_container

router = APIRouter(prefix="/api")


@router.get("/square/config", response_model=SquareConfigResponse)
def square_config(container: Container = Depends(get_container)):
    config = container.payments.config
    return SquareConfigResponse(
        application_id=config.application_id,
        location_id=config.location_id,
        environment=config.environment,
    )


@router.post("/square/payment", response_model=SquarePaymentResponse)
async def square_payment(req: SquarePaymentRequest, container: Container = Depends(get_container)):
    try:
        confirmation = await container.booking.charge_deposit(
            service_id=req.service_id,
            source_id=req.source_id,
            amount=req.amount,
            customer_email=str(req.customer_email) if req.customer_email else None,
            customer_name=req.customer_name,
        )
    except SalonError as e:
        raise to_http_exception(e) from e
    return SquarePaymentResponse(
        success=True,
        payment=SquarePaymentSchema(id=confirmation.transaction_id, amount=confirmation.amount),
    )


@router.post("/create-payment-intent", response_model=PaymentIntentResponse)
def create_payment_intent(req: PaymentIntentRequest, container: Container = Depends(get_container)):
    """Legacy stub kept for older clients; nothing is charged."""
    return PaymentIntentResponse(
        client_secret=f"pi_mock_{int(time.time() * 1000)}_secret",
        amount=to_cents(req.amount),
        currency=container.settings.CURRENCY.lower(),
        status="requires_payment_method",
    )
