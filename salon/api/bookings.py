from __future__ import annotations

from decimal import Decimal
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException

from salon.api.errors import to_http_exception
from salon.api.schemas import AppointmentSchema, BookingResponse, CustomerSchema
from salon.application.exceptions import SalonError
from salon.application.utils.money import parse_amount
from salon.infrastructure.payments.capture_widgets import SubmittedTokenTokenizer
from salon.wiring.dependencies import Container, get_container

router = APIRouter(prefix="/api/bookings")


@router.post("", response_model=BookingResponse, status_code=201)
async def book_with_deposit(
    payload: dict[str, Any] = Body(...),
    container: Container = Depends(get_container),
):
    """Charge the deposit for the submitted card token, then record customer and appointment."""
    fields = dict(payload)
    source_id = fields.pop("sourceId", None)
    raw_amount = fields.pop("amount", None)
    if not isinstance(source_id, str) or not source_id.strip():
        raise HTTPException(status_code=400, detail={"message": "Invalid payment", "errors": {"sourceId": "Required"}})

    amount_due: Decimal | None = None
    if raw_amount is not None:
        try:
            amount_due = parse_amount(raw_amount)
        except ValueError:
            raise HTTPException(status_code=400, detail={"message": "Invalid payment", "errors": {"amount": "Invalid amount"}})

    try:
        session = await container.booking.book(
            fields,
            tokenizer=SubmittedTokenTokenizer(source_id),
            amount_due=amount_due,
        )
    except SalonError as e:
        raise to_http_exception(e) from e

    return BookingResponse(
        appointment=AppointmentSchema.model_validate(session.appointment),
        customer=CustomerSchema.model_validate(session.customer),
        transaction_id=session.confirmation.transaction_id,
        amount_paid=session.confirmation.amount,
        remaining_balance=session.quote.remaining_balance,
    )


@router.post("/pending", response_model=AppointmentSchema, status_code=201)
def book_without_deposit(
    payload: dict[str, Any] = Body(...),
    container: Container = Depends(get_container),
):
    """Request an appointment to be paid in the salon; it stays pending until staff confirm it."""
    try:
        appointment = container.booking.create_unpaid(payload)
    except SalonError as e:
        raise to_http_exception(e) from e
    return AppointmentSchema.model_validate(appointment)
