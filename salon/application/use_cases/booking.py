from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Mapping

from salon.application.dto.booking_form import BookingForm, FormValidation, validate_booking_fields
from salon.application.exceptions import (
    AmountMismatch,
    CardError,
    GatewayError,
    GatewayTimeout,
    InvalidBookingState,
    NotFound,
    PaymentCapturedBookingFailed,
    SdkUnavailable,
    ValidationError,
)
from salon.application.ports.appointment_ledger import AppointmentLedgerPort
from salon.application.ports.card_tokenizer import CardTokenizerPort
from salon.application.ports.customer_directory import CustomerDirectoryPort
from salon.application.ports.service_catalog import ServiceCatalogPort
from salon.application.use_cases.payment_gateway import PaymentGatewayAdapter
from salon.domain.entities.appointment import Appointment, AppointmentStatus, NewAppointment
from salon.domain.entities.booking_state import BookingState, can_transition
from salon.domain.entities.customer import Customer
from salon.domain.entities.payment import ChargeResult, PaymentConfirmation, PaymentFailure, TokenizeResult
from salon.domain.entities.service import Service

UNKNOWN_SERVICE = "unknown_service"


@dataclass(frozen=True)
class ServiceQuote:
    service: Service
    price: Decimal
    deposit: Decimal
    remaining_balance: Decimal


@dataclass
class BookingSession:
    """In-flight state of one booking attempt. Never persisted."""

    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    state: BookingState = BookingState.idle
    form: BookingForm | None = None
    quote: ServiceQuote | None = None
    confirmation: PaymentConfirmation | None = None
    customer: Customer | None = None
    appointment: Appointment | None = None
    errors: dict[str, str] = field(default_factory=dict)
    failure: str | None = None

    def transition(self, target: BookingState) -> None:
        if not can_transition(self.state, target):
            raise InvalidBookingState(f"Cannot move booking from {self.state.value} to {target.value}")
        self.state = target

    def abort(self, reason: str) -> None:
        self.transition(BookingState.aborted)
        self.failure = reason


class BookingOrchestrator:
    """
    Drives one deposit booking: service selection, form validation, card
    tokenization and charge, then the Customer and Appointment writes.

    Nothing is written to the directory or the ledger until the gateway has
    confirmed the charge.
    """

    def __init__(
        self,
        catalog: ServiceCatalogPort,
        directory: CustomerDirectoryPort,
        ledger: AppointmentLedgerPort,
        payments: PaymentGatewayAdapter,
        reuse_customer_by_email: bool = False,
    ) -> None:
        self._catalog = catalog
        self._directory = directory
        self._ledger = ledger
        self._payments = payments
        self._reuse_customer_by_email = reuse_customer_by_email
        self._logger = logging.getLogger(__name__)

    def select_service(self, service_id: int) -> ServiceQuote:
        service = self._catalog.get_service(service_id)
        if service is None:
            raise NotFound(f"Service {service_id} not found")
        return ServiceQuote(
            service=service,
            price=service.price,
            deposit=service.down_payment,
            remaining_balance=service.remaining_balance,
        )

    def validate_booking_form(self, fields: Mapping[str, Any]) -> FormValidation:
        return validate_booking_fields(fields)

    def start(self, fields: Mapping[str, Any]) -> BookingSession:
        session = BookingSession()
        validation = self.validate_booking_form(fields)
        if not validation.ok:
            session.errors = validation.errors
            session.abort("invalid_form")
            return session

        try:
            quote = self.select_service(validation.form.service_id)
        except NotFound:
            session.errors = {"serviceId": "Selected service is no longer available"}
            session.abort(UNKNOWN_SERVICE)
            return session

        session.form = validation.form
        session.quote = quote
        session.transition(BookingState.form_valid)
        return session

    async def initiate_payment(
        self,
        session: BookingSession,
        amount_due: Decimal | None = None,
        tokenizer: CardTokenizerPort | None = None,
        surface: str = "card-container",
    ) -> PaymentConfirmation:
        """
        Open the capture widget for the deposit, tokenize and charge.

        On any failure the session is aborted and the matching GatewayError or
        AmountMismatch is raised; nothing has been written at that point.
        """
        self._require(session, BookingState.form_valid)
        session.transition(BookingState.payment_pending)

        quote = session.quote
        form = session.form
        amount = quote.deposit if amount_due is None else amount_due
        metadata = {
            "booking_session": session.id,
            "service_id": str(quote.service.id),
            "service_name": quote.service.name,
            "customer_name": form.customer_name,
            "customer_email": form.customer_email,
        }

        try:
            with self._payments.initialize(session.id, surface=surface, tokenizer=tokenizer):
                token_result = await self._payments.tokenize(session.id)
                if not token_result.ok:
                    self._fail_tokenize(session, token_result)
                charge_result = await self._payments.charge(
                    token_result.token,
                    amount,
                    metadata=metadata,
                    expected_amount=quote.deposit,
                )
        except SdkUnavailable as e:
            self._logger.warning("Payment SDK unavailable", extra={"reason": str(e)})
            if session.state != BookingState.aborted:
                session.abort(PaymentFailure.sdk_unavailable.value)
            raise
        except Exception:
            if session.state != BookingState.aborted:
                session.abort("payment_error")
            raise

        if not charge_result.ok:
            self._fail_charge(session, charge_result, expected=quote.deposit, received=amount)

        confirmation = PaymentConfirmation(
            transaction_id=charge_result.transaction_id,
            amount=amount,
            metadata=metadata,
        )
        session.confirmation = confirmation
        session.transition(BookingState.payment_confirmed)
        self._logger.info(
            "Deposit captured",
            extra={"transaction_id": confirmation.transaction_id, "service_id": quote.service.id},
        )
        return confirmation

    def complete_booking(
        self,
        session: BookingSession,
        confirmation: PaymentConfirmation | None = None,
    ) -> Appointment:
        self._require(session, BookingState.payment_confirmed)
        confirmation = confirmation or session.confirmation
        if confirmation is None:
            raise InvalidBookingState("complete_booking requires a payment confirmation")

        form = session.form
        try:
            customer = self._resolve_customer(form)
        except Exception as e:
            self._logger.exception(
                "Customer write failed after payment",
                extra={"transaction_id": confirmation.transaction_id},
            )
            session.abort("customer_write_failed")
            raise PaymentCapturedBookingFailed(confirmation.transaction_id, None, str(e)) from e
        session.customer = customer

        try:
            appointment = self._ledger.create(
                NewAppointment(
                    customer_id=customer.id,
                    service_id=session.quote.service.id,
                    appointment_date=form.appointment_at,
                    status=AppointmentStatus.confirmed,
                    special_requests=form.special_requests,
                    down_payment_paid=True,
                    total_paid=False,
                    payment_id=confirmation.transaction_id,
                )
            )
        except Exception as e:
            self._logger.exception(
                "Appointment write failed after payment",
                extra={"transaction_id": confirmation.transaction_id, "customer_id": customer.id},
            )
            session.abort("appointment_write_failed")
            raise PaymentCapturedBookingFailed(confirmation.transaction_id, customer.id, str(e)) from e

        session.appointment = appointment
        session.transition(BookingState.appointment_created)
        self._logger.info(
            "Booking confirmed",
            extra={
                "appointment_id": appointment.id,
                "customer_id": customer.id,
                "transaction_id": confirmation.transaction_id,
            },
        )
        return appointment

    async def book(
        self,
        fields: Mapping[str, Any],
        tokenizer: CardTokenizerPort | None = None,
        amount_due: Decimal | None = None,
    ) -> BookingSession:
        """Run the whole deposit booking. Raises on the first failed step."""
        session = self.start(fields)
        if session.failure == UNKNOWN_SERVICE:
            raise NotFound(f"Service {fields.get('serviceId')} not found")
        if session.state == BookingState.aborted:
            raise ValidationError("Invalid booking form", session.errors)
        confirmation = await self.initiate_payment(session, amount_due=amount_due, tokenizer=tokenizer)
        self.complete_booking(session, confirmation)
        return session

    def create_unpaid(self, fields: Mapping[str, Any]) -> Appointment:
        """Book without a deposit: a pending appointment with both payment flags off."""
        validation = self.validate_booking_form(fields)
        if not validation.ok:
            raise ValidationError("Invalid booking form", validation.errors)
        form = validation.form
        quote = self.select_service(form.service_id)
        customer = self._resolve_customer(form)
        return self._ledger.create(
            NewAppointment(
                customer_id=customer.id,
                service_id=quote.service.id,
                appointment_date=form.appointment_at,
                status=AppointmentStatus.pending,
                special_requests=form.special_requests,
            )
        )

    async def charge_deposit(
        self,
        service_id: int,
        source_id: str,
        amount: Decimal,
        customer_email: str | None = None,
        customer_name: str | None = None,
    ) -> PaymentConfirmation:
        """Charge an already tokenized source for a service's deposit."""
        quote = self.select_service(service_id)
        metadata = {"service_id": str(service_id), "service_name": quote.service.name}
        if customer_email:
            metadata["customer_email"] = customer_email
        if customer_name:
            metadata["customer_name"] = customer_name

        result = await self._payments.charge(source_id, amount, metadata=metadata, expected_amount=quote.deposit)
        if not result.ok:
            _raise_for_charge(result, expected=quote.deposit, received=amount)
        return PaymentConfirmation(transaction_id=result.transaction_id, amount=amount, metadata=metadata)

    def _resolve_customer(self, form: BookingForm) -> Customer:
        if self._reuse_customer_by_email:
            try:
                return self._directory.find_by_email(form.customer_email)
            except NotFound:
                pass
        return self._directory.create(
            name=form.customer_name,
            email=form.customer_email,
            phone=form.customer_phone,
        )

    def _fail_tokenize(self, session: BookingSession, result: TokenizeResult) -> None:
        session.abort(result.failure.value if result.failure else PaymentFailure.card_error.value)
        message = result.message or "Card verification failed"
        if result.failure == PaymentFailure.sdk_unavailable:
            raise SdkUnavailable(message)
        if result.failure == PaymentFailure.gateway_timeout:
            raise GatewayTimeout(message)
        raise CardError(message)

    def _fail_charge(self, session: BookingSession, result: ChargeResult, expected: Decimal, received: Decimal) -> None:
        session.abort(result.failure.value if result.failure else PaymentFailure.gateway_error.value)
        _raise_for_charge(result, expected=expected, received=received)

    @staticmethod
    def _require(session: BookingSession, state: BookingState) -> None:
        if session.state != state:
            raise InvalidBookingState(f"Expected booking in state {state.value}, found {session.state.value}")


def _raise_for_charge(result: ChargeResult, expected: Decimal, received: Decimal) -> None:
    message = result.message or "Unable to process payment."
    if result.failure == PaymentFailure.amount_mismatch:
        raise AmountMismatch(expected, received)
    if result.failure == PaymentFailure.gateway_timeout:
        raise GatewayTimeout(message)
    if result.failure == PaymentFailure.card_error:
        raise CardError(message)
    raise GatewayError(message)
