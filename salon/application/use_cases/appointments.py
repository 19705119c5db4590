from __future__ import annotations

import logging
from datetime import date, datetime

from salon.application.exceptions import NotFound, ValidationError
from salon.application.ports.appointment_ledger import AppointmentLedgerPort
from salon.domain.entities.appointment import Appointment, AppointmentStatus, NewAppointment


class AppointmentAdministration:
    """Staff-facing appointment operations on top of the ledger."""

    def __init__(self, ledger: AppointmentLedgerPort) -> None:
        self._ledger = ledger
        self._logger = logging.getLogger(__name__)

    def list_all(self) -> list[Appointment]:
        return self._ledger.list_appointments()

    def list_on(self, day: date) -> list[Appointment]:
        return self._ledger.list_by_date(day)

    def list_for_customer(self, customer_id: int) -> list[Appointment]:
        return self._ledger.list_by_customer(customer_id)

    def get(self, appointment_id: int) -> Appointment:
        appointment = self._ledger.get(appointment_id)
        if appointment is None:
            raise NotFound(f"Appointment {appointment_id} not found")
        return appointment

    def create(
        self,
        customer_id: int,
        service_id: int,
        appointment_date: datetime,
        special_requests: str | None = None,
        status: AppointmentStatus = AppointmentStatus.pending,
        down_payment_paid: bool = False,
        total_paid: bool = False,
        payment_id: str | None = None,
        is_admin: bool = False,
    ) -> Appointment:
        if total_paid and not down_payment_paid:
            raise ValidationError(
                "An appointment cannot be fully paid without its down payment",
                {"downPaymentPaid": "Must be true when totalPaid is true"},
            )
        paid_or_confirmed = down_payment_paid or total_paid or status != AppointmentStatus.pending
        if paid_or_confirmed and not is_admin:
            raise ValidationError(
                "Paid appointments must be booked through the deposit checkout",
                {"status": "Only pending, unpaid appointments can be created here"},
            )
        return self._ledger.create(
            NewAppointment(
                customer_id=customer_id,
                service_id=service_id,
                appointment_date=appointment_date,
                status=status,
                special_requests=special_requests or None,
                down_payment_paid=down_payment_paid,
                total_paid=total_paid,
                payment_id=payment_id,
            )
        )

    def update_status(self, appointment_id: int, status: AppointmentStatus) -> Appointment:
        appointment = self._ledger.update_status(appointment_id, status)
        self._logger.info(
            "Appointment status changed",
            extra={"appointment_id": appointment_id, "status": status.value},
        )
        return appointment

    def record_payment(
        self,
        appointment_id: int,
        down_payment_paid: bool | None = None,
        total_paid: bool | None = None,
    ) -> Appointment:
        """
        Merge payment flags while keeping totalPaid => downPaymentPaid.

        Marking the total as paid also marks the deposit as paid; explicitly
        clearing the deposit on a fully paid appointment is rejected.
        """
        if down_payment_paid is None and total_paid is None:
            raise ValidationError("No payment flags provided", {"totalPaid": "Required"})

        current = self.get(appointment_id)
        merged_total = current.total_paid if total_paid is None else total_paid
        merged_deposit = current.down_payment_paid if down_payment_paid is None else down_payment_paid

        if merged_total and not merged_deposit:
            if down_payment_paid is False:
                raise ValidationError(
                    "An appointment cannot be fully paid without its down payment",
                    {"downPaymentPaid": "Must be true when totalPaid is true"},
                )
            down_payment_paid = True

        appointment = self._ledger.record_payment(
            appointment_id,
            down_payment_paid=down_payment_paid,
            total_paid=total_paid,
        )
        self._logger.info(
            "Appointment payment recorded",
            extra={"appointment_id": appointment_id, "status": appointment.status.value},
        )
        return appointment

    def delete(self, appointment_id: int) -> None:
        self._ledger.delete(appointment_id)
        self._logger.info("Appointment deleted", extra={"appointment_id": appointment_id})
