from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date

from salon.domain.entities.appointment import Appointment, AppointmentStatus, NewAppointment


class AppointmentLedgerPort(ABC):
    @abstractmethod
    def create(self, appointment: NewAppointment) -> Appointment:
        """
        Store the appointment with exactly the status and payment flags given.
        Raises ValidationError if customer_id or service_id does not resolve.
        """
        raise NotImplementedError

    @abstractmethod
    def get(self, appointment_id: int) -> Appointment | None:
        raise NotImplementedError

    @abstractmethod
    def list_appointments(self) -> list[Appointment]:
        raise NotImplementedError

    @abstractmethod
    def list_by_date(self, day: date) -> list[Appointment]:
        raise NotImplementedError

    @abstractmethod
    def list_by_customer(self, customer_id: int) -> list[Appointment]:
        raise NotImplementedError

    @abstractmethod
    def update_status(self, appointment_id: int, status: AppointmentStatus) -> Appointment:
        """Unconditional overwrite. Raises NotFound."""
        raise NotImplementedError

    @abstractmethod
    def record_payment(
        self,
        appointment_id: int,
        down_payment_paid: bool | None = None,
        total_paid: bool | None = None,
    ) -> Appointment:
        """Merge the provided flags. Raises NotFound."""
        raise NotImplementedError

    @abstractmethod
    def delete(self, appointment_id: int) -> None:
        raise NotImplementedError
