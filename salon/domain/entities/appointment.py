from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class AppointmentStatus(str, Enum):
    pending = "pending"
    confirmed = "confirmed"
    completed = "completed"
    cancelled = "cancelled"


@dataclass(frozen=True)
class NewAppointment:
    customer_id: int
    service_id: int
    appointment_date: datetime
    status: AppointmentStatus = AppointmentStatus.pending
    special_requests: str | None = None
    down_payment_paid: bool = False
    total_paid: bool = False
    payment_id: str | None = None


@dataclass(frozen=True)
class Appointment:
    id: int
    customer_id: int
    service_id: int
    appointment_date: datetime
    status: AppointmentStatus
    special_requests: str | None
    down_payment_paid: bool
    total_paid: bool
    payment_id: str | None
    created_at: datetime
