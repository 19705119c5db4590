from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, replace
from datetime import date, datetime, timezone, tzinfo
from decimal import Decimal

from pydantic.alias_generators import to_camel

from salon.application.exceptions import NotFound, ValidationError
from salon.application.ports.admin_accounts import AdminAccountPort
from salon.application.ports.appointment_ledger import AppointmentLedgerPort
from salon.application.ports.customer_directory import CustomerDirectoryPort
from salon.application.ports.message_log import MessageLogPort
from salon.application.ports.service_catalog import ServiceCatalogPort
from salon.application.utils.clock import Clock, local_day, zone_clock
from salon.domain.entities.admin_user import AdminUser
from salon.domain.entities.appointment import Appointment, AppointmentStatus, NewAppointment
from salon.domain.entities.customer import Customer
from salon.domain.entities.message import Message
from salon.domain.entities.service import Service
from salon.infrastructure.store.service_catalog_data import SERVICE_SEED

_SERVICE_FIELDS = {"name", "category", "price", "down_payment", "duration", "description", "image"}
_REQUIRED_SERVICE_FIELDS = ("name", "category", "price", "down_payment", "duration")


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class _IdSequence:
    def __init__(self) -> None:
        self._next = 1
        self._lock = threading.Lock()

    def next(self) -> int:
        with self._lock:
            value = self._next
            self._next += 1
            return value


def _check_service_amounts(price: Decimal, down_payment: Decimal, duration: int) -> None:
    errors: dict[str, str] = {}
    if price < 0:
        errors["price"] = "Price cannot be negative"
    if down_payment < 0:
        errors["downPayment"] = "Down payment cannot be negative"
    elif down_payment > price:
        errors["downPayment"] = "Down payment cannot exceed the service price"
    if duration <= 0:
        errors["duration"] = "Duration must be positive"
    if errors:
        raise ValidationError("Invalid service", errors)


class MemoryServiceCatalog(ServiceCatalogPort):
    def __init__(self) -> None:
        self._services: dict[int, Service] = {}
        self._ids = _IdSequence()

    def list_services(self) -> list[Service]:
        return [self._services[k] for k in sorted(self._services)]

    def list_by_category(self, category: str) -> list[Service]:
        return [s for s in self.list_services() if s.category == category]

    def get_service(self, service_id: int) -> Service | None:
        return self._services.get(service_id)

    def create_service(
        self,
        name: str,
        category: str,
        price: Decimal,
        down_payment: Decimal,
        duration: int,
        description: str | None = None,
        image: str | None = None,
    ) -> Service:
        _check_service_amounts(price, down_payment, duration)
        service = Service(
            id=self._ids.next(),
            name=name,
            category=category,
            price=price,
            down_payment=down_payment,
            duration=duration,
            description=description,
            image=image,
        )
        self._services[service.id] = service
        return service

    def update_service(self, service_id: int, **changes: object) -> Service:
        current = self._services.get(service_id)
        if current is None:
            raise NotFound(f"Service {service_id} not found")
        unknown = set(changes) - _SERVICE_FIELDS
        if unknown:
            raise ValidationError(f"Unknown service fields: {', '.join(sorted(unknown))}")
        blanked = {to_camel(k): "Required" for k in _REQUIRED_SERVICE_FIELDS if k in changes and changes[k] is None}
        if blanked:
            raise ValidationError("Invalid service", blanked)
        updated = replace(current, **changes)
        _check_service_amounts(updated.price, updated.down_payment, updated.duration)
        self._services[service_id] = updated
        return updated

    def delete_service(self, service_id: int) -> None:
        if self._services.pop(service_id, None) is None:
            raise NotFound(f"Service {service_id} not found")


class MemoryCustomerDirectory(CustomerDirectoryPort):
    def __init__(self, clock: Clock = _utc_now) -> None:
        self._customers: dict[int, Customer] = {}
        self._ids = _IdSequence()
        self._clock = clock

    def find_by_email(self, email: str) -> Customer:
        needle = email.strip().lower()
        for customer in self.list_customers():
            if customer.email.lower() == needle:
                return customer
        raise NotFound("Customer not found")

    def create(self, name: str, email: str, phone: str) -> Customer:
        customer = Customer(
            id=self._ids.next(),
            name=name,
            email=email,
            phone=phone,
            created_at=self._clock(),
        )
        self._customers[customer.id] = customer
        return customer

    def get(self, customer_id: int) -> Customer | None:
        return self._customers.get(customer_id)

    def list_customers(self) -> list[Customer]:
        return [self._customers[k] for k in sorted(self._customers)]


class MemoryAppointmentLedger(AppointmentLedgerPort):
    def __init__(
        self,
        catalog: ServiceCatalogPort,
        directory: CustomerDirectoryPort,
        clock: Clock = _utc_now,
        tz: tzinfo = timezone.utc,
    ) -> None:
        self._appointments: dict[int, Appointment] = {}
        self._ids = _IdSequence()
        self._catalog = catalog
        self._directory = directory
        self._clock = clock
        self._tz = tz
        self._logger = logging.getLogger(__name__)

    def create(self, appointment: NewAppointment) -> Appointment:
        errors: dict[str, str] = {}
        if self._directory.get(appointment.customer_id) is None:
            errors["customerId"] = f"Customer {appointment.customer_id} does not exist"
        if self._catalog.get_service(appointment.service_id) is None:
            errors["serviceId"] = f"Service {appointment.service_id} does not exist"
        if errors:
            raise ValidationError("Appointment references unknown records", errors)

        record = Appointment(
            id=self._ids.next(),
            customer_id=appointment.customer_id,
            service_id=appointment.service_id,
            appointment_date=appointment.appointment_date,
            status=appointment.status,
            special_requests=appointment.special_requests,
            down_payment_paid=appointment.down_payment_paid,
            total_paid=appointment.total_paid,
            payment_id=appointment.payment_id,
            created_at=self._clock(),
        )
        self._appointments[record.id] = record
        self._logger.info(
            "Appointment stored",
            extra={"appointment_id": record.id, "customer_id": record.customer_id, "status": record.status.value},
        )
        return record

    def get(self, appointment_id: int) -> Appointment | None:
        return self._appointments.get(appointment_id)

    def list_appointments(self) -> list[Appointment]:
        return [self._appointments[k] for k in sorted(self._appointments)]

    def list_by_date(self, day: date) -> list[Appointment]:
        return [a for a in self.list_appointments() if local_day(a.appointment_date, self._tz) == day]

    def list_by_customer(self, customer_id: int) -> list[Appointment]:
        return [a for a in self.list_appointments() if a.customer_id == customer_id]

    def update_status(self, appointment_id: int, status: AppointmentStatus) -> Appointment:
        current = self._require(appointment_id)
        updated = replace(current, status=status)
        self._appointments[appointment_id] = updated
        return updated

    def record_payment(
        self,
        appointment_id: int,
        down_payment_paid: bool | None = None,
        total_paid: bool | None = None,
    ) -> Appointment:
        current = self._require(appointment_id)
        changes: dict[str, bool] = {}
        if down_payment_paid is not None:
            changes["down_payment_paid"] = down_payment_paid
        if total_paid is not None:
            changes["total_paid"] = total_paid
        updated = replace(current, **changes)
        self._appointments[appointment_id] = updated
        return updated

    def delete(self, appointment_id: int) -> None:
        if self._appointments.pop(appointment_id, None) is None:
            raise NotFound(f"Appointment {appointment_id} not found")

    def _require(self, appointment_id: int) -> Appointment:
        appointment = self._appointments.get(appointment_id)
        if appointment is None:
            raise NotFound(f"Appointment {appointment_id} not found")
        return appointment


class MemoryMessageLog(MessageLogPort):
    def __init__(self, clock: Clock = _utc_now) -> None:
        self._messages: dict[int, Message] = {}
        self._ids = _IdSequence()
        self._clock = clock

    def append(self, customer_id: int, text: str, is_from_customer: bool) -> Message:
        message = Message(
            id=self._ids.next(),
            customer_id=customer_id,
            message=text,
            is_from_customer=is_from_customer,
            timestamp=self._clock(),
        )
        self._messages[message.id] = message
        return message

    def list_messages(self) -> list[Message]:
        return [self._messages[k] for k in sorted(self._messages)]

    def list_by_customer(self, customer_id: int) -> list[Message]:
        return [m for m in self.list_messages() if m.customer_id == customer_id]


class MemoryAdminAccounts(AdminAccountPort):
    def __init__(self) -> None:
        self._users: dict[int, AdminUser] = {}
        self._ids = _IdSequence()

    def get_by_username(self, username: str) -> AdminUser | None:
        for user in self._users.values():
            if user.username == username:
                return user
        return None

    def get(self, user_id: int) -> AdminUser | None:
        return self._users.get(user_id)

    def create(self, username: str, password_hash: str) -> AdminUser:
        user = AdminUser(id=self._ids.next(), username=username, password_hash=password_hash)
        self._users[user.id] = user
        return user


@dataclass(frozen=True)
class SalonRepository:
    catalog: ServiceCatalogPort
    customers: CustomerDirectoryPort
    appointments: AppointmentLedgerPort
    messages: MessageLogPort
    admins: AdminAccountPort


def build_memory_repository(
    seed_services: bool = True,
    tz: tzinfo = timezone.utc,
    clock: Clock | None = None,
) -> SalonRepository:
    clock = clock or zone_clock(tz)
    catalog = MemoryServiceCatalog()
    if seed_services:
        for entry in SERVICE_SEED:
            catalog.create_service(**entry)
    customers = MemoryCustomerDirectory(clock=clock)
    return SalonRepository(
        catalog=catalog,
        customers=customers,
        appointments=MemoryAppointmentLedger(catalog, customers, clock=clock, tz=tz),
        messages=MemoryMessageLog(clock=clock),
        admins=MemoryAdminAccounts(),
    )
