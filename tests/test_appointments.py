from __future__ import annotations

import threading
from datetime import date, datetime, timezone
from decimal import Decimal
from zoneinfo import ZoneInfo

import pytest

from salon.application.exceptions import NotFound, ValidationError
from salon.application.use_cases.appointments import AppointmentAdministration
from salon.application.use_cases.dashboard import DashboardStatsUseCase
from salon.domain.entities.appointment import AppointmentStatus, NewAppointment
from salon.infrastructure.store.memory_store import build_memory_repository


def _setup():
    repo = build_memory_repository()
    customer = repo.customers.create("Jane Doe", "jane@salonmail.com", "(555) 123-4567")
    return repo, customer, AppointmentAdministration(repo.appointments)


def test_ledger_rejects_unknown_customer_and_service():
    repo, _, _ = _setup()
    with pytest.raises(ValidationError) as exc:
        repo.appointments.create(
            NewAppointment(customer_id=42, service_id=99, appointment_date=datetime(2026, 11, 2, 10, 30))
        )
    assert set(exc.value.errors) == {"customerId", "serviceId"}
    assert repo.appointments.list_appointments() == []


def test_new_appointment_defaults_to_pending_and_unpaid():
    repo, customer, admin = _setup()
    appt = admin.create(customer.id, 1, datetime(2026, 11, 2, 10, 30))
    assert appt.status == AppointmentStatus.pending
    assert appt.down_payment_paid is False
    assert appt.total_paid is False
    assert appt.payment_id is None


def test_public_create_cannot_mark_paid_or_confirmed():
    repo, customer, admin = _setup()
    with pytest.raises(ValidationError):
        admin.create(customer.id, 1, datetime(2026, 11, 2, 10, 30), down_payment_paid=True)
    with pytest.raises(ValidationError):
        admin.create(customer.id, 1, datetime(2026, 11, 2, 10, 30), status=AppointmentStatus.confirmed)

    appt = admin.create(
        customer.id,
        1,
        datetime(2026, 11, 2, 10, 30),
        status=AppointmentStatus.confirmed,
        down_payment_paid=True,
        is_admin=True,
    )
    assert appt.status == AppointmentStatus.confirmed


def test_total_paid_without_deposit_is_rejected_on_create():
    repo, customer, admin = _setup()
    with pytest.raises(ValidationError) as exc:
        admin.create(customer.id, 1, datetime(2026, 11, 2, 10, 30), total_paid=True, is_admin=True)
    assert "downPaymentPaid" in exc.value.errors


def test_cancelling_keeps_payment_flags():
    repo, customer, admin = _setup()
    appt = admin.create(
        customer.id,
        1,
        datetime(2026, 11, 2, 10, 30),
        status=AppointmentStatus.confirmed,
        down_payment_paid=True,
        payment_id="mock-payment-1",
        is_admin=True,
    )
    cancelled = admin.update_status(appt.id, AppointmentStatus.cancelled)
    assert cancelled.status == AppointmentStatus.cancelled
    assert cancelled.down_payment_paid is True
    assert cancelled.payment_id == "mock-payment-1"


def test_status_update_on_missing_appointment():
    _, _, admin = _setup()
    with pytest.raises(NotFound):
        admin.update_status(123, AppointmentStatus.completed)


def test_marking_total_paid_also_marks_deposit():
    repo, customer, admin = _setup()
    appt = admin.create(customer.id, 1, datetime(2026, 11, 2, 10, 30))
    paid = admin.record_payment(appt.id, total_paid=True)
    assert paid.total_paid is True
    assert paid.down_payment_paid is True


def test_clearing_deposit_on_fully_paid_appointment_is_rejected():
    repo, customer, admin = _setup()
    appt = admin.create(customer.id, 1, datetime(2026, 11, 2, 10, 30))
    admin.record_payment(appt.id, total_paid=True)
    with pytest.raises(ValidationError):
        admin.record_payment(appt.id, down_payment_paid=False)
    with pytest.raises(ValidationError):
        admin.record_payment(appt.id, down_payment_paid=False, total_paid=True)

    reset = admin.record_payment(appt.id, down_payment_paid=False, total_paid=False)
    assert reset.down_payment_paid is False
    assert reset.total_paid is False


def test_record_payment_requires_a_flag():
    repo, customer, admin = _setup()
    appt = admin.create(customer.id, 1, datetime(2026, 11, 2, 10, 30))
    with pytest.raises(ValidationError):
        admin.record_payment(appt.id)


def test_list_by_date_and_customer():
    repo, customer, admin = _setup()
    other = repo.customers.create("Ana Ruiz", "ana@salonmail.com", "(555) 987-6543")
    admin.create(customer.id, 1, datetime(2026, 11, 2, 9, 0))
    admin.create(other.id, 2, datetime(2026, 11, 2, 17, 30))
    admin.create(customer.id, 3, datetime(2026, 11, 3, 9, 0))

    assert len(admin.list_on(date(2026, 11, 2))) == 2
    assert len(admin.list_on(date(2026, 11, 4))) == 0
    assert [a.service_id for a in admin.list_for_customer(customer.id)] == [1, 3]


def test_delete_appointment():
    repo, customer, admin = _setup()
    appt = admin.create(customer.id, 1, datetime(2026, 11, 2, 10, 30))
    admin.delete(appt.id)
    with pytest.raises(NotFound):
        admin.get(appt.id)
    with pytest.raises(NotFound):
        admin.delete(appt.id)


def test_successive_writers_last_write_wins():
    """Two staff members editing one appointment: the later write is kept, no version error."""
    repo, customer, admin = _setup()
    appt = admin.create(customer.id, 1, datetime(2026, 11, 2, 10, 30))

    admin.update_status(appt.id, AppointmentStatus.confirmed)
    admin.update_status(appt.id, AppointmentStatus.cancelled)
    assert admin.get(appt.id).status == AppointmentStatus.cancelled

    admin.record_payment(appt.id, total_paid=True)
    admin.record_payment(appt.id, down_payment_paid=False, total_paid=False)
    final = admin.get(appt.id)
    assert final.total_paid is False
    assert final.down_payment_paid is False
    assert final.status == AppointmentStatus.cancelled


def test_concurrent_status_updates_keep_one_of_the_writes():
    repo, customer, admin = _setup()
    appt = admin.create(customer.id, 1, datetime(2026, 11, 2, 10, 30))
    statuses = [AppointmentStatus.confirmed, AppointmentStatus.completed, AppointmentStatus.cancelled] * 10
    errors = []
    start = threading.Barrier(len(statuses))

    def write(status):
        start.wait()
        try:
            admin.update_status(appt.id, status)
        except Exception as e:
            errors.append(e)

    threads = [threading.Thread(target=write, args=(s,)) for s in statuses]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []
    assert admin.get(appt.id).status in set(statuses)
    assert len(admin.list_all()) == 1


def test_list_by_date_buckets_aware_times_in_business_timezone():
    """18:00 in Los Angeles on Nov 2 is already Nov 3 in UTC."""
    la = ZoneInfo("America/Los_Angeles")
    repo = build_memory_repository(tz=la)
    customer = repo.customers.create("Jane Doe", "jane@salonmail.com", "(555) 123-4567")
    admin = AppointmentAdministration(repo.appointments)
    admin.create(customer.id, 1, datetime(2026, 11, 3, 2, 0, tzinfo=timezone.utc))
    admin.create(customer.id, 2, datetime(2026, 11, 2, 9, 0))

    assert len(admin.list_on(date(2026, 11, 2))) == 2
    assert admin.list_on(date(2026, 11, 3)) == []
    assert customer.created_at.tzinfo is not None


def test_dashboard_today_uses_business_timezone():
    """At 06:30 UTC on Nov 3 it is still Nov 2 in the salon, and so is the new customer."""
    la = ZoneInfo("America/Los_Angeles")
    late_evening = lambda: datetime(2026, 11, 3, 6, 30, tzinfo=timezone.utc)
    repo = build_memory_repository(tz=la, clock=late_evening)
    customer = repo.customers.create("Jane Doe", "jane@salonmail.com", "(555) 123-4567")
    AppointmentAdministration(repo.appointments).create(customer.id, 1, datetime(2026, 11, 2, 10, 0))

    dashboard = DashboardStatsUseCase(repo.appointments, repo.catalog, repo.customers, tz=la, clock=late_evening)
    assert dashboard.today() == date(2026, 11, 2)

    stats = dashboard.for_day(dashboard.today())
    assert stats.appointment_count == 1
    assert stats.new_customers == 1
    assert stats.revenue == Decimal("85.00")
    assert dashboard.for_day(date(2026, 11, 3)).new_customers == 0
