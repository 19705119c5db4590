from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timezone, tzinfo
from decimal import Decimal

from salon.application.ports.appointment_ledger import AppointmentLedgerPort
from salon.application.ports.customer_directory import CustomerDirectoryPort
from salon.application.ports.service_catalog import ServiceCatalogPort
from salon.application.utils.clock import Clock, local_day, zone_clock
from salon.domain.entities.appointment import AppointmentStatus


@dataclass(frozen=True)
class DashboardStats:
    day: date
    appointment_count: int
    revenue: Decimal
    new_customers: int


class DashboardStatsUseCase:
    """Per-day figures, with every timestamp bucketed in the business timezone."""

    def __init__(
        self,
        ledger: AppointmentLedgerPort,
        catalog: ServiceCatalogPort,
        directory: CustomerDirectoryPort,
        tz: tzinfo = timezone.utc,
        clock: Clock | None = None,
    ) -> None:
        self._ledger = ledger
        self._catalog = catalog
        self._directory = directory
        self._tz = tz
        self._clock = clock or zone_clock(tz)

    def today(self) -> date:
        return local_day(self._clock(), self._tz)

    def for_day(self, day: date) -> DashboardStats:
        appointments = self._ledger.list_by_date(day)
        revenue = Decimal("0.00")
        for appointment in appointments:
            if appointment.status == AppointmentStatus.cancelled:
                continue
            service = self._catalog.get_service(appointment.service_id)
            if service:
                revenue += service.price
        new_customers = sum(
            1 for c in self._directory.list_customers() if local_day(c.created_at, self._tz) == day
        )
        return DashboardStats(
            day=day,
            appointment_count=len(appointments),
            revenue=revenue,
            new_customers=new_customers,
        )
