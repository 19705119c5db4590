from __future__ import annotations

import logging
from dataclasses import dataclass

from fastapi import Depends, HTTPException, Request

from salon.application.ports.card_tokenizer import CardTokenizerPort
from salon.application.ports.charge_gateway import ChargeGatewayPort
from salon.application.use_cases.admin_auth import AdminAuthUseCase
from salon.application.use_cases.appointments import AppointmentAdministration
from salon.application.use_cases.booking import BookingOrchestrator
from salon.application.use_cases.customers import CustomerRegistration
from salon.application.use_cases.dashboard import DashboardStatsUseCase
from salon.application.use_cases.messaging import MessagingUseCase
from salon.application.use_cases.payment_gateway import PaymentGatewayAdapter
from salon.application.utils.clock import business_timezone
from salon.core.config import Settings, settings
from salon.domain.entities.admin_user import AdminUser
from salon.domain.entities.payment import GatewayConfig
from salon.infrastructure.payments.capture_widgets import MockCardTokenizer
from salon.infrastructure.payments.mock_gateway import MockChargeGateway
from salon.infrastructure.payments.square_gateway import SquareChargeGateway
from salon.infrastructure.store.memory_store import SalonRepository, build_memory_repository

SESSION_USER_KEY = "admin_user_id"


@dataclass(frozen=True)
class Container:
    settings: Settings
    repository: SalonRepository
    payments: PaymentGatewayAdapter
    booking: BookingOrchestrator
    appointments: AppointmentAdministration
    customers: CustomerRegistration
    messaging: MessagingUseCase
    dashboard: DashboardStatsUseCase
    auth: AdminAuthUseCase


_container: Container | None = None


def get_charge_gateway(cfg: Settings) -> ChargeGatewayPort:
    logger = logging.getLogger(__name__)
    if not cfg.SQUARE_ACCESS_TOKEN or cfg.ENV.lower() in {"dev", "local", "test"}:
        logger.info("Using MockChargeGateway (ENV=%s, token present=%s)", cfg.ENV, bool(cfg.SQUARE_ACCESS_TOKEN))
        return MockChargeGateway()
    logger.info("Using SquareChargeGateway (%s)", cfg.SQUARE_ENVIRONMENT)
    return SquareChargeGateway(
        access_token=cfg.SQUARE_ACCESS_TOKEN,
        location_id=cfg.SQUARE_LOCATION_ID,
        environment=cfg.SQUARE_ENVIRONMENT,
        api_version=cfg.SQUARE_API_VERSION,
        timeout_seconds=cfg.PAYMENT_TIMEOUT_SECONDS,
    )


def build_container(
    cfg: Settings | None = None,
    repository: SalonRepository | None = None,
    tokenizer: CardTokenizerPort | None = None,
    gateway: ChargeGatewayPort | None = None,
) -> Container:
    cfg = cfg or settings
    tz = business_timezone(cfg.BUSINESS_TIMEZONE)
    repository = repository or build_memory_repository(seed_services=cfg.SEED_SERVICES, tz=tz)
    payments = PaymentGatewayAdapter(
        tokenizer=tokenizer or MockCardTokenizer(),
        gateway=gateway or get_charge_gateway(cfg),
        config=GatewayConfig(
            application_id=cfg.SQUARE_APPLICATION_ID,
            location_id=cfg.SQUARE_LOCATION_ID,
            environment=cfg.SQUARE_ENVIRONMENT,
            currency=cfg.CURRENCY,
        ),
        tokenize_timeout_seconds=cfg.TOKENIZE_TIMEOUT_SECONDS,
        charge_timeout_seconds=cfg.PAYMENT_TIMEOUT_SECONDS,
    )
    auth = AdminAuthUseCase(repository.admins)
    auth.ensure_admin(cfg.ADMIN_USERNAME, cfg.ADMIN_PASSWORD)

    return Container(
        settings=cfg,
        repository=repository,
        payments=payments,
        booking=BookingOrchestrator(
            catalog=repository.catalog,
            directory=repository.customers,
            ledger=repository.appointments,
            payments=payments,
            reuse_customer_by_email=cfg.BOOKING_REUSE_CUSTOMER_BY_EMAIL,
        ),
        appointments=AppointmentAdministration(repository.appointments),
        customers=CustomerRegistration(repository.customers),
        messaging=MessagingUseCase(repository.messages, repository.customers),
        dashboard=DashboardStatsUseCase(repository.appointments, repository.catalog, repository.customers, tz=tz),
        auth=auth,
    )


def get_container() -> Container:
    global _container
    if _container is None:
        _container = build_container()
    return _container


def current_admin(request: Request, container: Container = Depends(get_container)) -> AdminUser | None:
    return container.auth.get(request.session.get(SESSION_USER_KEY))


def require_admin(admin: AdminUser | None = Depends(current_admin)) -> AdminUser:
    if admin is None:
        raise HTTPException(status_code=401, detail="Unauthorized. Please log in.")
    return admin
