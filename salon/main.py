import logging

from fastapi import FastAPI
from starlette.middleware.sessions import SessionMiddleware

from salon.api.appointments import router as appointments_router
from salon.api.auth import router as auth_router
from salon.api.bookings import router as bookings_router
from salon.api.customers import router as customers_router
from salon.api.dashboard import router as dashboard_router
from salon.api.messages import router as messages_router
from salon.api.payments import router as payments_router
from salon.api.services import router as services_router
from salon.core.config import settings

class ContextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        extras = []
        for key in ("appointment_id", "customer_id", "service_id", "transaction_id", "status", "reason"):
            value = getattr(record, key, None)
            if value not in (None, ""):
                extras.append(f"{key}={value}")
        base = super().format(record)
        if extras:
            return f"{base} | " + " ".join(extras)
        return base


handler = logging.StreamHandler()
handler.setFormatter(ContextFormatter("%(levelname)s:%(name)s:%(message)s"))

root = logging.getLogger()
root.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
root.handlers.clear()
root.addHandler(handler)


def create_app() -> FastAPI:
    app = FastAPI(title=f"{settings.BUSINESS_NAME} Booking", version="1.0.0")
    app.add_middleware(SessionMiddleware, secret_key=settings.SESSION_SECRET, same_site="lax")

    app.include_router(auth_router, tags=["auth"])
    app.include_router(services_router, tags=["services"])
    app.include_router(customers_router, tags=["customers"])
    app.include_router(appointments_router, tags=["appointments"])
    app.include_router(bookings_router, tags=["bookings"])
    app.include_router(payments_router, tags=["payments"])
    app.include_router(messages_router, tags=["messages"])
    app.include_router(dashboard_router, tags=["dashboard"])

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    return app


app = create_app()
