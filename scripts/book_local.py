#!/usr/bin/env python3
"""
Local booking harness (no HTTP, no Square).

Usage:
  python3 scripts/book_local.py
  python3 scripts/book_local.py --card 4000000000000002

Runs one deposit booking through the same BookingOrchestrator the API uses,
with the mock card widget and mock charge gateway, and prints each step.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from datetime import date, timedelta
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from salon.application.exceptions import GatewayError, PaymentCapturedBookingFailed, SalonError
from salon.core.config import Settings
from salon.infrastructure.payments.capture_widgets import MockCardTokenizer
from salon.infrastructure.payments.mock_gateway import MockChargeGateway
from salon.wiring.dependencies import build_container


def _print_services(container) -> None:
    print("\nServices")
    print("-" * 60)
    for service in container.repository.catalog.list_services():
        print(
            f"{service.id:>2}  {service.name:<24} {service.category:<8} "
            f"${service.price}  deposit ${service.down_payment}  {service.duration} min"
        )
    print("-" * 60)


async def _run(args: argparse.Namespace) -> int:
    container = build_container(
        Settings(ENV="dev"),
        tokenizer=MockCardTokenizer(card_number=args.card),
        gateway=MockChargeGateway(),
    )
    _print_services(container)

    fields = {
        "serviceId": args.service,
        "appointmentDate": args.date,
        "appointmentTime": args.time,
        "customerName": args.name,
        "customerPhone": args.phone,
        "customerEmail": args.email,
    }
    booking = container.booking

    session = booking.start(fields)
    print(f"session {session.id}: {session.state.value}")
    if session.errors:
        for key, message in session.errors.items():
            print(f"  {key}: {message}")
        return 1

    quote = session.quote
    print(f"service: {quote.service.name}  price ${quote.price}  deposit ${quote.deposit}  due in salon ${quote.remaining_balance}")

    try:
        confirmation = await booking.initiate_payment(session)
        print(f"payment: {confirmation.transaction_id} (${confirmation.amount})")
        appointment = booking.complete_booking(session, confirmation)
    except PaymentCapturedBookingFailed as e:
        print(f"payment captured but booking failed: {e}")
        return 2
    except GatewayError as e:
        print(f"payment failed ({session.failure}): {e}")
        return 1
    except SalonError as e:
        print(f"booking failed: {e}")
        return 1

    print(f"appointment {appointment.id}: {appointment.status.value} on {appointment.appointment_date:%Y-%m-%d %H:%M}")
    print(f"session {session.id}: {session.state.value}")
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(description="Run a deposit booking in-process against mock payments")
    parser.add_argument("--service", type=int, default=1)
    parser.add_argument("--date", default=(date.today() + timedelta(days=1)).isoformat())
    parser.add_argument("--time", default="10:00")
    parser.add_argument("--name", default="Jane Doe")
    parser.add_argument("--phone", default="5551234567")
    parser.add_argument("--email", default="jane@salonmail.com")
    parser.add_argument("--card", default="4111 1111 1111 1111", help="Sandbox test card number")
    args = parser.parse_args()

    sys.exit(asyncio.run(_run(args)))


if __name__ == "__main__":
    main()
