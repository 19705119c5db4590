#!/usr/bin/env python3
from __future__ import annotations

import argparse
import json
from datetime import date, timedelta
from typing import Any

import httpx
from httpx import ConnectError


def build_payload(args: argparse.Namespace) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "serviceId": args.service,
        "appointmentDate": args.date,
        "appointmentTime": args.time,
        "customerName": args.name,
        "customerPhone": args.phone,
        "customerEmail": args.email,
    }
    if args.requests:
        payload["specialRequests"] = args.requests
    if not args.pending:
        payload["sourceId"] = args.source_id
        if args.amount:
            payload["amount"] = args.amount
    return payload


def main() -> None:
    tomorrow = (date.today() + timedelta(days=1)).isoformat()

    parser = argparse.ArgumentParser(description="Submit a test booking to a running salon API")
    parser.add_argument("--base-url", default="http://127.0.0.1:8001")
    parser.add_argument("--service", type=int, default=1)
    parser.add_argument("--date", default=tomorrow)
    parser.add_argument("--time", default="10:00")
    parser.add_argument("--name", default="Jane Doe")
    parser.add_argument("--phone", default="5551234567")
    parser.add_argument("--email", default="jane@salonmail.com")
    parser.add_argument("--requests", default="")
    parser.add_argument("--source-id", default="cnon:card-nonce-ok", help="Square sandbox nonce")
    parser.add_argument("--amount", default="", help="Deposit to charge; defaults to the service deposit")
    parser.add_argument("--pending", action="store_true", help="Book without a deposit")
    args = parser.parse_args()

    path = "/api/bookings/pending" if args.pending else "/api/bookings"
    payload = build_payload(args)

    try:
        resp = httpx.post(f"{args.base_url}{path}", json=payload, timeout=30.0)
    except ConnectError:
        print("Connection refused. Is the FastAPI server running?")
        print("Try: uvicorn salon.main:app --reload --port 8001")
        return

    print(resp.status_code)
    if resp.text:
        try:
            print(json.dumps(resp.json(), indent=2))
        except ValueError:
            print(resp.text)


if __name__ == "__main__":
    main()
