from __future__ import annotations

from fastapi import HTTPException

from salon.application.exceptions import (
    AmountMismatch,
    CardError,
    GatewayError,
    GatewayTimeout,
    NotFound,
    PaymentCapturedBookingFailed,
    SalonError,
    SdkUnavailable,
    Unauthorized,
    ValidationError,
)

# Most specific first.
_GATEWAY_ERRORS = (
    (CardError, 402, "card_error"),
    (SdkUnavailable, 503, "sdk_unavailable"),
    (GatewayTimeout, 504, "gateway_timeout"),
    (GatewayError, 502, "gateway_error"),
)


def to_http_exception(exc: SalonError) -> HTTPException:
    if isinstance(exc, PaymentCapturedBookingFailed):
        return HTTPException(
            status_code=500,
            detail={
                "code": exc.code,
                "message": str(exc),
                "transactionId": exc.transaction_id,
                "customerId": exc.customer_id,
            },
        )
    if isinstance(exc, ValidationError):
        return HTTPException(status_code=400, detail={"message": str(exc), "errors": exc.errors})
    if isinstance(exc, AmountMismatch):
        return HTTPException(status_code=400, detail={"code": "amount_mismatch", "message": str(exc)})
    if isinstance(exc, Unauthorized):
        return HTTPException(status_code=401, detail=str(exc))
    if isinstance(exc, NotFound):
        return HTTPException(status_code=404, detail=str(exc))
    if isinstance(exc, GatewayError):
        status_code, code = next((s, c) for cls, s, c in _GATEWAY_ERRORS if isinstance(exc, cls))
        return HTTPException(
            status_code=status_code,
            detail={"code": code, "message": str(exc), "retryable": exc.retryable},
        )
    return HTTPException(status_code=500, detail=str(exc))
