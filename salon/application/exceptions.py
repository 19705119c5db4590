class SalonError(RuntimeError):
    """Base class for errors recovered at the request boundary."""


class ValidationError(SalonError):
    """Raised when input has the wrong shape or breaks a data invariant."""

    def __init__(self, message: str, errors: dict[str, str] | None = None) -> None:
        super().__init__(message)
        self.errors = dict(errors or {})


class Unauthorized(SalonError):
    """Raised when an admin session is missing or invalid."""


class NotFound(SalonError):
    """Raised when a referenced entity does not exist."""


class GatewayError(SalonError):
    """Raised when the payment provider rejects or fails a charge."""

    retryable = False


class CardError(GatewayError):
    """Raised when the card could not be tokenized or was declined."""


class SdkUnavailable(GatewayError):
    """Raised when the tokenization SDK could not be loaded."""


class GatewayTimeout(GatewayError):
    """Raised when tokenization or charge did not answer in time."""

    retryable = True


class AmountMismatch(SalonError):
    """Raised when the amount to charge differs from the configured deposit."""

    def __init__(self, expected: object, received: object) -> None:
        super().__init__(f"Deposit amount mismatch: expected {expected}, received {received}")
        self.expected = expected
        self.received = received


class PaymentCapturedBookingFailed(SalonError):
    """Raised when the deposit was charged but the appointment was not recorded."""

    code = "payment_captured_booking_failed"

    def __init__(self, transaction_id: str, customer_id: int | None, reason: str) -> None:
        super().__init__(
            "Your payment succeeded but we could not record your appointment. "
            f"Please contact support with payment reference {transaction_id}."
        )
        self.transaction_id = transaction_id
        self.customer_id = customer_id
        self.reason = reason


class WidgetAlreadyActive(RuntimeError):
    """Raised when a second capture widget is initialized during one booking session."""


class InvalidBookingState(RuntimeError):
    """Raised when a booking step is called out of order."""
