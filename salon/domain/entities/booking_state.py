from __future__ import annotations

from enum import Enum


class BookingState(str, Enum):
    idle = "idle"
    form_valid = "form_valid"
    payment_pending = "payment_pending"
    payment_confirmed = "payment_confirmed"
    appointment_created = "appointment_created"
    aborted = "aborted"


TERMINAL_STATES = frozenset({BookingState.appointment_created, BookingState.aborted})

# Allowed forward moves; any non-terminal state may also move to `aborted`.
TRANSITIONS: dict[BookingState, frozenset[BookingState]] = {
    BookingState.idle: frozenset({BookingState.form_valid}),
    BookingState.form_valid: frozenset({BookingState.payment_pending}),
    BookingState.payment_pending: frozenset({BookingState.payment_confirmed}),
    BookingState.payment_confirmed: frozenset({BookingState.appointment_created}),
    BookingState.appointment_created: frozenset(),
    BookingState.aborted: frozenset(),
}


def can_transition(current: BookingState, target: BookingState) -> bool:
    if current in TERMINAL_STATES:
        return False
    if target == BookingState.aborted:
        return True
    return target in TRANSITIONS[current]
