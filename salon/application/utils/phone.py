from __future__ import annotations

import re

_NON_DIGITS = re.compile(r"\D")

PHONE_DISPLAY_LENGTH = len("(555) 123-4567")


def format_phone_number(value: str) -> str:
    """
    Apply the (XXX) XXX-XXXX display mask.

    Non-digits are stripped first; partial input yields a partial mask and
    digits past the tenth are dropped.
    """
    digits = _NON_DIGITS.sub("", value or "")
    if len(digits) <= 3:
        return f"({digits}" if digits else ""
    if len(digits) <= 6:
        return f"({digits[:3]}) {digits[3:]}"
    return f"({digits[:3]}) {digits[3:6]}-{digits[6:10]}"


def is_complete_phone(value: str) -> bool:
    return len(format_phone_number(value)) >= PHONE_DISPLAY_LENGTH
