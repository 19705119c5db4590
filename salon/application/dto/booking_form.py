from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from salon.application.utils.phone import PHONE_DISPLAY_LENGTH, format_phone_number

FIELD_MESSAGES = {
    "serviceId": "Please select a service",
    "appointmentDate": "Please select a date",
    "appointmentTime": "Please select a time",
    "customerName": "Name is required",
    "customerPhone": "Valid phone number required",
    "customerEmail": "Valid email required",
}


class BookingFormDTO(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        str_strip_whitespace=True,
    )

    service_id: int
    appointment_date: date
    appointment_time: time
    customer_name: str = Field(min_length=1)
    customer_phone: str
    customer_email: EmailStr
    special_requests: str | None = None

    @field_validator("service_id", "appointment_date", "appointment_time", mode="before")
    @classmethod
    def _not_blank(cls, value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValueError("required")
        return value

    @field_validator("customer_phone")
    @classmethod
    def _phone_mask(cls, value: str) -> str:
        formatted = format_phone_number(value)
        if len(formatted) < PHONE_DISPLAY_LENGTH:
            raise ValueError("incomplete phone number")
        return formatted

    @field_validator("special_requests")
    @classmethod
    def _empty_to_none(cls, value: str | None) -> str | None:
        return value or None


@dataclass(frozen=True)
class BookingForm:
    service_id: int
    appointment_date: date
    appointment_time: time
    customer_name: str
    customer_phone: str
    customer_email: str
    special_requests: str | None = None

    @property
    def appointment_at(self) -> datetime:
        return datetime.combine(self.appointment_date, self.appointment_time)


@dataclass(frozen=True)
class FormValidation:
    form: BookingForm | None
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.form is not None and not self.errors


def validate_booking_fields(fields: Mapping[str, Any]) -> FormValidation:
    """Validate raw booking form fields. Pure: no storage or network access."""
    try:
        dto = BookingFormDTO.model_validate(dict(fields))
    except PydanticValidationError as e:
        return FormValidation(form=None, errors=_field_errors(e))

    return FormValidation(
        form=BookingForm(
            service_id=dto.service_id,
            appointment_date=dto.appointment_date,
            appointment_time=dto.appointment_time.replace(second=0, microsecond=0),
            customer_name=dto.customer_name,
            customer_phone=dto.customer_phone,
            customer_email=str(dto.customer_email),
            special_requests=dto.special_requests,
        )
    )


def _field_errors(exc: PydanticValidationError) -> dict[str, str]:
    errors: dict[str, str] = {}
    for err in exc.errors():
        key = str(err["loc"][0]) if err.get("loc") else "__root__"
        if key in errors:
            continue
        if err.get("type") == "extra_forbidden":
            errors[key] = "Unknown field"
        else:
            errors[key] = FIELD_MESSAGES.get(key, err.get("msg", "Invalid value"))
    return errors
