from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel

from salon.domain.entities.appointment import AppointmentStatus


class RequestModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        str_strip_whitespace=True,
    )


class ResponseModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


# Auth

class LoginRequest(RequestModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class AdminUserSchema(ResponseModel):
    id: int
    username: str


class LoginResponse(ResponseModel):
    success: bool
    user: AdminUserSchema | None = None


class AuthStatusResponse(ResponseModel):
    authenticated: bool
    user: AdminUserSchema | None = None


# Services

class ServiceSchema(ResponseModel):
    id: int
    name: str
    category: str
    price: Decimal
    down_payment: Decimal
    duration: int
    description: str | None = None
    image: str | None = None


class ServiceQuoteSchema(ResponseModel):
    service_id: int
    price: Decimal
    deposit: Decimal
    remaining_balance: Decimal


class ServiceCreateRequest(RequestModel):
    name: str = Field(min_length=2)
    category: str = Field(min_length=1)
    price: Decimal = Field(ge=0, decimal_places=2)
    down_payment: Decimal = Field(ge=0, decimal_places=2)
    duration: int = Field(gt=0)
    description: str | None = None
    image: str | None = None


class ServiceUpdateRequest(RequestModel):
    name: str | None = Field(default=None, min_length=2)
    category: str | None = Field(default=None, min_length=1)
    price: Decimal | None = Field(default=None, ge=0, decimal_places=2)
    down_payment: Decimal | None = Field(default=None, ge=0, decimal_places=2)
    duration: int | None = Field(default=None, gt=0)
    description: str | None = None
    image: str | None = None

    # Omitted fields keep their value; an explicit null would blank a required one.
    @field_validator("name", "category", "price", "down_payment", "duration", mode="before")
    @classmethod
    def _not_null(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("cannot be null")
        return value


# Customers

class CustomerCreateRequest(RequestModel):
    name: str = Field(min_length=1)
    email: EmailStr
    phone: str = Field(min_length=1)


class CustomerSchema(ResponseModel):
    id: int
    name: str
    email: str
    phone: str
    created_at: datetime


# Appointments

class AppointmentCreateRequest(RequestModel):
    customer_id: int
    service_id: int
    appointment_date: datetime
    special_requests: str | None = None
    status: AppointmentStatus = AppointmentStatus.pending
    down_payment_paid: bool = False
    total_paid: bool = False
    payment_id: str | None = None


class AppointmentStatusRequest(RequestModel):
    status: AppointmentStatus


class AppointmentPaymentRequest(RequestModel):
    down_payment_paid: bool | None = None
    total_paid: bool | None = None


class AppointmentSchema(ResponseModel):
    id: int
    customer_id: int
    service_id: int
    appointment_date: datetime
    status: AppointmentStatus
    special_requests: str | None = None
    down_payment_paid: bool
    total_paid: bool
    payment_id: str | None = None
    created_at: datetime


# Bookings and payments

class BookingResponse(ResponseModel):
    success: bool = True
    appointment: AppointmentSchema
    customer: CustomerSchema
    transaction_id: str | None = None
    amount_paid: Decimal
    remaining_balance: Decimal


class SquareConfigResponse(ResponseModel):
    application_id: str
    location_id: str
    environment: str


class SquarePaymentRequest(RequestModel):
    source_id: str = Field(min_length=1)
    amount: Decimal
    service_id: int
    customer_email: EmailStr | None = None
    customer_name: str | None = None
    service_name: str | None = None


class SquarePaymentSchema(ResponseModel):
    id: str
    amount: Decimal
    status: str = "COMPLETED"


class SquarePaymentResponse(ResponseModel):
    success: bool
    payment: SquarePaymentSchema


class PaymentIntentRequest(RequestModel):
    amount: Decimal = Field(gt=0)


class PaymentIntentResponse(ResponseModel):
    client_secret: str
    amount: int
    currency: str
    status: str


# Messages

class MessageCreateRequest(RequestModel):
    customer_id: int
    message: str = Field(min_length=1)
    is_from_customer: bool = True


class MessageSchema(ResponseModel):
    id: int
    customer_id: int
    message: str
    is_from_customer: bool
    timestamp: datetime


# Dashboard

class DashboardStatsSchema(ResponseModel):
    day: date
    appointment_count: int
    revenue: Decimal
    new_customers: int
