from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, Response

from salon.api.errors import to_http_exception
from salon.api.schemas import (
    AppointmentCreateRequest,
    AppointmentPaymentRequest,
    AppointmentSchema,
    AppointmentStatusRequest,
)
from salon.application.exceptions import SalonError
from salon.domain.entities.admin_user import AdminUser
from salon.wiring.dependencies import Container, current_admin, get_container, require_admin

router = APIRouter(prefix="/api/appointments")


@router.get("", response_model=list[AppointmentSchema], dependencies=[Depends(require_admin)])
def list_appointments(container: Container = Depends(get_container)):
    return [AppointmentSchema.model_validate(a) for a in container.appointments.list_all()]


@router.get("/date/{day}", response_model=list[AppointmentSchema], dependencies=[Depends(require_admin)])
def list_appointments_on(day: date, container: Container = Depends(get_container)):
    return [AppointmentSchema.model_validate(a) for a in container.appointments.list_on(day)]


@router.get("/customer/{customer_id}", response_model=list[AppointmentSchema], dependencies=[Depends(require_admin)])
def list_customer_appointments(customer_id: int, container: Container = Depends(get_container)):
    return [AppointmentSchema.model_validate(a) for a in container.appointments.list_for_customer(customer_id)]


@router.post("", response_model=AppointmentSchema, status_code=201)
def create_appointment(
    req: AppointmentCreateRequest,
    container: Container = Depends(get_container),
    admin: AdminUser | None = Depends(current_admin),
):
    try:
        appointment = container.appointments.create(
            customer_id=req.customer_id,
            service_id=req.service_id,
            appointment_date=req.appointment_date,
            special_requests=req.special_requests,
            status=req.status,
            down_payment_paid=req.down_payment_paid,
            total_paid=req.total_paid,
            payment_id=req.payment_id,
            is_admin=admin is not None,
        )
    except SalonError as e:
        raise to_http_exception(e) from e
    return AppointmentSchema.model_validate(appointment)


@router.patch("/{appointment_id}/status", response_model=AppointmentSchema, dependencies=[Depends(require_admin)])
def update_appointment_status(
    appointment_id: int,
    req: AppointmentStatusRequest,
    container: Container = Depends(get_container),
):
    try:
        appointment = container.appointments.update_status(appointment_id, req.status)
    except SalonError as e:
        raise to_http_exception(e) from e
    return AppointmentSchema.model_validate(appointment)


@router.patch("/{appointment_id}/payment", response_model=AppointmentSchema, dependencies=[Depends(require_admin)])
def record_appointment_payment(
    appointment_id: int,
    req: AppointmentPaymentRequest,
    container: Container = Depends(get_container),
):
    try:
        appointment = container.appointments.record_payment(
            appointment_id,
            down_payment_paid=req.down_payment_paid,
            total_paid=req.total_paid,
        )
    except SalonError as e:
        raise to_http_exception(e) from e
    return AppointmentSchema.model_validate(appointment)


@router.delete("/{appointment_id}", status_code=204, dependencies=[Depends(require_admin)])
def delete_appointment(appointment_id: int, container: Container = Depends(get_container)) -> Response:
    try:
        container.appointments.delete(appointment_id)
    except SalonError as e:
        raise to_http_exception(e) from e
    return Response(status_code=204)
