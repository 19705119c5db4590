from __future__ import annotations

from fastapi import APIRouter, Depends

from salon.api.errors import to_http_exception
from salon.api.schemas import CustomerCreateRequest, CustomerSchema
from salon.application.exceptions import SalonError
from salon.wiring.dependencies import Container, get_container, require_admin

router = APIRouter(prefix="/api/customers")


@router.get("", response_model=list[CustomerSchema], dependencies=[Depends(require_admin)])
def list_customers(container: Container = Depends(get_container)):
    return [CustomerSchema.model_validate(c) for c in container.customers.list_all()]


@router.get("/find/{email}", response_model=CustomerSchema)
def find_customer(email: str, container: Container = Depends(get_container)):
    try:
        customer = container.customers.find_by_email(email)
    except SalonError as e:
        raise to_http_exception(e) from e
    return CustomerSchema.model_validate(customer)


@router.post("", response_model=CustomerSchema, status_code=201)
def create_customer(req: CustomerCreateRequest, container: Container = Depends(get_container)):
    try:
        customer = container.customers.register(req.name, str(req.email), req.phone)
    except SalonError as e:
        raise to_http_exception(e) from e
    return CustomerSchema.model_validate(customer)
