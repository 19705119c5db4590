from __future__ import annotations

from fastapi import APIRouter, Depends, Response

from salon.api.errors import to_http_exception
from salon.api.schemas import ServiceCreateRequest, ServiceQuoteSchema, ServiceSchema, ServiceUpdateRequest
from salon.application.exceptions import SalonError
from salon.wiring.dependencies import Container, get_container, require_admin

router = APIRouter(prefix="/api/services")


@router.get("", response_model=list[ServiceSchema])
def list_services(container: Container = Depends(get_container)):
    return [ServiceSchema.model_validate(s) for s in container.repository.catalog.list_services()]


@router.get("/category/{category}", response_model=list[ServiceSchema])
def list_services_by_category(category: str, container: Container = Depends(get_container)):
    return [ServiceSchema.model_validate(s) for s in container.repository.catalog.list_by_category(category)]


@router.get("/{service_id}/quote", response_model=ServiceQuoteSchema)
def quote_service(service_id: int, container: Container = Depends(get_container)):
    try:
        quote = container.booking.select_service(service_id)
    except SalonError as e:
        raise to_http_exception(e) from e
    return ServiceQuoteSchema(
        service_id=quote.service.id,
        price=quote.price,
        deposit=quote.deposit,
        remaining_balance=quote.remaining_balance,
    )


@router.post("", response_model=ServiceSchema, status_code=201, dependencies=[Depends(require_admin)])
def create_service(req: ServiceCreateRequest, container: Container = Depends(get_container)):
    try:
        service = container.repository.catalog.create_service(**req.model_dump())
    except SalonError as e:
        raise to_http_exception(e) from e
    return ServiceSchema.model_validate(service)


@router.put("/{service_id}", response_model=ServiceSchema, dependencies=[Depends(require_admin)])
def update_service(service_id: int, req: ServiceUpdateRequest, container: Container = Depends(get_container)):
    try:
        service = container.repository.catalog.update_service(service_id, **req.model_dump(exclude_unset=True))
    except SalonError as e:
        raise to_http_exception(e) from e
    return ServiceSchema.model_validate(service)


@router.delete("/{service_id}", status_code=204, dependencies=[Depends(require_admin)])
def delete_service(service_id: int, container: Container = Depends(get_container)) -> Response:
    try:
        container.repository.catalog.delete_service(service_id)
    except SalonError as e:
        raise to_http_exception(e) from e
    return Response(status_code=204)
