from __future__ import annotations

from fastapi import APIRouter, Depends

from salon.api.errors import to_http_exception
from salon.api.schemas import MessageCreateRequest, MessageSchema
from salon.application.exceptions import SalonError
from salon.domain.entities.admin_user import AdminUser
from salon.wiring.dependencies import Container, current_admin, get_container, require_admin

router = APIRouter(prefix="/api/messages")


@router.get("", response_model=list[MessageSchema], dependencies=[Depends(require_admin)])
def list_messages(container: Container = Depends(get_container)):
    return [MessageSchema.model_validate(m) for m in container.messaging.list_all()]


@router.get("/customer/{customer_id}", response_model=list[MessageSchema])
def list_customer_messages(customer_id: int, container: Container = Depends(get_container)):
    return [MessageSchema.model_validate(m) for m in container.messaging.list_for_customer(customer_id)]


@router.post("", response_model=MessageSchema, status_code=201)
def post_message(
    req: MessageCreateRequest,
    container: Container = Depends(get_container),
    admin: AdminUser | None = Depends(current_admin),
):
    try:
        message = container.messaging.post(
            customer_id=req.customer_id,
            text=req.message,
            is_from_customer=req.is_from_customer,
            is_admin=admin is not None,
        )
    except SalonError as e:
        raise to_http_exception(e) from e
    return MessageSchema.model_validate(message)
