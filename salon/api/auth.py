from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from salon.api.schemas import AdminUserSchema, AuthStatusResponse, LoginRequest, LoginResponse
from salon.application.exceptions import Unauthorized
from salon.domain.entities.admin_user import AdminUser
from salon.wiring.dependencies import SESSION_USER_KEY, Container, current_admin, get_container

router = APIRouter(prefix="/api")
logger = logging.getLogger(__name__)


@router.post("/login", response_model=LoginResponse)
def login(req: LoginRequest, request: Request, container: Container = Depends(get_container)):
    try:
        user = container.auth.authenticate(req.username, req.password)
    except Unauthorized as e:
        raise HTTPException(status_code=401, detail=str(e))

    request.session.clear()
    request.session[SESSION_USER_KEY] = user.id
    logger.info("Admin logged in", extra={"reason": user.username})
    return LoginResponse(success=True, user=AdminUserSchema.model_validate(user))


@router.post("/logout", response_model=LoginResponse)
def logout(request: Request):
    request.session.clear()
    return LoginResponse(success=True)


@router.get("/auth/me", response_model=AuthStatusResponse)
def me(admin: AdminUser | None = Depends(current_admin)):
    if admin is None:
        return AuthStatusResponse(authenticated=False)
    return AuthStatusResponse(authenticated=True, user=AdminUserSchema.model_validate(admin))
