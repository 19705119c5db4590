from __future__ import annotations

import logging

from salon.application.exceptions import Unauthorized
from salon.application.ports.admin_accounts import AdminAccountPort
from salon.domain.entities.admin_user import AdminUser
from salon.infrastructure.security.passwords import hash_password, verify_password


class AdminAuthUseCase:
    def __init__(self, accounts: AdminAccountPort) -> None:
        self._accounts = accounts
        self._logger = logging.getLogger(__name__)

    def ensure_admin(self, username: str, password: str) -> AdminUser:
        existing = self._accounts.get_by_username(username)
        if existing:
            return existing
        return self._accounts.create(username=username, password_hash=hash_password(password))

    def authenticate(self, username: str, password: str) -> AdminUser:
        user = self._accounts.get_by_username(username)
        if user is None or not verify_password(password, user.password_hash):
            self._logger.info("Admin login rejected", extra={"reason": "bad_credentials"})
            raise Unauthorized("Invalid username or password")
        return user

    def get(self, user_id: int | None) -> AdminUser | None:
        if user_id is None:
            return None
        return self._accounts.get(user_id)
