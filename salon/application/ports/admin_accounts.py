from abc import ABC, abstractmethod

from salon.domain.entities.admin_user import AdminUser


class AdminAccountPort(ABC):
    @abstractmethod
    def get_by_username(self, username: str) -> AdminUser | None:
        raise NotImplementedError

    @abstractmethod
    def get(self, user_id: int) -> AdminUser | None:
        raise NotImplementedError

    @abstractmethod
    def create(self, username: str, password_hash: str) -> AdminUser:
        raise NotImplementedError
