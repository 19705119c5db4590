from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal

from salon.domain.entities.service import Service


class ServiceCatalogPort(ABC):
    @abstractmethod
    def list_services(self) -> list[Service]:
        """All services ordered by id."""
        raise NotImplementedError

    @abstractmethod
    def list_by_category(self, category: str) -> list[Service]:
        raise NotImplementedError

    @abstractmethod
    def get_service(self, service_id: int) -> Service | None:
        raise NotImplementedError

    @abstractmethod
    def create_service(
        self,
        name: str,
        category: str,
        price: Decimal,
        down_payment: Decimal,
        duration: int,
        description: str | None = None,
        image: str | None = None,
    ) -> Service:
        """Insert a service. Raises ValidationError if down_payment > price."""
        raise NotImplementedError

    @abstractmethod
    def update_service(self, service_id: int, **changes: object) -> Service:
        """Apply changes to a service. Raises NotFound or ValidationError."""
        raise NotImplementedError

    @abstractmethod
    def delete_service(self, service_id: int) -> None:
        raise NotImplementedError
