from __future__ import annotations

from abc import ABC, abstractmethod

from salon.domain.entities.customer import Customer


class CustomerDirectoryPort(ABC):
    @abstractmethod
    def find_by_email(self, email: str) -> Customer:
        """Case-insensitive exact match. Raises NotFound."""
        raise NotImplementedError

    @abstractmethod
    def create(self, name: str, email: str, phone: str) -> Customer:
        """Always inserts a new record, even for a known email."""
        raise NotImplementedError

    @abstractmethod
    def get(self, customer_id: int) -> Customer | None:
        raise NotImplementedError

    @abstractmethod
    def list_customers(self) -> list[Customer]:
        raise NotImplementedError
