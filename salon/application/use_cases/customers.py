from __future__ import annotations

from salon.application.exceptions import ValidationError
from salon.application.ports.customer_directory import CustomerDirectoryPort
from salon.application.utils.phone import is_complete_phone, format_phone_number
from salon.domain.entities.customer import Customer


class CustomerRegistration:
    def __init__(self, directory: CustomerDirectoryPort) -> None:
        self._directory = directory

    def register(self, name: str, email: str, phone: str) -> Customer:
        if not is_complete_phone(phone):
            raise ValidationError("Invalid customer", {"phone": "Valid phone number required"})
        return self._directory.create(name=name.strip(), email=email, phone=format_phone_number(phone))

    def find_by_email(self, email: str) -> Customer:
        return self._directory.find_by_email(email)

    def list_all(self) -> list[Customer]:
        return self._directory.list_customers()
