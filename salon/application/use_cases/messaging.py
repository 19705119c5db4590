from __future__ import annotations

import logging

from salon.application.exceptions import NotFound, Unauthorized, ValidationError
from salon.application.ports.customer_directory import CustomerDirectoryPort
from salon.application.ports.message_log import MessageLogPort
from salon.domain.entities.message import Message


class MessagingUseCase:
    def __init__(self, log: MessageLogPort, directory: CustomerDirectoryPort) -> None:
        self._log = log
        self._directory = directory
        self._logger = logging.getLogger(__name__)

    def post(self, customer_id: int, text: str, is_from_customer: bool = True, is_admin: bool = False) -> Message:
        if not is_from_customer and not is_admin:
            raise Unauthorized("Unauthorized. Admin messages require login.")
        body = (text or "").strip()
        if not body:
            raise ValidationError("Message cannot be empty", {"message": "Required"})
        if self._directory.get(customer_id) is None:
            raise NotFound(f"Customer {customer_id} not found")

        message = self._log.append(customer_id, body, is_from_customer)
        self._logger.info(
            "Message posted",
            extra={"customer_id": customer_id, "reason": "customer" if is_from_customer else "staff"},
        )
        return message

    def list_all(self) -> list[Message]:
        return self._log.list_messages()

    def list_for_customer(self, customer_id: int) -> list[Message]:
        return self._log.list_by_customer(customer_id)
