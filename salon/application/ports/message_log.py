from abc import ABC, abstractmethod

from salon.domain.entities.message import Message


class MessageLogPort(ABC):
    @abstractmethod
    def append(self, customer_id: int, text: str, is_from_customer: bool) -> Message:
        raise NotImplementedError

    @abstractmethod
    def list_messages(self) -> list[Message]:
        raise NotImplementedError

    @abstractmethod
    def list_by_customer(self, customer_id: int) -> list[Message]:
        raise NotImplementedError
