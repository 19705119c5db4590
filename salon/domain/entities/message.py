from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Message:
    id: int
    customer_id: int
    message: str
    is_from_customer: bool
    timestamp: datetime
