from dataclasses import dataclass


@dataclass(frozen=True)
class AdminUser:
    id: int
    username: str
    password_hash: str
