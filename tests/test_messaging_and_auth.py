from __future__ import annotations

import pytest

from salon.application.exceptions import NotFound, Unauthorized, ValidationError
from salon.application.use_cases.admin_auth import AdminAuthUseCase
from salon.application.use_cases.messaging import MessagingUseCase
from salon.infrastructure.security.passwords import hash_password, verify_password
from salon.infrastructure.store.memory_store import MemoryAdminAccounts, build_memory_repository


def _messaging():
    repo = build_memory_repository(seed_services=False)
    customer = repo.customers.create("Jane Doe", "jane@salonmail.com", "(555) 123-4567")
    return MessagingUseCase(repo.messages, repo.customers), customer


def test_customer_message_is_logged():
    messaging, customer = _messaging()
    message = messaging.post(customer.id, "  Can I move my appointment?  ")
    assert message.message == "Can I move my appointment?"
    assert message.is_from_customer is True
    assert messaging.list_for_customer(customer.id) == [message]


def test_staff_message_requires_admin():
    messaging, customer = _messaging()
    with pytest.raises(Unauthorized):
        messaging.post(customer.id, "See you Friday", is_from_customer=False)
    reply = messaging.post(customer.id, "See you Friday", is_from_customer=False, is_admin=True)
    assert reply.is_from_customer is False
    assert messaging.list_all() == [reply]


def test_message_validation():
    messaging, customer = _messaging()
    with pytest.raises(ValidationError):
        messaging.post(customer.id, "   ")
    with pytest.raises(NotFound):
        messaging.post(999, "Hello")


def test_password_hashing():
    hashed = hash_password("hunter22")
    assert hashed != "hunter22"
    assert verify_password("hunter22", hashed)
    assert not verify_password("wrong", hashed)
    assert not verify_password("hunter22", "not-a-bcrypt-hash")


def test_admin_login():
    auth = AdminAuthUseCase(MemoryAdminAccounts())
    admin = auth.ensure_admin("admin", "hunter22")
    assert auth.ensure_admin("admin", "other") == admin

    assert auth.authenticate("admin", "hunter22") == admin
    with pytest.raises(Unauthorized):
        auth.authenticate("admin", "wrong")
    with pytest.raises(Unauthorized):
        auth.authenticate("ghost", "hunter22")

    assert auth.get(admin.id) == admin
    assert auth.get(None) is None
