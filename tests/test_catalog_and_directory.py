from __future__ import annotations

from decimal import Decimal

import pytest

from salon.application.exceptions import NotFound, ValidationError
from salon.application.use_cases.customers import CustomerRegistration
from salon.infrastructure.store.memory_store import MemoryCustomerDirectory, MemoryServiceCatalog, build_memory_repository


def test_seeded_catalog_lists_nine_services_in_id_order():
    repo = build_memory_repository()
    services = repo.catalog.list_services()
    assert len(services) == 9
    assert [s.id for s in services] == list(range(1, 10))
    assert services[0].name == "Precision Cut & Style"
    assert services[0].price == Decimal("85.00")
    assert services[0].down_payment == Decimal("25.00")


def test_listing_is_repeatable():
    """Reading the catalog twice without writes gives the same result."""
    repo = build_memory_repository()
    assert repo.catalog.list_services() == repo.catalog.list_services()


def test_list_by_category():
    repo = build_memory_repository()
    eye = repo.catalog.list_by_category("eye")
    assert [s.name for s in eye] == ["Eyebrow Threading", "Brow Tinting", "Lash Extensions"]
    assert repo.catalog.list_by_category("nails") == []


def test_remaining_balance_is_price_minus_deposit():
    catalog = MemoryServiceCatalog()
    service = catalog.create_service("Gloss", "hair", Decimal("100.00"), Decimal("25.00"), 30)
    assert service.remaining_balance == Decimal("75.00")


def test_deposit_may_equal_price_but_not_exceed_it():
    catalog = MemoryServiceCatalog()
    full = catalog.create_service("Consult", "special", Decimal("20.00"), Decimal("20.00"), 15)
    assert full.remaining_balance == Decimal("0.00")

    with pytest.raises(ValidationError) as exc:
        catalog.create_service("Gloss", "hair", Decimal("100.00"), Decimal("150.00"), 30)
    assert "downPayment" in exc.value.errors


def test_negative_price_and_zero_duration_rejected():
    catalog = MemoryServiceCatalog()
    with pytest.raises(ValidationError) as exc:
        catalog.create_service("Bad", "hair", Decimal("-1.00"), Decimal("0.00"), 0)
    assert {"price", "duration"} <= set(exc.value.errors)


def test_update_service_revalidates_and_rejects_unknown_fields():
    catalog = MemoryServiceCatalog()
    service = catalog.create_service("Gloss", "hair", Decimal("100.00"), Decimal("25.00"), 30)

    updated = catalog.update_service(service.id, price=Decimal("120.00"))
    assert updated.price == Decimal("120.00")
    assert updated.remaining_balance == Decimal("95.00")

    with pytest.raises(ValidationError):
        catalog.update_service(service.id, down_payment=Decimal("500.00"))
    with pytest.raises(ValidationError):
        catalog.update_service(service.id, colour="red")
    with pytest.raises(NotFound):
        catalog.update_service(999, price=Decimal("1.00"))


def test_delete_service():
    catalog = MemoryServiceCatalog()
    service = catalog.create_service("Gloss", "hair", Decimal("100.00"), Decimal("25.00"), 30)
    catalog.delete_service(service.id)
    assert catalog.get_service(service.id) is None
    with pytest.raises(NotFound):
        catalog.delete_service(service.id)


def test_duplicate_emails_create_separate_customers():
    directory = MemoryCustomerDirectory()
    first = directory.create("Jane Doe", "jane@salonmail.com", "(555) 123-4567")
    second = directory.create("Jane D.", "jane@salonmail.com", "(555) 765-4321")
    assert first.id != second.id
    assert len(directory.list_customers()) == 2
    assert directory.find_by_email("JANE@salonmail.com").id == first.id


def test_find_by_email_raises_when_missing():
    directory = MemoryCustomerDirectory()
    with pytest.raises(NotFound):
        directory.find_by_email("nobody@salonmail.com")


def test_registration_masks_phone_and_rejects_incomplete_numbers():
    registration = CustomerRegistration(MemoryCustomerDirectory())
    customer = registration.register(" Ana Ruiz ", "ana@salonmail.com", "555.987.6543")
    assert customer.name == "Ana Ruiz"
    assert customer.phone == "(555) 987-6543"

    with pytest.raises(ValidationError) as exc:
        registration.register("Ana Ruiz", "ana@salonmail.com", "555")
    assert exc.value.errors == {"phone": "Valid phone number required"}


def test_update_service_refuses_to_blank_required_fields():
    catalog = MemoryServiceCatalog()
    service = catalog.create_service("Gloss", "hair", Decimal("100.00"), Decimal("25.00"), 30)

    with pytest.raises(ValidationError) as exc:
        catalog.update_service(service.id, name=None, price=None)
    assert exc.value.errors == {"name": "Required", "price": "Required"}
    assert catalog.get_service(service.id) == service

    updated = catalog.update_service(service.id, description=None, image=None)
    assert updated.name == "Gloss"
