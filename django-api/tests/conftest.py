"""Pytest configuration and shared fixtures."""

import itertools
from datetime import date, timedelta

import pytest
from rest_framework.test import APIClient

from training.domain import TenantId
from training.services import CapacityService, CatalogService, RegistrationService
from training.stores import DjangoCatalogStore, DjangoRegistrationStore, DjangoSessionStore


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture(autouse=True)
def clear_cache():
    from django.core.cache import cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def tenant() -> TenantId:
    return TenantId(1)


@pytest.fixture
def other_tenant() -> TenantId:
    return TenantId(2)


@pytest.fixture
def catalog() -> CatalogService:
    return CatalogService(DjangoCatalogStore())


@pytest.fixture
def capacity() -> CapacityService:
    return CapacityService(DjangoSessionStore(), DjangoCatalogStore())


@pytest.fixture
def registrations(capacity: CapacityService) -> RegistrationService:
    return RegistrationService(DjangoRegistrationStore(), capacity, DjangoCatalogStore())


@pytest.fixture
def next_week() -> date:
    return date.today() + timedelta(days=7)


@pytest.fixture
def class_factory(catalog: CatalogService, tenant: TenantId):
    def create(code: str = "rifle-101", tenant_id: TenantId | None = None, **fields):
        values = {
            "id": code,
            "name": "Rifle Fundamentals",
            "level": "Beginner",
            "duration": "4 hours",
            "tuition": "150.00",
            "category": "firearms",
            "summary": "Safe handling and marksmanship basics",
            **fields,
        }
        return catalog.create_class(tenant_id or tenant, values)

    return create


@pytest.fixture
def session_factory(capacity: CapacityService, tenant: TenantId, next_week: date):
    def create(
        code: str = "s-1",
        class_id: str = "rifle-101",
        tenant_id: TenantId | None = None,
        **fields,
    ):
        values = {
            "id": code,
            "class_id": class_id,
            "date": next_week.isoformat(),
            "start_time": "09:00",
            "end_time": "13:00",
            "location": "Range A",
            "instructor": "J. Smith",
            **fields,
        }
        return capacity.upsert_session(tenant_id or tenant, values)

    return create


@pytest.fixture
def registration_factory(registrations: RegistrationService, tenant: TenantId):
    counter = itertools.count(1)

    def create(
        session_id: str = "s-1",
        class_id: str = "rifle-101",
        tenant_id: TenantId | None = None,
        **fields,
    ):
        n = next(counter)
        values = {
            "transaction_id": f"txn-{n}",
            "class_id": class_id,
            "session_id": session_id,
            "first_name": "Alex",
            "last_name": f"Doe{n}",
            "email": f"alex{n}@example.com",
            "phone": "555-0100",
            "experience_level": "Beginner",
            "amount": "150.00",
            "waiver_accepted": True,
            "rules_accepted": True,
            **fields,
        }
        return registrations.create_registration(tenant_id or tenant, values)

    return create
