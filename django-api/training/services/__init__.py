from training.services.capacity_service import CapacityService
from training.services.catalog_service import CatalogService
from training.services.registration_service import RegistrationService
from training.services.tenant_context import TENANT_HEADER, resolve_tenant

__all__ = [
    "CatalogService",
    "CapacityService",
    "RegistrationService",
    "TENANT_HEADER",
    "resolve_tenant",
]
