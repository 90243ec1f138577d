from training.domain.models import (
    Category,
    ClassSession,
    Registration,
    RegistrationFilters,
    RegistrationStatus,
    SessionStatus,
    TrainingClass,
)
from training.domain.value_objects import Capacity, Money, TenantId

__all__ = [
    "Category",
    "TrainingClass",
    "ClassSession",
    "Registration",
    "RegistrationFilters",
    "RegistrationStatus",
    "SessionStatus",
    "TenantId",
    "Money",
    "Capacity",
]
