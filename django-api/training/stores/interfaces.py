"""Store interfaces (repository pattern).

Stores must be swappable and return domain models. Every method takes the
tenant explicitly and must scope every query it issues to that tenant.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from datetime import date
from typing import Any

from training.domain import (
    Category,
    ClassSession,
    Registration,
    RegistrationFilters,
    TenantId,
    TrainingClass,
)


class Store(ABC):
    @abstractmethod
    def atomic(self) -> AbstractContextManager[None]:
        """Return a context manager running its block as one transaction.

        Store failures inside the block roll it back and surface as
        TransactionAbortedError; domain errors propagate unchanged.
        """
        ...


class CatalogStore(Store):
    """Interface for category and class persistence."""

    @abstractmethod
    def list_categories(
        self, tenant: TenantId, include_inactive: bool
    ) -> list[Category]:
        """Return categories ordered by sort_order, then display_name."""
        ...

    @abstractmethod
    def get_category(self, tenant: TenantId, code: str) -> Category | None:
        ...

    @abstractmethod
    def create_category(self, tenant: TenantId, code: str, values: dict[str, Any]) -> Category:
        """Insert a category and return the re-read row.

        Raises:
            ValidationError: If the code is already taken in the tenant.
        """
        ...

    @abstractmethod
    def update_category(
        self, tenant: TenantId, code: str, changes: dict[str, Any]
    ) -> Category | None:
        """Write only the given fields; return the re-read row or None if absent."""
        ...

    @abstractmethod
    def list_classes(
        self, tenant: TenantId, category: str | None, search: str | None
    ) -> list[TrainingClass]:
        """Return active classes ordered by level rank, sort_order, then name."""
        ...

    @abstractmethod
    def get_class(
        self, tenant: TenantId, code: str, active_only: bool = True
    ) -> TrainingClass | None:
        ...

    @abstractmethod
    def create_class(self, tenant: TenantId, code: str, values: dict[str, Any]) -> TrainingClass:
        ...

    @abstractmethod
    def update_class(
        self, tenant: TenantId, code: str, changes: dict[str, Any]
    ) -> TrainingClass | None:
        ...


class SessionStore(Store):
    """Interface for session persistence and seat accounting."""

    @abstractmethod
    def list_sessions(
        self, tenant: TenantId, class_code: str, scheduled_from: date | None
    ) -> list[ClassSession]:
        """Return sessions of a class ordered by date, then start_time.

        With scheduled_from set, only scheduled sessions on or after that date.
        """
        ...

    @abstractmethod
    def get_session(self, tenant: TenantId, code: str) -> ClassSession | None:
        ...

    @abstractmethod
    def upsert_session(
        self, tenant: TenantId, code: str, max_seats: int, values: dict[str, Any]
    ) -> ClassSession:
        """Create the session or edit it in place, preserving consumed seats.

        On edit, available seats shrink by any reduction of max_seats (floored
        at zero) and are unchanged by an increase. The status is re-derived
        from the resulting seat count unless it is cancelled.
        """
        ...

    @abstractmethod
    def consume_seat(self, tenant: TenantId, code: str) -> bool:
        """Take one seat if any is left; return False when none was taken."""
        ...

    @abstractmethod
    def release_seat(self, tenant: TenantId, code: str) -> bool:
        """Give one seat back unless the session is already at max_seats."""
        ...

    @abstractmethod
    def sync_status(self, tenant: TenantId, code: str) -> None:
        """Set full/scheduled from available seats; cancelled is left alone."""
        ...

    @abstractmethod
    def delete_session(self, tenant: TenantId, code: str) -> bool:
        ...


class RegistrationStore(Store):
    """Interface for registration persistence."""

    @abstractmethod
    def add_registration(self, tenant: TenantId, values: dict[str, Any]) -> Registration:
        ...

    @abstractmethod
    def list_registrations(
        self, tenant: TenantId, filters: RegistrationFilters
    ) -> list[Registration]:
        """Return registrations joined to their class and session, newest first.

        Registrations whose class or session no longer exists are omitted.
        """
        ...

    @abstractmethod
    def get_registration(self, tenant: TenantId, registration_id: int) -> Registration | None:
        ...

    @abstractmethod
    def set_registration_status(
        self,
        tenant: TenantId,
        registration_id: int,
        status: str,
        only_from: frozenset[str] | None = None,
    ) -> bool:
        """Set the status; with only_from, only if the current status is in it.

        Returns whether a row was updated.
        """
        ...
