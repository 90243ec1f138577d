"""Registration service - registering participants against session seats.

A registration and the seat it takes are written in one transaction: the
seat is taken with a conditional decrement, so two registrations racing for
the last seat cannot both commit.
"""

import logging
from collections.abc import Mapping
from decimal import Decimal
from typing import Any

from training.domain import Registration, RegistrationFilters, RegistrationStatus, TenantId
from training.domain.errors import (
    ClassNotFoundError,
    RegistrationNotFoundError,
    SessionNotFoundError,
    ValidationError,
)
from training.domain.models import ACTIVE_REGISTRATION_STATUSES
from training.services import inputs
from training.services.capacity_service import CapacityService
from training.stores.interfaces import CatalogStore, RegistrationStore

logger = logging.getLogger(__name__)

MAX_STATUS_LENGTH = 20

_REQUIRED_FIELDS = ("transaction_id", "class_id", "session_id", "first_name", "last_name", "email")


class RegistrationService:
    """Service for creating, listing and updating registrations."""

    def __init__(
        self,
        registrations: RegistrationStore,
        capacity: CapacityService,
        catalog: CatalogStore,
    ) -> None:
        self._registrations = registrations
        self._capacity = capacity
        self._catalog = catalog

    def create_registration(self, tenant: TenantId, fields: Mapping[str, Any]) -> Registration:
        """Register a participant, taking one seat of the session.

        The waiver and rules flags are stored as given.

        Raises:
            ValidationError: If a field is missing or invalid, the status is
                not one that holds a seat, or the session belongs to a
                different class.
            ClassNotFoundError: If class_id is not an active class of the tenant.
            SessionNotFoundError: If session_id is not a session of the tenant.
            SessionFullError: If the session has no seat left.
            TransactionAbortedError: If the store fails; nothing is written.
        """
        required = {key: inputs.text(inputs.require(fields, key), key) for key in _REQUIRED_FIELDS}
        class_id = required["class_id"]
        session_id = required["session_id"]
        values = {
            "transaction_id": required["transaction_id"],
            "class_code": class_id,
            "session_code": session_id,
            "first_name": required["first_name"],
            "last_name": required["last_name"],
            "email": required["email"],
            "phone": inputs.optional_text(fields.get("phone"), "phone") or "",
            "experience_level": (
                inputs.optional_text(fields.get("experience_level"), "experience_level") or ""
            ),
            "amount": _amount(fields.get("amount")),
            "status": _status(fields.get("status"), default=RegistrationStatus.CONFIRMED),
            "auth_code": inputs.optional_text(fields.get("auth_code"), "auth_code"),
            "waiver_accepted": inputs.boolean(fields.get("waiver_accepted"), "waiver_accepted"),
            "rules_accepted": inputs.boolean(fields.get("rules_accepted"), "rules_accepted"),
        }
        # A new registration always takes a seat.
        if values["status"] not in ACTIVE_REGISTRATION_STATUSES:
            raise ValidationError("status must be confirmed or pending")

        with self._registrations.atomic():
            if self._catalog.get_class(tenant, class_id) is None:
                raise ClassNotFoundError()
            session = self._capacity.get_session(tenant, session_id)
            if session.class_id != class_id:
                raise ValidationError("session_id does not belong to class_id")
            self._capacity.consume_seat(tenant, session_id)
            registration = self._registrations.add_registration(tenant, values)

        logger.info(
            "Registered %s for session %s of tenant %s (registration %s)",
            registration.email,
            session_id,
            tenant,
            registration.id,
        )
        return registration

    def list_registrations(
        self, tenant: TenantId, filters: Mapping[str, Any] | None = None
    ) -> list[Registration]:
        """Return registrations matching every given filter, newest first.

        Supported filters are class_id, session_id, status and email, each an
        exact match; blank values are ignored.
        """
        filters = filters or {}
        return self._registrations.list_registrations(
            tenant,
            RegistrationFilters(
                class_id=_filter_value(filters.get("class_id")),
                session_id=_filter_value(filters.get("session_id")),
                status=_filter_value(filters.get("status")),
                email=_filter_value(filters.get("email")),
            ),
        )

    def get_registration(self, tenant: TenantId, registration_id: Any) -> Registration:
        """Return a registration by id.

        Raises:
            RegistrationNotFoundError: If the id does not resolve in the tenant.
        """
        registration = self._registrations.get_registration(tenant, _registration_pk(registration_id))
        if registration is None:
            raise RegistrationNotFoundError()
        return registration

    def update_registration_status(
        self, tenant: TenantId, registration_id: Any, status: Any
    ) -> Registration:
        """Set the status of a registration.

        Seats are not touched: cancelling this way keeps the seat taken. Use
        cancel_registration to give the seat back.

        Raises:
            ValidationError: If status is missing.
            RegistrationNotFoundError: If the id does not resolve in the tenant.
        """
        if inputs.is_blank(status):
            raise ValidationError("status is required")
        status = _status(status)
        pk = _registration_pk(registration_id)
        if not self._registrations.set_registration_status(tenant, pk, status):
            raise RegistrationNotFoundError()
        logger.info("Registration %s of tenant %s is now %s", pk, tenant, status)
        return self.get_registration(tenant, pk)

    def cancel_registration(
        self,
        tenant: TenantId,
        registration_id: Any,
        status: Any = RegistrationStatus.CANCELLED,
    ) -> Registration:
        """Move an active registration to an inactive status and free its seat.

        A registration that is already inactive is returned unchanged.

        Raises:
            ValidationError: If status is one that holds a seat.
            RegistrationNotFoundError: If the id does not resolve in the tenant.
        """
        status = _status(status, default=RegistrationStatus.CANCELLED)
        if status in ACTIVE_REGISTRATION_STATUSES:
            raise ValidationError("status must be one that releases the seat")
        pk = _registration_pk(registration_id)

        with self._registrations.atomic():
            registration = self.get_registration(tenant, pk)
            if self._registrations.set_registration_status(
                tenant, pk, status, only_from=ACTIVE_REGISTRATION_STATUSES
            ):
                try:
                    self._capacity.release_seat(tenant, registration.session_id)
                except SessionNotFoundError:
                    logger.info(
                        "Session %s of cancelled registration %s no longer exists",
                        registration.session_id,
                        pk,
                    )
                logger.info("Cancelled registration %s of tenant %s as %s", pk, tenant, status)
            return self.get_registration(tenant, pk)


def _registration_pk(value: Any) -> int:
    if isinstance(value, bool):
        raise RegistrationNotFoundError()
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    raise RegistrationNotFoundError()


def _amount(value: Any) -> Decimal:
    if inputs.is_blank(value):
        return Decimal("0")
    return inputs.amount(value, "amount")


def _status(value: Any, default: str | None = None) -> str:
    if inputs.is_blank(value) and default is not None:
        return str(default)
    status = inputs.text(value, "status").lower()
    if len(status) > MAX_STATUS_LENGTH:
        raise ValidationError(f"status must be at most {MAX_STATUS_LENGTH} characters")
    return status


def _filter_value(value: Any) -> str | None:
    return None if inputs.is_blank(value) else str(value).strip()
