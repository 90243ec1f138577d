"""Django ORM implementation of the training stores.

Seat accounting is done with single UPDATE statements whose WHERE clause and
SET expressions are evaluated by the database against the current row, so
concurrent registrations and capacity edits never act on a stale read.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import date
from decimal import Decimal
from typing import Any

from django.db import DatabaseError, IntegrityError, transaction
from django.db.models import Case, F, IntegerField, OuterRef, Q, Subquery, Value, When
from django.db.models.functions import Greatest
from django.utils import timezone

from training import models as orm
from training.domain import (
    Capacity,
    Category,
    ClassSession,
    Money,
    Registration,
    RegistrationFilters,
    SessionStatus,
    TenantId,
    TrainingClass,
)
from training.domain.errors import TransactionAbortedError, ValidationError
from training.domain.models import LEVEL_RANKS, OTHER_LEVEL_RANK
from training.stores.interfaces import (
    CatalogStore,
    RegistrationStore,
    SessionStore,
    Store,
)

logger = logging.getLogger(__name__)


class DjangoStore(Store):
    """Transaction handling shared by the Django-backed stores."""

    @contextmanager
    def atomic(self) -> Iterator[None]:
        try:
            with transaction.atomic():
                yield
        except DatabaseError as exc:
            logger.exception("Store transaction rolled back")
            raise TransactionAbortedError() from exc


class DjangoCatalogStore(DjangoStore, CatalogStore):
    """Category and class store using Django ORM."""

    def _categories(self, tenant: TenantId):
        return orm.Category.objects.for_tenant(tenant)

    def _classes(self, tenant: TenantId):
        return orm.TrainingClass.objects.for_tenant(tenant)

    def list_categories(self, tenant: TenantId, include_inactive: bool) -> list[Category]:
        rows = self._categories(tenant)
        if not include_inactive:
            rows = rows.filter(active=True)
        return [_to_category(row) for row in rows.order_by("sort_order", "display_name")]

    def get_category(self, tenant: TenantId, code: str) -> Category | None:
        row = self._categories(tenant).filter(code=code).first()
        return _to_category(row) if row else None

    def create_category(self, tenant: TenantId, code: str, values: dict[str, Any]) -> Category:
        try:
            with transaction.atomic():
                orm.Category.objects.create(tenant_id=tenant.value, code=code, **values)
        except IntegrityError as exc:
            raise ValidationError(f"Category {code} already exists") from exc
        return self.get_category(tenant, code)

    def update_category(
        self, tenant: TenantId, code: str, changes: dict[str, Any]
    ) -> Category | None:
        row = self._categories(tenant).filter(code=code).first()
        if row is None:
            return None
        _save_changes(row, changes)
        return self.get_category(tenant, code)

    def list_classes(
        self, tenant: TenantId, category: str | None, search: str | None
    ) -> list[TrainingClass]:
        rows = self._classes(tenant).filter(active=True)
        if category is not None:
            rows = rows.filter(category=category)
        if search is not None:
            rows = rows.filter(
                Q(name__icontains=search)
                | Q(summary__icontains=search)
                | Q(description__icontains=search)
            )
        level_rank = Case(
            *[When(level=level, then=Value(rank)) for level, rank in LEVEL_RANKS.items()],
            default=Value(OTHER_LEVEL_RANK),
            output_field=IntegerField(),
        )
        rows = rows.annotate(level_rank=level_rank).order_by("level_rank", "sort_order", "name")
        return [_to_class(row) for row in rows]

    def get_class(
        self, tenant: TenantId, code: str, active_only: bool = True
    ) -> TrainingClass | None:
        rows = self._classes(tenant).filter(code=code)
        if active_only:
            rows = rows.filter(active=True)
        row = rows.first()
        return _to_class(row) if row else None

    def create_class(self, tenant: TenantId, code: str, values: dict[str, Any]) -> TrainingClass:
        try:
            with transaction.atomic():
                orm.TrainingClass.objects.create(tenant_id=tenant.value, code=code, **values)
        except IntegrityError as exc:
            raise ValidationError(f"Class {code} already exists") from exc
        return self.get_class(tenant, code, active_only=False)

    def update_class(
        self, tenant: TenantId, code: str, changes: dict[str, Any]
    ) -> TrainingClass | None:
        row = self._classes(tenant).filter(code=code).first()
        if row is None:
            return None
        _save_changes(row, changes)
        return self.get_class(tenant, code, active_only=False)


class DjangoSessionStore(DjangoStore, SessionStore):
    """Session store and seat ledger using Django ORM."""

    def _sessions(self, tenant: TenantId):
        return orm.ClassSession.objects.for_tenant(tenant)

    def list_sessions(
        self, tenant: TenantId, class_code: str, scheduled_from: date | None
    ) -> list[ClassSession]:
        rows = self._sessions(tenant).filter(class_code=class_code)
        if scheduled_from is not None:
            rows = rows.filter(date__gte=scheduled_from, status=SessionStatus.SCHEDULED)
        return [_to_session(row) for row in rows.order_by("date", "start_time")]

    def get_session(self, tenant: TenantId, code: str) -> ClassSession | None:
        row = self._sessions(tenant).filter(code=code).first()
        return _to_session(row) if row else None

    def upsert_session(
        self, tenant: TenantId, code: str, max_seats: int, values: dict[str, Any]
    ) -> ClassSession:
        rows = self._sessions(tenant).filter(code=code)
        with transaction.atomic():
            if not _resize(rows, max_seats, values):
                try:
                    with transaction.atomic():
                        orm.ClassSession.objects.create(
                            tenant_id=tenant.value,
                            code=code,
                            max_seats=max_seats,
                            available_seats=max_seats,
                            **values,
                        )
                except IntegrityError:
                    # A concurrent request created the same code first.
                    if not _resize(rows, max_seats, values):
                        raise
            self.sync_status(tenant, code)
        return self.get_session(tenant, code)

    def consume_seat(self, tenant: TenantId, code: str) -> bool:
        updated = (
            self._sessions(tenant)
            .filter(code=code, available_seats__gt=0)
            .update(available_seats=F("available_seats") - 1, updated_at=timezone.now())
        )
        return updated > 0

    def release_seat(self, tenant: TenantId, code: str) -> bool:
        updated = (
            self._sessions(tenant)
            .filter(code=code, available_seats__lt=F("max_seats"))
            .update(available_seats=F("available_seats") + 1, updated_at=timezone.now())
        )
        return updated > 0

    def sync_status(self, tenant: TenantId, code: str) -> None:
        rows = self._sessions(tenant).filter(code=code).exclude(status=SessionStatus.CANCELLED)
        now = timezone.now()
        rows.filter(available_seats__lte=0).exclude(status=SessionStatus.FULL).update(
            status=SessionStatus.FULL, updated_at=now
        )
        rows.filter(available_seats__gt=0, status=SessionStatus.FULL).update(
            status=SessionStatus.SCHEDULED, updated_at=now
        )

    def delete_session(self, tenant: TenantId, code: str) -> bool:
        deleted, _ = self._sessions(tenant).filter(code=code).delete()
        return deleted > 0


class DjangoRegistrationStore(DjangoStore, RegistrationStore):
    """Registration store using Django ORM."""

    def _registrations(self, tenant: TenantId):
        return orm.Registration.objects.for_tenant(tenant)

    def _with_class_and_session(self, tenant: TenantId):
        classes = orm.TrainingClass.objects.for_tenant(tenant).filter(code=OuterRef("class_code"))
        sessions = orm.ClassSession.objects.for_tenant(tenant).filter(
            code=OuterRef("session_code")
        )
        return self._registrations(tenant).annotate(
            class_name=Subquery(classes.values("name")[:1]),
            session_date=Subquery(sessions.values("date")[:1]),
            session_start_time=Subquery(sessions.values("start_time")[:1]),
            session_end_time=Subquery(sessions.values("end_time")[:1]),
            session_location=Subquery(sessions.values("location")[:1]),
        )

    def add_registration(self, tenant: TenantId, values: dict[str, Any]) -> Registration:
        row = orm.Registration.objects.create(tenant_id=tenant.value, **values)
        return self.get_registration(tenant, row.pk)

    def list_registrations(
        self, tenant: TenantId, filters: RegistrationFilters
    ) -> list[Registration]:
        rows = self._with_class_and_session(tenant).filter(
            class_name__isnull=False, session_date__isnull=False
        )
        if filters.class_id is not None:
            rows = rows.filter(class_code=filters.class_id)
        if filters.session_id is not None:
            rows = rows.filter(session_code=filters.session_id)
        if filters.status is not None:
            rows = rows.filter(status=filters.status)
        if filters.email is not None:
            rows = rows.filter(email=filters.email)
        return [_to_registration(row) for row in rows.order_by("-created_at", "-id")]

    def get_registration(self, tenant: TenantId, registration_id: int) -> Registration | None:
        row = self._with_class_and_session(tenant).filter(pk=registration_id).first()
        return _to_registration(row) if row else None

    def set_registration_status(
        self,
        tenant: TenantId,
        registration_id: int,
        status: str,
        only_from: frozenset[str] | None = None,
    ) -> bool:
        rows = self._registrations(tenant).filter(pk=registration_id)
        if only_from is not None:
            rows = rows.filter(status__in=only_from)
        return rows.update(status=status) > 0


def _resize(rows, max_seats: int, values: dict[str, Any]) -> bool:
    reduction = Greatest(F("max_seats") - Value(max_seats), Value(0))
    updated = rows.update(
        # Must precede max_seats: MySQL evaluates SET assignments left to right.
        available_seats=Greatest(F("available_seats") - reduction, Value(0)),
        max_seats=max_seats,
        updated_at=timezone.now(),
        **values,
    )
    return updated > 0


def _save_changes(row, changes: dict[str, Any]) -> None:
    if not changes:
        return
    for field, value in changes.items():
        setattr(row, field, value)
    row.save(update_fields=[*changes, "updated_at"])


def _to_category(row: orm.Category) -> Category:
    return Category(
        id=row.code,
        name=row.name,
        display_name=row.display_name,
        icon=row.icon,
        sort_order=row.sort_order,
        active=row.active,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _to_class(row: orm.TrainingClass) -> TrainingClass:
    return TrainingClass(
        id=row.code,
        name=row.name,
        level=row.level,
        duration=row.duration,
        tuition=Money(Decimal(row.tuition)),
        category=row.category,
        sort_order=row.sort_order,
        badge=row.badge,
        summary=row.summary,
        description=row.description,
        highlights=row.highlights,
        equipment=row.equipment,
        prerequisites=row.prerequisites,
        active=row.active,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _to_session(row: orm.ClassSession) -> ClassSession:
    return ClassSession(
        id=row.code,
        class_id=row.class_code,
        date=row.date,
        start_time=row.start_time,
        end_time=row.end_time,
        location=row.location,
        instructor=row.instructor,
        max_seats=Capacity(row.max_seats),
        available_seats=Capacity(row.available_seats),
        status=SessionStatus(row.status),
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _to_registration(row: orm.Registration) -> Registration:
    return Registration(
        id=row.pk,
        transaction_id=row.transaction_id,
        class_id=row.class_code,
        session_id=row.session_code,
        first_name=row.first_name,
        last_name=row.last_name,
        email=row.email,
        phone=row.phone,
        experience_level=row.experience_level,
        amount=Money(Decimal(row.amount)),
        status=row.status,
        auth_code=row.auth_code,
        waiver_accepted=row.waiver_accepted,
        rules_accepted=row.rules_accepted,
        created_at=row.created_at,
        class_name=getattr(row, "class_name", None),
        session_date=getattr(row, "session_date", None),
        session_start_time=getattr(row, "session_start_time", None),
        session_end_time=getattr(row, "session_end_time", None),
        session_location=getattr(row, "session_location", None),
    )
