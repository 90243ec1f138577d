"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/models.py.

Every table carries a tenant_id column. Rows are addressed by a code that is
unique per tenant, so codes may repeat across tenants; references between
tables are by code and are only meaningful together with the tenant.
"""

from django.db import models
from django.db.models import F, Q

from training.domain.models import DEFAULT_CATEGORY, DEFAULT_MAX_SEATS
from training.domain.value_objects import TenantId


class TenantQuerySet(models.QuerySet):
    def for_tenant(self, tenant: TenantId) -> "TenantQuerySet":
        return self.filter(tenant_id=tenant.value)


TenantManager = models.Manager.from_queryset(TenantQuerySet)


class TenantScopedModel(models.Model):
    tenant_id = models.PositiveIntegerField()

    objects = TenantManager()

    class Meta:
        abstract = True


class Category(TenantScopedModel):
    """Persistence model for class categories."""

    code = models.CharField(max_length=64)
    name = models.CharField(max_length=255)
    display_name = models.CharField(max_length=255)
    icon = models.CharField(max_length=100, blank=True, null=True)
    sort_order = models.IntegerField(default=0)
    active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "training_categories"
        constraints = [
            models.UniqueConstraint(
                fields=["tenant_id", "code"], name="training_category_code_uniq"
            ),
        ]

    def __str__(self) -> str:
        return self.display_name


class TrainingClass(TenantScopedModel):
    """Persistence model for classes offered in the catalog."""

    code = models.CharField(max_length=64)
    name = models.CharField(max_length=255)
    level = models.CharField(max_length=50)
    duration = models.CharField(max_length=100)
    tuition = models.DecimalField(max_digits=10, decimal_places=2)
    category = models.CharField(max_length=64, default=DEFAULT_CATEGORY)
    sort_order = models.IntegerField(default=0)
    badge = models.CharField(max_length=100, blank=True, null=True)
    summary = models.TextField(blank=True, null=True)
    description = models.TextField(blank=True, null=True)
    highlights = models.TextField(blank=True, null=True)
    equipment = models.TextField(blank=True, null=True)
    prerequisites = models.TextField(blank=True, null=True)
    active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "training_classes"
        constraints = [
            models.UniqueConstraint(
                fields=["tenant_id", "code"], name="training_class_code_uniq"
            ),
            models.CheckConstraint(
                condition=Q(tuition__gte=0), name="training_class_tuition_gte_0"
            ),
        ]
        indexes = [
            models.Index(fields=["tenant_id", "category"], name="training_class_cat_idx"),
        ]

    def __str__(self) -> str:
        return self.name


class ClassSession(TenantScopedModel):
    """Persistence model for scheduled sessions of a class."""

    class Status(models.TextChoices):
        SCHEDULED = "scheduled", "Scheduled"
        FULL = "full", "Full"
        CANCELLED = "cancelled", "Cancelled"

    code = models.CharField(max_length=64)
    class_code = models.CharField(max_length=64)
    date = models.DateField()
    start_time = models.TimeField()
    end_time = models.TimeField()
    location = models.CharField(max_length=255, blank=True, null=True)
    instructor = models.CharField(max_length=255, blank=True, null=True)
    max_seats = models.IntegerField(default=DEFAULT_MAX_SEATS)
    available_seats = models.IntegerField(default=DEFAULT_MAX_SEATS)
    status = models.CharField(
        max_length=20, choices=Status.choices, default=Status.SCHEDULED
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "training_class_sessions"
        constraints = [
            models.UniqueConstraint(
                fields=["tenant_id", "code"], name="training_session_code_uniq"
            ),
            models.CheckConstraint(
                condition=Q(max_seats__gt=0), name="training_session_max_gt_0"
            ),
            models.CheckConstraint(
                condition=Q(available_seats__gte=0),
                name="training_session_avail_gte_0",
            ),
            models.CheckConstraint(
                condition=Q(available_seats__lte=F("max_seats")),
                name="training_session_avail_lte_max",
            ),
            models.CheckConstraint(
                condition=Q(status__in=["scheduled", "full", "cancelled"]),
                name="training_session_status_valid",
            ),
        ]
        indexes = [
            models.Index(
                fields=["tenant_id", "class_code", "date"],
                name="training_session_class_idx",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.class_code} - {self.date} {self.start_time}"


class Registration(TenantScopedModel):
    """Persistence model for participant registrations."""

    transaction_id = models.CharField(max_length=100)
    class_code = models.CharField(max_length=64)
    session_code = models.CharField(max_length=64)
    first_name = models.CharField(max_length=100)
    last_name = models.CharField(max_length=100)
    email = models.CharField(max_length=255)
    phone = models.CharField(max_length=50, blank=True, default="")
    experience_level = models.CharField(max_length=50, blank=True, default="")
    amount = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    status = models.CharField(max_length=20, default="confirmed")
    auth_code = models.CharField(max_length=100, blank=True, null=True)
    waiver_accepted = models.BooleanField(default=False)
    rules_accepted = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "training_registrations"
        constraints = [
            models.CheckConstraint(
                condition=Q(amount__gte=0), name="training_reg_amount_gte_0"
            ),
        ]
        indexes = [
            models.Index(
                fields=["tenant_id", "session_code"], name="training_reg_session_idx"
            ),
            models.Index(fields=["tenant_id", "email"], name="training_reg_email_idx"),
            models.Index(
                fields=["tenant_id", "-created_at"], name="training_reg_created_idx"
            ),
        ]

    def __str__(self) -> str:
        return f"{self.first_name} {self.last_name} - {self.session_code}"
