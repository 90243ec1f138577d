"""Catalog service - categories and classes.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors
"""

import logging
from collections.abc import Mapping
from typing import Any

from training.domain import Category, TenantId, TrainingClass
from training.domain.errors import CategoryNotFoundError, ClassNotFoundError
from training.domain.models import DEFAULT_CATEGORY
from training.services import inputs
from training.stores.interfaces import CatalogStore

logger = logging.getLogger(__name__)

ALL_CATEGORIES = "all"

_CATEGORY_FIELDS = {
    "name": inputs.text,
    "display_name": inputs.text,
    "icon": inputs.optional_text,
    "sort_order": inputs.integer,
    "active": inputs.boolean,
}

_CLASS_FIELDS = {
    "name": inputs.text,
    "level": inputs.text,
    "duration": inputs.text,
    "tuition": inputs.amount,
    "category": inputs.text,
    "sort_order": inputs.integer,
    "badge": inputs.optional_text,
    "summary": inputs.optional_text,
    "description": inputs.optional_text,
    "highlights": inputs.optional_text,
    "equipment": inputs.optional_text,
    "prerequisites": inputs.optional_text,
    "active": inputs.boolean,
}

_REQUIRED_CLASS_FIELDS = ("name", "level", "duration", "tuition")


class CatalogService:
    """Service for category and class catalog operations."""

    def __init__(self, store: CatalogStore) -> None:
        self._store = store

    def list_categories(self, tenant: TenantId, include_inactive: bool = False) -> list[Category]:
        return self._store.list_categories(tenant, include_inactive)

    def get_category(self, tenant: TenantId, category_id: str) -> Category:
        """Return a category by id.

        Raises:
            CategoryNotFoundError: If the category does not exist in the tenant.
        """
        category = self._store.get_category(tenant, category_id)
        if category is None:
            raise CategoryNotFoundError()
        return category

    def create_category(self, tenant: TenantId, fields: Mapping[str, Any]) -> Category:
        code = inputs.text(inputs.require(fields, "id"), "id")
        values = inputs.pick(fields, _CATEGORY_FIELDS)
        values.setdefault("name", code)
        values.setdefault("display_name", values["name"])
        category = self._store.create_category(tenant, code, values)
        logger.info("Created category %s for tenant %s", code, tenant)
        return category

    def update_category(
        self, tenant: TenantId, category_id: str, fields: Mapping[str, Any]
    ) -> Category:
        """Change only the fields present in ``fields``.

        Raises:
            ValidationError: If a supplied field is invalid.
            CategoryNotFoundError: If the category does not exist in the tenant.
        """
        changes = inputs.pick(fields, _CATEGORY_FIELDS)
        category = self._store.update_category(tenant, category_id, changes)
        if category is None:
            raise CategoryNotFoundError()
        return category

    def list_classes(
        self,
        tenant: TenantId,
        category: str | None = None,
        search: str | None = None,
    ) -> list[TrainingClass]:
        """Return active classes, optionally narrowed by category and search term.

        A category of "all" is the same as no category. The search term is a
        case-insensitive substring of the name, summary or description.
        """
        if inputs.is_blank(category) or category == ALL_CATEGORIES:
            category = None
        search = None if inputs.is_blank(search) else search.strip()
        return self._store.list_classes(tenant, category, search)

    def get_class(self, tenant: TenantId, class_id: str) -> TrainingClass:
        """Return an active class by id.

        Raises:
            ClassNotFoundError: If no active class has this id in the tenant.
        """
        training_class = self._store.get_class(tenant, class_id)
        if training_class is None:
            raise ClassNotFoundError()
        return training_class

    def create_class(self, tenant: TenantId, fields: Mapping[str, Any]) -> TrainingClass:
        code = inputs.text(inputs.require(fields, "id"), "id")
        for key in _REQUIRED_CLASS_FIELDS:
            inputs.require(fields, key)
        values = inputs.pick(fields, _CLASS_FIELDS)
        values.setdefault("category", DEFAULT_CATEGORY)
        training_class = self._store.create_class(tenant, code, values)
        logger.info("Created class %s for tenant %s", code, tenant)
        return training_class

    def update_class(
        self, tenant: TenantId, class_id: str, fields: Mapping[str, Any]
    ) -> TrainingClass:
        """Change only the fields present in ``fields``; others keep their values.

        Raises:
            ValidationError: If a supplied field is invalid.
            ClassNotFoundError: If the class does not exist in the tenant.
        """
        changes = inputs.pick(fields, _CLASS_FIELDS)
        training_class = self._store.update_class(tenant, class_id, changes)
        if training_class is None:
            raise ClassNotFoundError()
        return training_class
