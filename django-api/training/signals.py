"""Django signals for catalog cache invalidation."""

from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from training.cache import invalidate_catalog
from training.models import Category, TrainingClass


@receiver([post_save, post_delete], sender=Category)
def invalidate_category_cache(sender, instance, **kwargs):
    """Invalidate the tenant's catalog when a category is saved or deleted."""
    invalidate_catalog(instance.tenant_id)


@receiver([post_save, post_delete], sender=TrainingClass)
def invalidate_class_cache(sender, instance, **kwargs):
    """Invalidate the tenant's catalog when a class is saved or deleted."""
    invalidate_catalog(instance.tenant_id)
