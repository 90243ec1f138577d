from training.stores.django_store import (
    DjangoCatalogStore,
    DjangoRegistrationStore,
    DjangoSessionStore,
)
from training.stores.interfaces import CatalogStore, RegistrationStore, SessionStore

__all__ = [
    "CatalogStore",
    "SessionStore",
    "RegistrationStore",
    "DjangoCatalogStore",
    "DjangoSessionStore",
    "DjangoRegistrationStore",
]
