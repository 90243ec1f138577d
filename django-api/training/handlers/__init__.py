from training.handlers.views import (
    CategoryDetailView,
    CategoryListView,
    ClassDetailView,
    ClassListView,
    ClassSessionListView,
    RegistrationCancelView,
    RegistrationListView,
    RegistrationStatusView,
    SessionDetailView,
    SessionUpsertView,
)

__all__ = [
    "CategoryListView",
    "CategoryDetailView",
    "ClassListView",
    "ClassDetailView",
    "ClassSessionListView",
    "SessionUpsertView",
    "SessionDetailView",
    "RegistrationListView",
    "RegistrationStatusView",
    "RegistrationCancelView",
]
