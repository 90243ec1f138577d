from django.urls import path

from training.handlers import (
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

urlpatterns = [
    path("categories", CategoryListView.as_view(), name="category-list"),
    path("categories/<str:category_id>", CategoryDetailView.as_view(), name="category-detail"),
    path("classes", ClassListView.as_view(), name="class-list"),
    path("classes/<str:class_id>", ClassDetailView.as_view(), name="class-detail"),
    path(
        "classes/<str:class_id>/sessions",
        ClassSessionListView.as_view(),
        name="class-session-list",
    ),
    path("sessions", SessionUpsertView.as_view(), name="session-upsert"),
    path("sessions/<str:session_id>", SessionDetailView.as_view(), name="session-detail"),
    path("registrations", RegistrationListView.as_view(), name="registration-list"),
    path(
        "registrations/<int:registration_id>/status",
        RegistrationStatusView.as_view(),
        name="registration-status",
    ),
    path(
        "registrations/<int:registration_id>/cancel",
        RegistrationCancelView.as_view(),
        name="registration-cancel",
    ),
]
