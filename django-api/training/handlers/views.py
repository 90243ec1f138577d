"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Map domain errors to HTTP responses
- Never contain business logic
- Never expose internal error details
"""

import logging
from collections.abc import Mapping
from typing import Any

from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from training import cache
from training.domain import TenantId
from training.domain.errors import (
    AuthorizationError,
    DomainError,
    NotFoundError,
    SessionFullError,
    ValidationError,
)
from training.handlers.serializers import (
    CategorySerializer,
    RegistrationSerializer,
    SessionSerializer,
    TrainingClassSerializer,
)
from training.services import (
    TENANT_HEADER,
    CapacityService,
    CatalogService,
    RegistrationService,
    resolve_tenant,
)
from training.stores import DjangoCatalogStore, DjangoRegistrationStore, DjangoSessionStore

logger = logging.getLogger(__name__)

_ERROR_STATUS = (
    (AuthorizationError, status.HTTP_403_FORBIDDEN),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (SessionFullError, status.HTTP_409_CONFLICT),
)


def catalog_service() -> CatalogService:
    return CatalogService(DjangoCatalogStore())


def capacity_service() -> CapacityService:
    return CapacityService(DjangoSessionStore(), DjangoCatalogStore())


def registration_service() -> RegistrationService:
    return RegistrationService(DjangoRegistrationStore(), capacity_service(), DjangoCatalogStore())


def error_response(error: DomainError) -> Response:
    http_status = next(
        (code for kind, code in _ERROR_STATUS if isinstance(error, kind)),
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
    return Response(
        {"error": {"code": error.code.value, "message": error.message}},
        status=http_status,
    )


class TenantAPIView(APIView):
    """Base view resolving the tenant and translating domain errors."""

    def tenant(self, request: Request) -> TenantId:
        return resolve_tenant(request.headers.get(TENANT_HEADER))

    def fields(self, request: Request) -> Mapping[str, Any]:
        data = request.data
        if hasattr(data, "dict"):
            return data.dict()
        if not isinstance(data, Mapping):
            raise ValidationError("Request body must be an object")
        return data

    def handle_exception(self, exc: Exception) -> Response:
        if isinstance(exc, DomainError):
            return error_response(exc)
        if isinstance(exc, APIException):
            return super().handle_exception(exc)
        logger.exception("Unhandled error in %s", type(self).__name__)
        return Response(
            {"error": {"code": "INTERNAL_ERROR", "message": "Internal server error"}},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )


class CategoryListView(TenantAPIView):
    """Handler for GET/POST /api/training/categories"""

    def get(self, request: Request) -> Response:
        tenant = self.tenant(request)
        include_inactive = request.query_params.get("includeInactive") == "true"
        key = cache.catalog_key(tenant, "categories", "all" if include_inactive else "active")
        data = cache.get_catalog(key)
        if data is None:
            categories = catalog_service().list_categories(tenant, include_inactive)
            data = CategorySerializer(categories, many=True).data
            cache.set_catalog(key, data)
        return Response(data)

    def post(self, request: Request) -> Response:
        category = catalog_service().create_category(self.tenant(request), self.fields(request))
        return Response(CategorySerializer(category).data, status=status.HTTP_201_CREATED)


class CategoryDetailView(TenantAPIView):
    """Handler for GET/PUT /api/training/categories/{category_id}"""

    def get(self, request: Request, category_id: str) -> Response:
        category = catalog_service().get_category(self.tenant(request), category_id)
        return Response(CategorySerializer(category).data)

    def put(self, request: Request, category_id: str) -> Response:
        category = catalog_service().update_category(
            self.tenant(request), category_id, self.fields(request)
        )
        return Response(CategorySerializer(category).data)


class ClassListView(TenantAPIView):
    """Handler for GET/POST /api/training/classes"""

    def get(self, request: Request) -> Response:
        tenant = self.tenant(request)
        category = request.query_params.get("category") or None
        search = request.query_params.get("search") or None
        if search:
            classes = catalog_service().list_classes(tenant, category, search)
            return Response(TrainingClassSerializer(classes, many=True).data)

        key = cache.catalog_key(tenant, "classes", category or "all")
        data = cache.get_catalog(key)
        if data is None:
            classes = catalog_service().list_classes(tenant, category)
            data = TrainingClassSerializer(classes, many=True).data
            cache.set_catalog(key, data)
        return Response(data)

    def post(self, request: Request) -> Response:
        training_class = catalog_service().create_class(self.tenant(request), self.fields(request))
        return Response(TrainingClassSerializer(training_class).data, status=status.HTTP_201_CREATED)


class ClassDetailView(TenantAPIView):
    """Handler for GET/PUT /api/training/classes/{class_id}"""

    def get(self, request: Request, class_id: str) -> Response:
        training_class = catalog_service().get_class(self.tenant(request), class_id)
        return Response(TrainingClassSerializer(training_class).data)

    def put(self, request: Request, class_id: str) -> Response:
        training_class = catalog_service().update_class(
            self.tenant(request), class_id, self.fields(request)
        )
        return Response(TrainingClassSerializer(training_class).data)


class ClassSessionListView(TenantAPIView):
    """Handler for GET /api/training/classes/{class_id}/sessions"""

    def get(self, request: Request, class_id: str) -> Response:
        future_only = request.query_params.get("futureOnly") != "false"
        sessions = capacity_service().list_sessions(self.tenant(request), class_id, future_only)
        return Response(SessionSerializer(sessions, many=True).data)


class SessionUpsertView(TenantAPIView):
    """Handler for POST /api/training/sessions"""

    def post(self, request: Request) -> Response:
        session = capacity_service().upsert_session(self.tenant(request), self.fields(request))
        return Response(SessionSerializer(session).data, status=status.HTTP_201_CREATED)


class SessionDetailView(TenantAPIView):
    """Handler for GET/PUT/DELETE /api/training/sessions/{session_id}"""

    def get(self, request: Request, session_id: str) -> Response:
        session = capacity_service().get_session(self.tenant(request), session_id)
        return Response(SessionSerializer(session).data)

    def put(self, request: Request, session_id: str) -> Response:
        tenant = self.tenant(request)
        fields = {**self.fields(request), "id": session_id}
        session = capacity_service().upsert_session(tenant, fields)
        return Response(SessionSerializer(session).data)

    def delete(self, request: Request, session_id: str) -> Response:
        capacity_service().delete_session(self.tenant(request), session_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class RegistrationListView(TenantAPIView):
    """Handler for GET/POST /api/training/registrations"""

    def get(self, request: Request) -> Response:
        filters = {
            key: request.query_params.get(key)
            for key in ("class_id", "session_id", "status", "email")
        }
        registrations = registration_service().list_registrations(self.tenant(request), filters)
        return Response(RegistrationSerializer(registrations, many=True).data)

    def post(self, request: Request) -> Response:
        registration = registration_service().create_registration(
            self.tenant(request), self.fields(request)
        )
        return Response(RegistrationSerializer(registration).data, status=status.HTTP_201_CREATED)


class RegistrationStatusView(TenantAPIView):
    """Handler for PUT /api/training/registrations/{registration_id}/status"""

    def put(self, request: Request, registration_id: str) -> Response:
        registration = registration_service().update_registration_status(
            self.tenant(request), registration_id, self.fields(request).get("status")
        )
        return Response(RegistrationSerializer(registration).data)


class RegistrationCancelView(TenantAPIView):
    """Handler for POST /api/training/registrations/{registration_id}/cancel"""

    def post(self, request: Request, registration_id: str) -> Response:
        fields = self.fields(request)
        registration = registration_service().cancel_registration(
            self.tenant(request), registration_id, fields.get("status") or "cancelled"
        )
        return Response(RegistrationSerializer(registration).data)
