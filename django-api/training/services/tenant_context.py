"""Resolution of the acting tenant.

Callers resolve the tenant once at the edge and pass the TenantId into every
service call; nothing below this point looks the tenant up on its own.
"""

from training.domain.errors import AuthorizationError
from training.domain.value_objects import TenantId

TENANT_HEADER = "X-Tenant-ID"


def resolve_tenant(raw: object) -> TenantId:
    """Return the tenant identified by ``raw``.

    Raises:
        AuthorizationError: If ``raw`` is missing or not a valid tenant id.
    """
    if raw is None:
        raise AuthorizationError()
    try:
        return TenantId.from_raw(raw)
    except ValueError as exc:
        raise AuthorizationError() from exc
