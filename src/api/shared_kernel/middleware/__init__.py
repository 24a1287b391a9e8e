"""Shared middleware for cross-cutting concerns.

This module contains the tenant context middleware shared by every
application server sitting behind the edge proxy, together with the
accessors tenant-scoped handlers use to read the validated tenant.
"""

from shared_kernel.middleware.exceptions import (
    InvalidTenantIDFormatError,
    TenantContextError,
    TenantContextMissingError,
    TenantIDRequiredError,
)
from shared_kernel.middleware.tenancy import (
    TenantContextMiddleware,
    current_tenant_id,
    get_tenant_context,
    get_tenant_id,
    must_get_tenant_id,
    register_tenant_context_handlers,
)
from shared_kernel.middleware.tenant_context import (
    MAX_TENANT_ID_LENGTH,
    MIN_TENANT_ID_LENGTH,
    TENANT_ID_HEADER,
    TenantContext,
    validate_tenant_id,
)

__all__ = [
    "InvalidTenantIDFormatError",
    "MAX_TENANT_ID_LENGTH",
    "MIN_TENANT_ID_LENGTH",
    "TENANT_ID_HEADER",
    "TenantContext",
    "TenantContextError",
    "TenantContextMiddleware",
    "TenantContextMissingError",
    "TenantIDRequiredError",
    "current_tenant_id",
    "get_tenant_context",
    "get_tenant_id",
    "must_get_tenant_id",
    "register_tenant_context_handlers",
    "validate_tenant_id",
]
