"""Tenant context value object and header validation.

Framework-agnostic: the value object, the header constants and the
length rule live here so that every bounded context agrees on the shape
of a tenant identifier.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from shared_kernel.middleware.exceptions import (
    InvalidTenantIDFormatError,
    TenantIDRequiredError,
)

TENANT_ID_HEADER = "X-Tenant-ID"

MIN_TENANT_ID_LENGTH = 3
MAX_TENANT_ID_LENGTH = 128


@dataclass(frozen=True)
class TenantContext:
    """Resolved tenant context for the current request.

    Attributes:
        tenant_id: The validated tenant identifier.
        source: How the tenant was obtained. Only 'header' exists: the
            identifier is never defaulted or guessed.
    """

    tenant_id: str
    source: Literal["header"] = "header"


def validate_tenant_id(raw_value: str | None) -> TenantContext:
    """Validate a raw X-Tenant-ID header value.

    Only the length is checked; the identifier is otherwise opaque.

    Args:
        raw_value: Header value, or None when the header is absent.

    Returns:
        TenantContext for the identifier.

    Raises:
        TenantIDRequiredError: If the value is absent or empty.
        InvalidTenantIDFormatError: If the length is outside [3, 128].
    """
    if not raw_value:
        raise TenantIDRequiredError(
            f"{TENANT_ID_HEADER} header is required for all tenant operations"
        )

    length = len(raw_value)
    if length < MIN_TENANT_ID_LENGTH or length > MAX_TENANT_ID_LENGTH:
        raise InvalidTenantIDFormatError(
            f"{TENANT_ID_HEADER} must be between {MIN_TENANT_ID_LENGTH} and "
            f"{MAX_TENANT_ID_LENGTH} characters",
            length=length,
        )

    return TenantContext(tenant_id=raw_value, source="header")
