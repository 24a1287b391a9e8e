"""Exceptions raised while establishing or reading tenant context."""

from __future__ import annotations


class TenantContextError(Exception):
    """Base exception for tenant context failures.

    Attributes:
        code: Machine-readable error code returned to clients.
        error: Short human-readable error title.
    """

    code: str = "TENANT_CONTEXT_ERROR"
    error: str = "Tenant context error"

    def as_body(self) -> dict[str, str]:
        """Structured error body returned to the client."""
        return {"error": self.error, "message": str(self), "code": self.code}


class TenantIDRequiredError(TenantContextError):
    """Raised when the X-Tenant-ID header is absent or empty."""

    code = "TENANT_ID_REQUIRED"
    error = "Missing tenant identifier"


class InvalidTenantIDFormatError(TenantContextError):
    """Raised when the X-Tenant-ID header has an out-of-range length."""

    code = "INVALID_TENANT_ID"
    error = "Invalid tenant identifier"

    def __init__(self, message: str, length: int):
        super().__init__(message)
        self.length = length


class TenantContextMissingError(TenantContextError):
    """Raised when a handler requires tenant context that was never set.

    This is a wiring defect (the tenant middleware is not mounted in front
    of the handler), not a client error. It aborts only the current request.
    """

    code = "TENANT_CONTEXT_MISSING"
    error = "Tenant context unavailable"
