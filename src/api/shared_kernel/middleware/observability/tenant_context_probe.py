"""Domain probe for tenant context propagation.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events related to establishing tenant context from
the X-Tenant-ID request header.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class TenantContextProbe(Protocol):
    """Domain probe for tenant context propagation."""

    def tenant_context_established(self, tenant_id: str) -> None:
        """Record that tenant context was set from the X-Tenant-ID header."""
        ...

    def tenant_header_missing(self) -> None:
        """Record that the X-Tenant-ID header was absent or empty."""
        ...

    def invalid_tenant_id_format(self, length: int) -> None:
        """Record that the X-Tenant-ID header had an out-of-range length."""
        ...

    def tenant_context_missing(self, error: Exception) -> None:
        """Record that a handler required tenant context that was never set."""
        ...

    def with_context(self, context: ObservationContext) -> TenantContextProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultTenantContextProbe:
    """Default implementation of TenantContextProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultTenantContextProbe:
        """Create a new probe with observation context bound."""
        return DefaultTenantContextProbe(logger=self._logger, context=context)

    def tenant_context_established(self, tenant_id: str) -> None:
        """Record that tenant context was set from the X-Tenant-ID header."""
        self._logger.debug(
            "tenant_context_established",
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def tenant_header_missing(self) -> None:
        """Record that the X-Tenant-ID header was absent or empty."""
        self._logger.warning(
            "tenant_context_header_missing",
            message="X-Tenant-ID header is required for tenant-scoped routes",
            **self._get_context_kwargs(),
        )

    def invalid_tenant_id_format(self, length: int) -> None:
        """Record that the X-Tenant-ID header had an out-of-range length."""
        self._logger.warning(
            "tenant_context_invalid_format",
            length=length,
            **self._get_context_kwargs(),
        )

    def tenant_context_missing(self, error: Exception) -> None:
        """Record that a handler required tenant context that was never set."""
        self._logger.error(
            "tenant_context_missing",
            message="Tenant context required but not set; is TenantContextMiddleware mounted?",
            error=str(error),
            **self._get_context_kwargs(),
        )
