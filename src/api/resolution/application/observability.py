"""Domain probe for tenant resolution.

Captures domain-significant events of the resolver. Client-caused
outcomes (no host, unknown domain) are logged below error level; store
failures are logged as errors.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class DomainResolverProbe(Protocol):
    """Domain probe for domain-to-tenant resolution."""

    def host_selected(self, host: str, header: str) -> None:
        """Record which header supplied the origin host."""
        ...

    def host_missing(self, header_names: tuple[str, ...]) -> None:
        """Record that no host header carried a value."""
        ...

    def tenant_resolved(self, host: str, tenant_id: str) -> None:
        """Record that a host resolved to a tenant."""
        ...

    def tenant_not_found(self, host: str) -> None:
        """Record that no mapping exists for a host."""
        ...

    def store_unavailable(self, host: str, error: Exception) -> None:
        """Record that the store failed during a lookup."""
        ...

    def store_unreachable(self, error: Exception) -> None:
        """Record that the readiness ping failed."""
        ...

    def with_context(self, context: ObservationContext) -> DomainResolverProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultDomainResolverProbe:
    """Default implementation of DomainResolverProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultDomainResolverProbe:
        """Create a new probe with observation context bound."""
        return DefaultDomainResolverProbe(logger=self._logger, context=context)

    def host_selected(self, host: str, header: str) -> None:
        """Record which header supplied the origin host."""
        self._logger.debug(
            "resolution_host_selected",
            host=host,
            header=header,
            **self._get_context_kwargs(),
        )

    def host_missing(self, header_names: tuple[str, ...]) -> None:
        """Record that no host header carried a value."""
        self._logger.warning(
            "resolution_host_missing",
            headers=list(header_names),
            **self._get_context_kwargs(),
        )

    def tenant_resolved(self, host: str, tenant_id: str) -> None:
        """Record that a host resolved to a tenant."""
        self._logger.info(
            "resolution_tenant_resolved",
            host=host,
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def tenant_not_found(self, host: str) -> None:
        """Record that no mapping exists for a host."""
        self._logger.info(
            "resolution_tenant_not_found",
            host=host,
            **self._get_context_kwargs(),
        )

    def store_unavailable(self, host: str, error: Exception) -> None:
        """Record that the store failed during a lookup."""
        self._logger.error(
            "resolution_store_unavailable",
            host=host,
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )

    def store_unreachable(self, error: Exception) -> None:
        """Record that the readiness ping failed."""
        self._logger.error(
            "readiness_store_unreachable",
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )
