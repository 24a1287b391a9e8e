"""Application services for the Resolution bounded context."""

from __future__ import annotations

from collections.abc import Mapping

from resolution.application.observability import (
    DefaultDomainResolverProbe,
    DomainResolverProbe,
)
from resolution.domain.exceptions import (
    MissingHostError,
    StoreUnavailableError,
    TenantNotFoundError,
)
from resolution.domain.value_objects import HostHeaderPolicy, ResolvedTenant
from resolution.ports.repositories import IDomainMappingRepository


class DomainResolverService:
    """Resolves a request's origin host to a tenant identifier.

    Stateless: every call performs exactly one store read and keeps
    nothing between calls. Failures are raised immediately, without
    retries or fallbacks.
    """

    def __init__(
        self,
        repository: IDomainMappingRepository,
        policy: HostHeaderPolicy | None = None,
        probe: DomainResolverProbe | None = None,
    ):
        """Initialize the service.

        Args:
            repository: Read-only domain mapping repository.
            policy: Host header priority and key format.
            probe: Optional domain probe for observability.
        """
        self._repository = repository
        self._policy = policy or HostHeaderPolicy()
        self._probe = probe or DefaultDomainResolverProbe()

    async def resolve(self, headers: Mapping[str, str]) -> ResolvedTenant:
        """Resolve the tenant for a request.

        Args:
            headers: The request's case-insensitive header mapping.

        Returns:
            ResolvedTenant carrying the stored identifier verbatim.

        Raises:
            MissingHostError: No host header has a value.
            TenantNotFoundError: The selected host has no mapping.
            StoreUnavailableError: The store failed.
        """
        selected = self._policy.select_host(headers)
        if selected is None:
            self._probe.host_missing(header_names=self._policy.header_names)
            raise MissingHostError(self._policy.header_names)

        header, host = selected
        self._probe.host_selected(host=host, header=header)

        try:
            tenant_id = await self._repository.find_tenant_id(
                self._policy.lookup_key(host)
            )
        except StoreUnavailableError as e:
            self._probe.store_unavailable(host=host, error=e)
            raise StoreUnavailableError(str(e), host=host) from e

        if tenant_id is None:
            self._probe.tenant_not_found(host=host)
            raise TenantNotFoundError(host)

        self._probe.tenant_resolved(host=host, tenant_id=tenant_id)
        return ResolvedTenant(host=host, source_header=header, tenant_id=tenant_id)

    async def is_ready(self) -> bool:
        """Ping the store. Nothing is cached between calls."""
        try:
            await self._repository.ping()
        except StoreUnavailableError as e:
            self._probe.store_unreachable(error=e)
            return False
        return True
