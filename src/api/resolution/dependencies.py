"""Dependency injection for the Resolution bounded context.

Composes the shared store client with resolution-specific components
(repository, policy, service).
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Request

from infrastructure.dependencies import get_domain_store
from infrastructure.settings import get_resolution_settings
from infrastructure.store.client import DomainStoreClient
from resolution.application.observability import (
    DefaultDomainResolverProbe,
    DomainResolverProbe,
)
from resolution.application.services import DomainResolverService
from resolution.domain.value_objects import HostHeaderPolicy
from resolution.infrastructure.domain_mapping_repository import (
    RedisDomainMappingRepository,
)
from shared_kernel.observability_context import ObservationContext


@lru_cache
def get_host_header_policy() -> HostHeaderPolicy:
    """Get the configured host header policy (singleton)."""
    settings = get_resolution_settings()
    return HostHeaderPolicy(
        header_names=tuple(settings.host_header_priority),
        key_prefix=settings.key_prefix,
    )


def get_resolver_probe(request: Request) -> DomainResolverProbe:
    """Get a resolver probe bound to the current request."""
    context = ObservationContext(
        request_id=request.headers.get("X-Request-ID"),
        path=request.url.path,
    )
    return DefaultDomainResolverProbe().with_context(context)


def get_domain_mapping_repository(
    store: Annotated[DomainStoreClient, Depends(get_domain_store)],
) -> RedisDomainMappingRepository:
    """Get the mapping repository over the shared store client."""
    return RedisDomainMappingRepository(store)


def get_domain_resolver_service(
    repository: Annotated[
        RedisDomainMappingRepository, Depends(get_domain_mapping_repository)
    ],
    policy: Annotated[HostHeaderPolicy, Depends(get_host_header_policy)],
    probe: Annotated[DomainResolverProbe, Depends(get_resolver_probe)],
) -> DomainResolverService:
    """Get a request-scoped DomainResolverService."""
    return DomainResolverService(repository=repository, policy=policy, probe=probe)
