"""Domain layer for the Resolution bounded context."""

from resolution.domain.exceptions import (
    MissingHostError,
    ResolutionError,
    StoreUnavailableError,
    TenantNotFoundError,
)
from resolution.domain.value_objects import HostHeaderPolicy, ResolvedTenant

__all__ = [
    "HostHeaderPolicy",
    "MissingHostError",
    "ResolutionError",
    "ResolvedTenant",
    "StoreUnavailableError",
    "TenantNotFoundError",
]
