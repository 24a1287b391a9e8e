"""Infrastructure layer for the Resolution bounded context."""

from resolution.infrastructure.domain_mapping_repository import (
    RedisDomainMappingRepository,
)

__all__ = ["RedisDomainMappingRepository"]
