"""Application layer for the Resolution bounded context."""

from resolution.application.services import DomainResolverService

__all__ = ["DomainResolverService"]
