"""Ports (interfaces) for the Resolution bounded context."""

from resolution.ports.repositories import IDomainMappingRepository

__all__ = ["IDomainMappingRepository"]
