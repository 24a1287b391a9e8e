"""Repository interfaces (ports) for the Resolution bounded context.

These protocols define the contract for reading domain-to-tenant
mappings without specifying the store behind them.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class IDomainMappingRepository(Protocol):
    """Read-only access to the domain-to-tenant mapping.

    Mappings are created and removed by a provisioning process outside
    this service; implementations must never write.
    """

    async def find_tenant_id(self, key: str) -> str | None:
        """Look up the tenant identifier stored under a key.

        Args:
            key: Full store key, prefix included.

        Returns:
            The stored tenant identifier, or None when the key is absent.

        Raises:
            StoreUnavailableError: If the store cannot answer.
        """
        ...

    async def ping(self) -> None:
        """Check that the store answers.

        Raises:
            StoreUnavailableError: If the store cannot answer.
        """
        ...
