"""Redis-backed implementation of the domain mapping repository."""

from __future__ import annotations

from infrastructure.store.client import DomainStoreClient
from infrastructure.store.exceptions import DomainStoreError
from resolution.domain.exceptions import StoreUnavailableError


class RedisDomainMappingRepository:
    """Reads ``domain:<host>`` string keys through the shared store client.

    One GET per lookup. Absence (``None``) and store errors are reported
    through different channels so they can never be confused.
    """

    def __init__(self, store: DomainStoreClient):
        self._store = store

    async def find_tenant_id(self, key: str) -> str | None:
        try:
            return await self._store.get(key)
        except DomainStoreError as e:
            raise StoreUnavailableError(str(e)) from e

    async def ping(self) -> None:
        try:
            await self._store.ping()
        except DomainStoreError as e:
            raise StoreUnavailableError(str(e)) from e
