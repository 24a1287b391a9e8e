"""Redis-backed key-value store shared by the resolver process."""

from infrastructure.store.client import DomainStoreClient
from infrastructure.store.exceptions import DomainStoreError, StoreClosedError

__all__ = [
    "DomainStoreClient",
    "DomainStoreError",
    "StoreClosedError",
]
