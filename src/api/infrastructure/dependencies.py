"""Shared infrastructure dependencies.

Provides ONLY raw infrastructure resources (the store client).
Does NOT import from bounded contexts to maintain DDD boundaries.
"""

from fastapi import Request

from infrastructure.store.client import DomainStoreClient


def get_domain_store(request: Request) -> DomainStoreClient:
    """Get the application-scoped store client.

    The client is created and owned by the application lifespan and
    stored on ``app.state``; every request shares it.

    Raises:
        RuntimeError: If the lifespan has not installed a client.
    """
    store = getattr(request.app.state, "domain_store", None)
    if store is None:
        raise RuntimeError(
            "Domain store not initialized; the application lifespan did not run"
        )
    return store
