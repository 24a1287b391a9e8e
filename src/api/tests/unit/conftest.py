"""Unit test fixtures with an in-memory Redis store."""

from collections.abc import Generator

import fakeredis
import pytest
from fastapi.testclient import TestClient

from infrastructure.store.client import DomainStoreClient


@pytest.fixture
def redis_server() -> fakeredis.FakeServer:
    """Provide an in-memory Redis server.

    Set ``redis_server.connected = False`` to simulate an outage.
    """
    return fakeredis.FakeServer()


@pytest.fixture
def seed_redis(redis_server: fakeredis.FakeServer) -> fakeredis.FakeRedis:
    """Synchronous client on the same server, for seeding mappings."""
    return fakeredis.FakeRedis(server=redis_server)


@pytest.fixture
def domain_store(redis_server: fakeredis.FakeServer) -> DomainStoreClient:
    """Provide a store client backed by the in-memory server."""
    redis = fakeredis.aioredis.FakeRedis(server=redis_server)
    return DomainStoreClient(redis, address="fakeredis:6379")


@pytest.fixture
def resolver_client(
    domain_store: DomainStoreClient,
) -> Generator[TestClient, None, None]:
    """Provide a TestClient for the resolver app with lifespan running."""
    from main import create_app

    app = create_app(store_factory=lambda: domain_store)
    with TestClient(app) as client:
        yield client
