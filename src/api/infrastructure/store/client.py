"""Explicitly owned Redis client for the domain mapping store.

The client is constructed once at startup, injected wherever the store is
read, and closed exactly once on shutdown. It never writes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from redis.asyncio import Redis
from redis.exceptions import RedisError

from infrastructure.observability.probes import (
    DefaultStoreConnectionProbe,
    StoreConnectionProbe,
)
from infrastructure.store.exceptions import DomainStoreError, StoreClosedError

if TYPE_CHECKING:
    from infrastructure.settings import StoreSettings


class DomainStoreClient:
    """Read-only wrapper around a ``redis.asyncio.Redis`` connection pool.

    The underlying pool is safe for concurrent use by simultaneously
    in-flight requests; this class adds no locking of its own. Once
    ``close()`` has been awaited every further call raises
    ``StoreClosedError`` without touching the network.

    Attributes:
        _redis: The underlying asyncio Redis client.
        _address: host:port the client points at, for logging.
        _db: Redis logical database number.
        _probe: Observability probe for connection lifecycle events.
    """

    def __init__(
        self,
        redis: Redis,
        address: str = "",
        db: int = 0,
        probe: StoreConnectionProbe | None = None,
    ):
        self._redis = redis
        self._address = address
        self._db = db
        self._probe = probe or DefaultStoreConnectionProbe()
        self._closed = False

    @classmethod
    def from_settings(
        cls,
        settings: StoreSettings,
        probe: StoreConnectionProbe | None = None,
    ) -> DomainStoreClient:
        """Build a client with its own connection pool from settings."""
        password = settings.password.get_secret_value() or None
        redis = Redis(
            host=settings.host,
            port=settings.port,
            db=settings.db,
            password=password,
            decode_responses=False,
            socket_timeout=settings.socket_timeout,
            socket_connect_timeout=settings.socket_connect_timeout,
            max_connections=settings.max_connections,
        )
        return cls(redis, address=settings.address, db=settings.db, probe=probe)

    @property
    def closed(self) -> bool:
        """Whether ``close()`` has been called."""
        return self._closed

    def _ensure_open(self, operation: str) -> None:
        if self._closed:
            self._probe.store_call_after_close(operation=operation)
            raise StoreClosedError(f"Store client is closed; refusing {operation}")

    async def get(self, key: str) -> str | None:
        """Read a single string value.

        Keys and values cross the wire as latin-1, the same mapping ASGI
        servers use for header bytes, so a value read here and written into
        a response header carries exactly the bytes stored in Redis.

        Returns:
            The stored value, or None when the key does not exist.

        Raises:
            DomainStoreError: If the store is unreachable or errors.
        """
        self._ensure_open("GET")
        try:
            value = await self._redis.get(key.encode("latin-1"))
        except (RedisError, OSError) as e:
            raise DomainStoreError(f"GET {key!r} failed: {e}") from e
        if isinstance(value, bytes):
            return value.decode("latin-1")
        return value

    async def ping(self) -> None:
        """Round-trip a PING to the store.

        Raises:
            DomainStoreError: If the store does not answer.
        """
        self._ensure_open("PING")
        try:
            await self._redis.ping()
        except (RedisError, OSError) as e:
            raise DomainStoreError(f"PING failed: {e}") from e

    async def check_connection(self) -> bool:
        """Ping once at startup and record the outcome.

        A failed ping does not prevent startup; readiness reports it.
        """
        try:
            await self.ping()
        except DomainStoreError as e:
            self._probe.store_connection_failed(address=self._address, error=e)
            return False
        self._probe.store_connected(address=self._address, db=self._db)
        return True

    async def close(self) -> None:
        """Close the connection pool. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        await self._redis.aclose()
        self._probe.store_closed()
