"""Domain probes for infrastructure observability.

Domain probes provide a high-level instrumentation API oriented around
domain semantics, keeping infrastructure code clean and testable.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class StoreConnectionProbe(Protocol):
    """Domain probe for the Redis store connection.

    Captures connection lifecycle events without exposing logging
    implementation details.
    """

    def store_connected(self, address: str, db: int) -> None:
        """Record that the startup ping against the store succeeded."""
        ...

    def store_connection_failed(self, address: str, error: Exception) -> None:
        """Record that the startup ping against the store failed."""
        ...

    def store_call_after_close(self, operation: str) -> None:
        """Record that a store call was attempted after the client was closed."""
        ...

    def store_closed(self) -> None:
        """Record that the store client was closed."""
        ...

    def with_context(self, context: ObservationContext) -> StoreConnectionProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultStoreConnectionProbe:
    """Default implementation of StoreConnectionProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultStoreConnectionProbe:
        """Create a new probe with observation context bound."""
        return DefaultStoreConnectionProbe(logger=self._logger, context=context)

    def store_connected(self, address: str, db: int) -> None:
        """Record that the startup ping against the store succeeded."""
        self._logger.info(
            "store_connected",
            address=address,
            db=db,
            **self._get_context_kwargs(),
        )

    def store_connection_failed(self, address: str, error: Exception) -> None:
        """Record that the startup ping against the store failed."""
        self._logger.warning(
            "store_connection_failed",
            address=address,
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )

    def store_call_after_close(self, operation: str) -> None:
        """Record that a store call was attempted after the client was closed."""
        self._logger.error(
            "store_call_after_close",
            operation=operation,
            **self._get_context_kwargs(),
        )

    def store_closed(self) -> None:
        """Record that the store client was closed."""
        self._logger.info(
            "store_closed",
            **self._get_context_kwargs(),
        )


class ServerLifecycleProbe(Protocol):
    """Domain probe for process startup and shutdown."""

    def server_starting(self, host: str, port: int) -> None:
        """Record that the HTTP server is about to start listening."""
        ...

    def server_stopped(self) -> None:
        """Record that the HTTP server exited."""
        ...

    def with_context(self, context: ObservationContext) -> ServerLifecycleProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultServerLifecycleProbe:
    """Default implementation of ServerLifecycleProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultServerLifecycleProbe:
        """Create a new probe with observation context bound."""
        return DefaultServerLifecycleProbe(logger=self._logger, context=context)

    def server_starting(self, host: str, port: int) -> None:
        """Record that the HTTP server is about to start listening."""
        self._logger.info(
            "server_starting",
            host=host,
            port=port,
            **self._get_context_kwargs(),
        )

    def server_stopped(self) -> None:
        """Record that the HTTP server exited."""
        self._logger.info(
            "server_stopped",
            **self._get_context_kwargs(),
        )
