"""Main FastAPI application entry point for the domain resolver."""

from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from infrastructure.logging import configure_logging
from infrastructure.observability.probes import DefaultServerLifecycleProbe
from infrastructure.settings import (
    get_server_settings,
    get_settings,
    get_store_settings,
)
from infrastructure.store.client import DomainStoreClient
from infrastructure.version import __version__
from resolution.presentation import routes as resolution_routes


def _default_store_factory() -> DomainStoreClient:
    return DomainStoreClient.from_settings(get_store_settings())


def create_app(
    store_factory: Callable[[], DomainStoreClient] | None = None,
) -> FastAPI:
    """Build the resolver application.

    Args:
        store_factory: Builds the store client at startup. Defaults to a
            Redis client configured from ``StoreSettings``.
    """
    factory = store_factory or _default_store_factory

    @asynccontextmanager
    async def resolver_lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Application lifespan context.

        Manages:
        - Store client creation and startup connectivity check
        - Store client close, after the server has drained in-flight requests
        """
        store = factory()
        await store.check_connection()
        app.state.domain_store = store
        try:
            yield
        finally:
            await store.close()

    app = FastAPI(
        title=get_settings().app_name,
        description="Resolves request hostnames to tenant identifiers for the edge proxy",
        version=__version__,
        lifespan=resolver_lifespan,
    )
    app.include_router(resolution_routes.router)
    return app


app = create_app()


def run() -> None:
    """Start the resolver under uvicorn.

    uvicorn stops accepting connections on SIGINT/SIGTERM, gives in-flight
    requests ``shutdown_grace_period`` seconds, then runs the lifespan
    shutdown that closes the store client.
    """
    settings = get_server_settings()
    configure_logging(settings.log_level)
    probe = DefaultServerLifecycleProbe()

    config = uvicorn.Config(
        app,
        host=settings.host,
        port=settings.port,
        timeout_keep_alive=settings.idle_timeout,
        timeout_graceful_shutdown=settings.shutdown_grace_period,
        log_level=settings.log_level,
    )
    probe.server_starting(host=settings.host, port=settings.port)
    uvicorn.Server(config).run()
    probe.server_stopped()


if __name__ == "__main__":
    run()
