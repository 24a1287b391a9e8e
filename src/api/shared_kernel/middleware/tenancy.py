"""Tenant context middleware and accessors.

Mount ``TenantContextMiddleware`` in front of tenant-scoped routes. It
rejects requests without a well-formed X-Tenant-ID header before any
handler runs, and stores the validated ``TenantContext`` where later
stages can read it without re-parsing:

    app = FastAPI()
    app.add_middleware(TenantContextMiddleware, exempt_paths={"/health"})
    register_tenant_context_handlers(app)

    @app.get("/orders")
    async def list_orders(tenant_id: Annotated[str, Depends(must_get_tenant_id)]):
        ...
"""

from __future__ import annotations

from collections.abc import Iterable
from contextvars import ContextVar

import structlog
from starlette.requests import HTTPConnection, Request
from starlette.responses import JSONResponse
from starlette.status import HTTP_400_BAD_REQUEST, HTTP_500_INTERNAL_SERVER_ERROR
from starlette.types import ASGIApp, Receive, Scope, Send
from starlette.websockets import WebSocketClose

from shared_kernel.middleware.exceptions import (
    InvalidTenantIDFormatError,
    TenantContextError,
    TenantContextMissingError,
    TenantIDRequiredError,
)
from shared_kernel.middleware.observability.tenant_context_probe import (
    DefaultTenantContextProbe,
    TenantContextProbe,
)
from shared_kernel.middleware.tenant_context import (
    TENANT_ID_HEADER,
    TenantContext,
    validate_tenant_id,
)
from shared_kernel.observability_context import ObservationContext

STATE_KEY = "tenant_context"

# WebSocket close code for policy violations (RFC 6455).
WS_POLICY_VIOLATION = 1008

_current_tenant: ContextVar[TenantContext | None] = ContextVar(
    "current_tenant", default=None
)


class TenantContextMiddleware:
    """ASGI middleware enforcing a valid X-Tenant-ID on every request.

    Per request: Unvalidated -> Rejected (400, downstream never called), or
    Unvalidated -> Validated -> downstream runs -> Completed. The context
    lives in the request's own scope state and in a context variable that
    is reset when the request finishes, so nothing leaks across requests.
    """

    def __init__(
        self,
        app: ASGIApp,
        exempt_paths: Iterable[str] = (),
        probe: TenantContextProbe | None = None,
    ):
        """Initialize the middleware.

        Args:
            app: The downstream ASGI application.
            exempt_paths: Exact paths served without tenant context
                (health checks and other public routes).
            probe: Optional domain probe for observability.
        """
        self.app = app
        self._exempt_paths = frozenset(exempt_paths)
        self._probe = probe or DefaultTenantContextProbe()

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] not in ("http", "websocket"):
            await self.app(scope, receive, send)
            return

        if scope["path"] in self._exempt_paths:
            await self.app(scope, receive, send)
            return

        connection = HTTPConnection(scope)
        probe = self._probe.with_context(
            ObservationContext(
                request_id=connection.headers.get("X-Request-ID"),
                path=scope["path"],
            )
        )

        try:
            context = validate_tenant_id(connection.headers.get(TENANT_ID_HEADER))
        except TenantIDRequiredError as e:
            probe.tenant_header_missing()
            await self._reject(e, scope, receive, send)
            return
        except InvalidTenantIDFormatError as e:
            probe.invalid_tenant_id_format(length=e.length)
            await self._reject(e, scope, receive, send)
            return

        scope.setdefault("state", {})[STATE_KEY] = context
        probe.tenant_context_established(tenant_id=context.tenant_id)

        token = _current_tenant.set(context)
        try:
            with structlog.contextvars.bound_contextvars(tenant_id=context.tenant_id):
                await self.app(scope, receive, send)
        finally:
            _current_tenant.reset(token)

    async def _reject(
        self,
        error: TenantContextError,
        scope: Scope,
        receive: Receive,
        send: Send,
    ) -> None:
        if scope["type"] == "websocket":
            await WebSocketClose(code=WS_POLICY_VIOLATION, reason=error.code)(
                scope, receive, send
            )
            return
        response = JSONResponse(error.as_body(), status_code=HTTP_400_BAD_REQUEST)
        await response(scope, receive, send)


def get_tenant_context(connection: HTTPConnection) -> TenantContext | None:
    """Return the request's tenant context, or None if none was set."""
    context = connection.scope.get("state", {}).get(STATE_KEY)
    if isinstance(context, TenantContext):
        return context
    return None


def get_tenant_id(connection: HTTPConnection) -> str | None:
    """Return the request's tenant identifier, or None if none was set.

    Never raises and never substitutes a default.
    """
    context = get_tenant_context(connection)
    return context.tenant_id if context is not None else None


def must_get_tenant_id(connection: HTTPConnection) -> str:
    """Return the request's tenant identifier.

    Usable directly as a FastAPI dependency. Only call this behind
    ``TenantContextMiddleware``.

    Raises:
        TenantContextMissingError: If no tenant context was set. With
            ``register_tenant_context_handlers`` installed this fails the
            current request with 500 and leaves other requests untouched.
    """
    tenant_id = get_tenant_id(connection)
    if tenant_id is None:
        raise TenantContextMissingError(
            "Tenant context not found; ensure TenantContextMiddleware is "
            f"applied to {connection.url.path}"
        )
    return tenant_id


def current_tenant_id() -> str | None:
    """Tenant identifier of the request being served by this task, if any.

    For code that has no access to the request object.
    """
    context = _current_tenant.get()
    return context.tenant_id if context is not None else None


async def tenant_context_missing_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    """Turn a TenantContextMissingError into a 500 for this request only."""
    probe = DefaultTenantContextProbe().with_context(
        ObservationContext(
            request_id=request.headers.get("X-Request-ID"),
            path=request.url.path,
        )
    )
    probe.tenant_context_missing(error=exc)
    body = (
        exc.as_body()
        if isinstance(exc, TenantContextError)
        else TenantContextMissingError(str(exc)).as_body()
    )
    return JSONResponse(body, status_code=HTTP_500_INTERNAL_SERVER_ERROR)


def register_tenant_context_handlers(app) -> None:
    """Install the exception handler for tenant context usage defects."""
    app.add_exception_handler(TenantContextMissingError, tenant_context_missing_handler)
