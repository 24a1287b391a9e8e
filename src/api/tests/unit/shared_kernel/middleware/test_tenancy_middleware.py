"""Unit tests for TenantContextMiddleware and the tenant accessors."""

from __future__ import annotations

import asyncio
from typing import Annotated

import pytest
from fastapi import Depends, FastAPI, Request
from fastapi.testclient import TestClient
from httpx import ASGITransport, AsyncClient
from starlette.responses import PlainTextResponse
from starlette.types import Receive, Scope, Send
from starlette.websockets import WebSocket, WebSocketDisconnect

from shared_kernel.middleware import (
    TenantContextMiddleware,
    current_tenant_id,
    get_tenant_context,
    get_tenant_id,
    must_get_tenant_id,
    register_tenant_context_handlers,
)


class _RecordingApp:
    """Downstream ASGI app counting how often it is invoked."""

    def __init__(self) -> None:
        self.calls: list[Scope] = []

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        self.calls.append(scope)
        response = PlainTextResponse(
            "created", status_code=201, headers={"X-Downstream": "yes"}
        )
        await response(scope, receive, send)


@pytest.fixture
def downstream() -> _RecordingApp:
    """Recording downstream app."""
    return _RecordingApp()


@pytest.fixture
def client(downstream: _RecordingApp) -> TestClient:
    """Client for the middleware wrapping the recording app."""
    return TestClient(TenantContextMiddleware(downstream, exempt_paths={"/health"}))


def _create_tenant_app() -> FastAPI:
    """Tenant-scoped FastAPI app exposing what handlers observe."""
    app = FastAPI()
    app.add_middleware(TenantContextMiddleware, exempt_paths={"/health"})
    register_tenant_context_handlers(app)

    @app.get("/whoami")
    async def whoami(
        request: Request,
        tenant_id: Annotated[str, Depends(must_get_tenant_id)],
    ) -> dict:
        return {
            "tenant_id": tenant_id,
            "accessor": get_tenant_id(request),
            "contextvar": current_tenant_id(),
            "state": request.state.tenant_context.tenant_id,
        }

    @app.get("/slow")
    async def slow(request: Request, delay: float = 0.0) -> dict:
        await asyncio.sleep(delay)
        return {"accessor": get_tenant_id(request), "contextvar": current_tenant_id()}

    @app.get("/health")
    async def health(request: Request) -> dict:
        return {"tenant_id": get_tenant_id(request)}

    return app


class TestRejection:
    """Requests without a well-formed tenant never reach downstream."""

    def test_missing_header_returns_400_required(
        self, client: TestClient, downstream: _RecordingApp
    ) -> None:
        """Absent X-Tenant-ID yields TENANT_ID_REQUIRED."""
        response = client.get("/orders")

        assert response.status_code == 400
        assert response.json() == {
            "error": "Missing tenant identifier",
            "message": "X-Tenant-ID header is required for all tenant operations",
            "code": "TENANT_ID_REQUIRED",
        }
        assert len(downstream.calls) == 0

    def test_empty_header_returns_400_required(
        self, client: TestClient, downstream: _RecordingApp
    ) -> None:
        """Empty X-Tenant-ID counts as missing."""
        response = client.get("/orders", headers={"X-Tenant-ID": ""})

        assert response.status_code == 400
        assert response.json()["code"] == "TENANT_ID_REQUIRED"
        assert len(downstream.calls) == 0

    @pytest.mark.parametrize("length", [2, 129])
    def test_out_of_range_length_returns_400_invalid(
        self, client: TestClient, downstream: _RecordingApp, length: int
    ) -> None:
        """Lengths 2 and 129 yield INVALID_TENANT_ID."""
        response = client.get("/orders", headers={"X-Tenant-ID": "t" * length})

        assert response.status_code == 400
        body = response.json()
        assert body["code"] == "INVALID_TENANT_ID"
        assert body["error"] == "Invalid tenant identifier"
        assert body["message"] == "X-Tenant-ID must be between 3 and 128 characters"
        assert len(downstream.calls) == 0


class TestAcceptance:
    """Valid tenants pass through with context attached."""

    @pytest.mark.parametrize("length", [3, 128])
    def test_boundary_lengths_are_accepted(
        self, client: TestClient, downstream: _RecordingApp, length: int
    ) -> None:
        """Lengths 3 and 128 reach downstream exactly once."""
        response = client.get("/orders", headers={"X-Tenant-ID": "t" * length})

        assert response.status_code == 201
        assert len(downstream.calls) == 1
        context = get_tenant_context_from_scope(downstream.calls[0])
        assert context == "t" * length

    def test_downstream_response_is_unmodified(self, client: TestClient) -> None:
        """Status, headers and body come from downstream as-is."""
        response = client.post("/orders", headers={"X-Tenant-ID": "tenant-42"})

        assert response.status_code == 201
        assert response.headers["X-Downstream"] == "yes"
        assert response.text == "created"

    def test_exempt_path_bypasses_validation(
        self, client: TestClient, downstream: _RecordingApp
    ) -> None:
        """Exempt paths reach downstream without a tenant."""
        response = client.get("/health")

        assert response.status_code == 201
        assert len(downstream.calls) == 1

    def test_handler_observes_tenant_everywhere(self) -> None:
        """Dependency, accessor, context variable and state agree."""
        with TestClient(_create_tenant_app()) as client:
            response = client.get("/whoami", headers={"X-Tenant-ID": "tenant-42"})

        assert response.status_code == 200
        assert response.json() == {
            "tenant_id": "tenant-42",
            "accessor": "tenant-42",
            "contextvar": "tenant-42",
            "state": "tenant-42",
        }

    def test_exempt_route_sees_no_tenant(self) -> None:
        """get_tenant_id returns None rather than guessing."""
        with TestClient(_create_tenant_app()) as client:
            response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"tenant_id": None}

    def test_websocket_without_tenant_is_closed(self) -> None:
        """WebSocket handshakes without a tenant are closed with 1008."""
        app = FastAPI()
        app.add_middleware(TenantContextMiddleware)

        @app.websocket("/ws")
        async def ws(websocket: WebSocket) -> None:
            await websocket.accept()
            await websocket.send_text(must_get_tenant_id(websocket))
            await websocket.close()

        with TestClient(app) as client:
            with pytest.raises(WebSocketDisconnect) as exc_info:
                with client.websocket_connect("/ws"):
                    pass
            assert exc_info.value.code == 1008

            with client.websocket_connect(
                "/ws", headers={"X-Tenant-ID": "tenant-42"}
            ) as websocket:
                assert websocket.receive_text() == "tenant-42"


class TestMustGetTenantId:
    """must_get_tenant_id failures stay within one request."""

    def _create_unprotected_app(self) -> FastAPI:
        app = FastAPI()
        register_tenant_context_handlers(app)

        @app.get("/orders")
        async def orders(
            tenant_id: Annotated[str, Depends(must_get_tenant_id)],
        ) -> dict:
            return {"tenant_id": tenant_id}

        @app.get("/ping")
        async def ping() -> dict:
            return {"status": "ok"}

        return app

    def test_missing_context_fails_only_that_request(self) -> None:
        """The misconfigured route gets 500; other requests are unaffected."""
        with TestClient(self._create_unprotected_app()) as client:
            failed = client.get("/orders", headers={"X-Tenant-ID": "tenant-42"})
            healthy = client.get("/ping")

        assert failed.status_code == 500
        assert failed.json()["code"] == "TENANT_CONTEXT_MISSING"
        assert healthy.status_code == 200
        assert healthy.json() == {"status": "ok"}


class TestIsolation:
    """Concurrent requests never share tenant context."""

    @pytest.mark.asyncio
    async def test_concurrent_requests_keep_their_own_tenant(self) -> None:
        """Interleaved requests each observe only their own tenant."""
        app = _create_tenant_app()
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            responses = await asyncio.gather(
                *(
                    client.get(
                        "/slow",
                        params={"delay": 0.05 * (i % 3)},
                        headers={"X-Tenant-ID": f"tenant-{i:03d}"},
                    )
                    for i in range(10)
                )
            )

        for i, response in enumerate(responses):
            assert response.status_code == 200
            assert response.json() == {
                "accessor": f"tenant-{i:03d}",
                "contextvar": f"tenant-{i:03d}",
            }

    @pytest.mark.asyncio
    async def test_context_variable_reset_after_request(self) -> None:
        """The context variable does not outlive the request."""
        app = _create_tenant_app()
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            await client.get("/slow", headers={"X-Tenant-ID": "tenant-42"})

        assert current_tenant_id() is None


def get_tenant_context_from_scope(scope: Scope) -> str | None:
    """Read the tenant identifier the middleware stored in a scope."""
    from starlette.requests import HTTPConnection

    context = get_tenant_context(HTTPConnection(scope))
    return context.tenant_id if context is not None else None
