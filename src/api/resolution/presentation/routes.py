"""HTTP routes for the Resolution bounded context.

The edge proxy calls the resolver as an auth subrequest and copies the
X-Tenant-ID response header into the upstream request.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import PlainTextResponse, Response

from resolution.application.services import DomainResolverService
from resolution.dependencies import get_domain_resolver_service
from resolution.domain.exceptions import (
    MissingHostError,
    StoreUnavailableError,
    TenantNotFoundError,
)
from shared_kernel.middleware.tenant_context import TENANT_ID_HEADER

router = APIRouter(tags=["resolution"])

ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


@router.api_route("/health", methods=ALL_METHODS, response_class=PlainTextResponse)
def health() -> str:
    """Liveness check. Never touches the store."""
    return "OK"


@router.api_route("/ready", methods=ALL_METHODS, response_class=PlainTextResponse)
async def ready(
    service: Annotated[DomainResolverService, Depends(get_domain_resolver_service)],
) -> Response:
    """Readiness check: pings the store on every call."""
    if not await service.is_ready():
        return PlainTextResponse(
            "Service not ready",
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        )
    return PlainTextResponse("Ready")


@router.api_route("/", methods=ALL_METHODS, include_in_schema=False)
@router.api_route("/{path:path}", methods=ALL_METHODS, include_in_schema=False)
async def resolve_tenant(
    request: Request,
    service: Annotated[DomainResolverService, Depends(get_domain_resolver_service)],
) -> Response:
    """Resolve the request's origin host to a tenant.

    Every path other than the probes resolves, so the proxy may point
    its auth subrequest at any location.

    Returns:
        200 with an empty body and X-Tenant-ID set; 400 when no host
        header is present; 401 for unknown domains; 500 on store errors.
    """
    try:
        resolved = await service.resolve(request.headers)
    except MissingHostError:
        return PlainTextResponse(
            "No host header found",
            status_code=status.HTTP_400_BAD_REQUEST,
        )
    except TenantNotFoundError:
        return PlainTextResponse(
            "Tenant not found for domain",
            status_code=status.HTTP_401_UNAUTHORIZED,
        )
    except StoreUnavailableError:
        return PlainTextResponse(
            "Internal server error",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    return Response(
        status_code=status.HTTP_200_OK,
        headers={TENANT_ID_HEADER: resolved.tenant_id},
    )
