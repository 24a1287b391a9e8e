"""Observation context for domain-oriented observability.

Observation contexts collect and manage contextual metadata for instrumentation,
following the Domain Oriented Observability pattern.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ObservationContext:
    """Immutable context containing metadata for observability.

    Captures request-scoped metadata that should be included with all
    instrumentation events so that resolver and middleware events can be
    correlated with the proxy's access logs. Hosts and tenant ids are
    passed to each probe event directly.

    Attributes:
        request_id: Identifier of the current request (X-Request-ID), if any.
        path: Request path, if applicable.

    Example:
        context = ObservationContext(request_id="req-123", path="/")
        probe = DefaultDomainResolverProbe().with_context(context)
    """

    request_id: str | None = None
    path: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Convert context to a dictionary for logging.

        Only includes non-None values to keep logs clean.
        """
        result: dict[str, Any] = {}
        if self.request_id is not None:
            result["request_id"] = self.request_id
        if self.path is not None:
            result["path"] = self.path
        return result
