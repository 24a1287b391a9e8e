"""Domain value objects for the Resolution bounded context.

These are immutable data structures that represent domain concepts
within the Resolution context. They have no identity - equality is based
on their attribute values.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

X_ORIGINAL_HOST = "X-Original-Host"
X_FORWARDED_HOST = "X-Forwarded-Host"
HOST = "Host"

# Trust order inherited from the ingress topology: the ingress sets
# X-Original-Host on auth subrequests, other proxies set X-Forwarded-Host.
DEFAULT_HOST_HEADER_PRIORITY: tuple[str, ...] = (X_ORIGINAL_HOST, X_FORWARDED_HOST, HOST)

DEFAULT_KEY_PREFIX = "domain:"


@dataclass(frozen=True)
class HostHeaderPolicy:
    """Which headers name the origin host, and how lookup keys are built.

    Header selection is strict priority: the first header in
    ``header_names`` with a non-empty value wins. Fallback to a lower
    priority header happens only when a higher one is absent or empty,
    never because its lookup failed.

    Attributes:
        header_names: Header names, highest priority first.
        key_prefix: Prefix prepended to the host to form the store key.
    """

    header_names: tuple[str, ...] = DEFAULT_HOST_HEADER_PRIORITY
    key_prefix: str = DEFAULT_KEY_PREFIX

    def __post_init__(self) -> None:
        if not self.header_names:
            raise ValueError("HostHeaderPolicy requires at least one header name")

    def select_host(self, headers: Mapping[str, str]) -> tuple[str, str] | None:
        """Pick the origin host from request headers.

        Args:
            headers: Case-insensitive header mapping (e.g. Starlette Headers).

        Returns:
            (header_name, host) for the first non-empty header, or None.
        """
        for name in self.header_names:
            value = headers.get(name)
            if value:
                return name, value
        return None

    def lookup_key(self, host: str) -> str:
        """Build the store key for a host.

        The host is used verbatim: no lowercasing, no port stripping, so
        mappings are exact and case-sensitive.
        """
        return f"{self.key_prefix}{host}"


@dataclass(frozen=True)
class ResolvedTenant:
    """Outcome of a successful resolution.

    Attributes:
        host: The selected origin host.
        source_header: Header the host was taken from.
        tenant_id: Tenant identifier exactly as stored.
    """

    host: str
    source_header: str
    tenant_id: str
