"""Domain exceptions for tenant resolution.

Every resolution error is terminal for the current request; none of them
is retried and none falls back to another tenant.
"""


class ResolutionError(Exception):
    """Base exception for tenant resolution failures."""

    pass


class MissingHostError(ResolutionError):
    """Raised when none of the host headers carries a value."""

    def __init__(self, header_names: tuple[str, ...]):
        super().__init__(f"No host found in headers: {', '.join(header_names)}")
        self.header_names = header_names


class TenantNotFoundError(ResolutionError):
    """Raised when the store holds no mapping for the selected host.

    Unknown domains must never be routed to any tenant, so this is kept
    distinct from store failures.
    """

    def __init__(self, host: str):
        super().__init__(f"No tenant mapping for domain: {host}")
        self.host = host


class StoreUnavailableError(ResolutionError):
    """Raised when the mapping store is unreachable or returns an error."""

    def __init__(self, message: str, host: str | None = None):
        super().__init__(message)
        self.host = host
