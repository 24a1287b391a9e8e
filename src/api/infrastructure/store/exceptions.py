"""Store-specific exceptions."""


class DomainStoreError(Exception):
    """Raised when the key-value store cannot serve a request."""

    pass


class StoreClosedError(DomainStoreError):
    """Raised when a store call is attempted after the client was closed."""

    pass
