class URLShortenerError(Exception):
    """Base exception for all application-specific errors."""

    error_code = "app:url_shortener_error"


class ConfigurationError(URLShortenerError):
    """Raised when the service is started with missing or invalid settings."""

    error_code = "config:configuration_error"


class StoreError(URLShortenerError):
    """Base class for errors raised by the alias store."""

    error_code = "store:store_error"


class AliasNotFoundError(StoreError):
    """Raised when no mapping exists for the requested alias."""

    error_code = "store:alias_not_found"

    def __init__(self, alias: str):
        super().__init__(f"alias '{alias}' not found")
        self.alias = alias


class AliasConflictError(StoreError):
    """Raised when saving a mapping under an alias that is already taken."""

    error_code = "store:alias_conflict"

    def __init__(self, alias: str):
        super().__init__(f"alias '{alias}' already exists")
        self.alias = alias


class InvalidMappingError(StoreError):
    """Raised when a mapping is rejected before it reaches the database."""

    error_code = "store:invalid_mapping"


class StoreUnavailableError(StoreError):
    """Raised when the backing database cannot be opened or operated.

    Examples include permission errors, corrupt files and lost connections.
    """

    error_code = "store:store_unavailable"
