"""
Custom domain exceptions for the catalog service.
Every error has a name, not chaos.
"""


class ConfigError(Exception):
    """Raised when required configuration is missing or invalid."""
    pass


class ValidationError(Exception):
    """Raised when a product draft or patch has missing or malformed fields."""
    pass


class NotFoundError(Exception):
    """Raised when no product exists for the requested id."""
    pass


class StoreIOError(Exception):
    """Raised when the file-backed store cannot read or write its document."""
    pass


class ApiClientError(Exception):
    """Raised when the catalog API returns an error or cannot be reached."""

    def __init__(self, message: str, status: int = 0):
        super().__init__(message)
        self.status = status
