"""Site store error hierarchy."""

from siteurls.errors import SiteUrlsError


class DataAccessError(SiteUrlsError):
    """Base for all site store errors."""


class StoreConnectionError(DataAccessError):
    """Raised when the site store cannot be opened."""


class QueryError(DataAccessError):
    """Raised when a site lookup fails."""
