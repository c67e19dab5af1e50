"""siteurls exception hierarchy.

Shared by the builder, the route index and the site store so callers
catch the same types whichever collaborator failed.
"""


class SiteUrlsError(Exception):
    """Base for all siteurls-specific errors."""


class ConfigurationError(SiteUrlsError):
    """Raised when the route configuration cannot be located or loaded.

    Typically raised while constructing a ``UrlBuilder``; callers usually
    abort the request.
    """


class OutputError(SiteUrlsError):
    """Raised when writing to the output buffer fails.

    The buffer contents are undefined afterwards. Nothing written before
    the failure is rolled back.
    """
