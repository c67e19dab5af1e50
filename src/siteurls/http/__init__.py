"""Request-side inputs for URL building."""

from siteurls.http.request import ProfileMemo, RequestContext

__all__ = ["ProfileMemo", "RequestContext"]
