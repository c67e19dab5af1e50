"""RouteSecurity frozen dataclass and route identifier extraction."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RouteSecurity:
    """Security requirement of one route.

    ``uri`` is the route identifier (first path segment, no leading slash).
    """

    uri: str
    https: bool = False


def route_identifier(url: str) -> str:
    """Return the route identifier of *url*.

    The first ``/``-separated segment, truncated at the first ``?``::

        "checkout/confirm" -> "checkout"
        "status?x=1"       -> "status"
        "/orders"          -> ""

    Percent-encoded slashes are not decoded.
    """
    head = url.split("/", 1)[0]
    return head.split("?", 1)[0]
