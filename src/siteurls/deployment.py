"""Deployment descriptors.

A deployment is one web application mounted under a path, optionally
tied to a site record. Background jobs build URLs from a deployment
alone; live requests carry a reference to theirs.
"""

from dataclasses import dataclass

from siteurls.routing.index import RouteSource


@dataclass(frozen=True, slots=True)
class Deployment:
    """A mounted web application.

    ``mount_path`` is where the application lives (``/shop``).
    ``control_path`` is the prefix every route is served under; when left
    empty it is ``mount_path + "/control"``::

        Deployment("shop", mount_path="/shop", site_id="shop", routes=source)
    """

    name: str
    mount_path: str = ""
    control_path: str = ""
    site_id: str | None = None
    routes: RouteSource | None = None


def find_site_id(deployment: Deployment) -> str | None:
    """Return the site id the deployment is bound to, or ``None``."""
    return deployment.site_id or None


def control_path(deployment: Deployment) -> str:
    """Return the path prefix routes of *deployment* are served under."""
    if deployment.control_path:
        return deployment.control_path
    return deployment.mount_path.rstrip("/") + "/control"
