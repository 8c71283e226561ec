"""Server-rendered views: layouts, page routes, and partials."""

from sprig.errors import ViewNotFound
from sprig.views.partial import PartialRenderer
from sprig.views.renderer import NO_LAYOUT, ViewRenderer
from sprig.views.router import ViewInvoker, ViewRoutes, ViewTarget

__all__ = [
    "NO_LAYOUT",
    "PartialRenderer",
    "ViewInvoker",
    "ViewNotFound",
    "ViewRenderer",
    "ViewRoutes",
    "ViewTarget",
]
