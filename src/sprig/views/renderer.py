"""Page rendering with optional layouts.

A view is a kida template ``{views_dir}/{name}.html``. Unless the layout
is ``"none"``, the rendered view is passed to ``{layouts_dir}/{layout}.html``
as ``content`` (already marked safe) together with the view's context::

    {# views/layouts/main.html #}
    <html><head><title>{{ title }}</title></head>
    <body>{{ content }}</body></html>

A layout that does not exist is not an error; the view is returned
unwrapped.
"""

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from kida import Environment, FileSystemLoader
from kida.template import Markup

from sprig.errors import ViewNotFound

logger = logging.getLogger("sprig.views")

NO_LAYOUT = "none"


class ViewRenderer:
    """Render named views and wrap them in layouts."""

    __slots__ = ("_default_layout", "_extension", "_layouts", "_layouts_dir", "_views", "_views_dir")

    def __init__(
        self,
        views_dir: str | Path,
        layouts_dir: str | Path | None = None,
        *,
        default_layout: str = "main",
        extension: str = ".html",
        autoescape: bool = True,
    ) -> None:
        self._views_dir = Path(views_dir)
        self._layouts_dir = Path(layouts_dir) if layouts_dir is not None else self._views_dir / "layouts"
        self._default_layout = default_layout
        self._extension = extension
        self._views = Environment(loader=FileSystemLoader(str(self._views_dir)), autoescape=autoescape)
        self._layouts = Environment(loader=FileSystemLoader(str(self._layouts_dir)), autoescape=autoescape)

    @property
    def views_dir(self) -> Path:
        return self._views_dir

    @property
    def layouts_dir(self) -> Path:
        return self._layouts_dir

    @property
    def default_layout(self) -> str:
        return self._default_layout

    def template_name(self, name: str) -> str:
        """File name for view or layout *name* (``"users/show"`` -> ``"users/show.html"``)."""
        return f"{name.strip('/')}{self._extension}"

    def has_view(self, name: str) -> bool:
        return (self._views_dir / self.template_name(name)).is_file()

    def has_layout(self, name: str) -> bool:
        return (self._layouts_dir / self.template_name(name)).is_file()

    def render_view(self, name: str, context: Mapping[str, Any] | None = None) -> str:
        """Render a view without any layout.

        Raises ``ViewNotFound`` when the file does not exist.
        """
        if not self.has_view(name):
            msg = f"View {name!r} not found in {self._views_dir}"
            raise ViewNotFound(msg)
        template = self._views.get_template(self.template_name(name))
        return template.render(dict(context or {}))

    def render(
        self,
        name: str,
        context: Mapping[str, Any] | None = None,
        layout: str | None = None,
    ) -> str:
        """Render view *name* inside *layout* (the default layout when ``None``)."""
        ctx = dict(context or {})
        content = self.render_view(name, ctx)

        layout = layout or self._default_layout
        if layout == NO_LAYOUT:
            return content
        if not self.has_layout(layout):
            logger.debug("layout %r not found, rendering %r unwrapped", layout, name)
            return content

        template = self._layouts.get_template(self.template_name(layout))
        return template.render({**ctx, "content": Markup(content)})
