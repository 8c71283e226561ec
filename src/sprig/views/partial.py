"""Reusable template fragments.

A partial is a template in the partials directory rendered on its own,
typically to build part of a response or to feed an HTML fragment to a
client-side swap::

    partials = PartialRenderer("views/partials")
    html = partials.render("user_card", user=user)
"""

from pathlib import Path
from typing import Any

from kida import Environment, FileSystemLoader

from sprig.errors import ConfigurationError, ViewNotFound


class PartialRenderer:
    __slots__ = ("_directory", "_env", "_extension")

    def __init__(
        self,
        directory: str | Path,
        *,
        extension: str = ".html",
        autoescape: bool = True,
    ) -> None:
        self._directory = Path(directory)
        if not self._directory.is_dir():
            msg = f"Partials directory {str(self._directory)!r} does not exist"
            raise ConfigurationError(msg)
        self._extension = extension
        self._env = Environment(loader=FileSystemLoader(str(self._directory)), autoescape=autoescape)

    @property
    def directory(self) -> Path:
        return self._directory

    def exists(self, name: str) -> bool:
        return (self._directory / f"{name}{self._extension}").is_file()

    def render(self, name: str, **context: Any) -> str:
        """Render partial *name* with *context*. Raises ``ViewNotFound`` if missing."""
        if not self.exists(name):
            msg = f"Partial {name!r} not found in {self._directory}"
            raise ViewNotFound(msg)
        return self._env.get_template(f"{name}{self._extension}").render(context)
