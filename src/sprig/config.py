"""Application configuration.

AppConfig is a frozen dataclass: immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(views_dir="app/views", database_url="sqlite:///app.db")
    """

    # Expose exception messages in 500 responses
    debug: bool = False

    # JSON API: regex stripped once from the start of the request path
    api_prefix: str = r"^/api/"

    # Views
    views_dir: str | Path = "views"
    layouts_dir: str | Path = "views/layouts"
    partials_dir: str | Path = "views/partials"
    view_extension: str = ".html"
    default_layout: str = "main"
    not_found_view: str = "404"
    autoescape: bool = True

    # Data
    database_url: str | None = None
    echo_sql: bool = False

