"""``sprig routes``: list registered routes."""

import argparse
import sys

from sprig.cli._resolve import resolve_app


def format_routes(rows: list[dict[str, str]]) -> list[str]:
    """Lay out route rows as an aligned METHOD / PATH / HANDLER table."""
    width_method = max([6, *(len(r["method"]) for r in rows)])
    width_path = max([4, *(len(r["path"]) for r in rows)])
    fmt = f"{{:<{width_method}}}  {{:<{width_path}}}  {{}}"
    lines = [fmt.format("METHOD", "PATH", "HANDLER")]
    sep_len = width_method + width_path + 4 + max((len(r["handler"]) for r in rows), default=7)
    lines.append("-" * min(sep_len, 80))
    lines.extend(fmt.format(r["method"], r["path"], r["handler"]) for r in rows)
    return lines


def run_routes(args: argparse.Namespace) -> None:
    """Print the API routes and page routes of ``args.app``."""
    try:
        app = resolve_app(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    rows = app.describe()
    if not rows:
        print("No routes registered.")
        return

    prefix = app.config.api_prefix.removeprefix("^").rstrip("/")
    for row in rows:
        if row["kind"] == "api" and prefix:
            row["path"] = prefix + row["path"]
    for line in format_routes(rows):
        print(line)
