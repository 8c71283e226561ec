"""Sprig CLI: route listing and key generation.

Entry point registered as ``sprig`` in ``pyproject.toml``::

    [project.scripts]
    sprig = "sprig.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``sprig`` command."""
    parser = argparse.ArgumentParser(
        prog="sprig",
        description="Sprig: routing, validation, and CRUD for small web apps.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- sprig routes -----------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List registered routes")
    routes_parser.add_argument(
        "app",
        help="Import string (e.g. myapp:app)",
    )

    # -- sprig keygen -----------------------------------------------------
    subparsers.add_parser("keygen", help="Print a random AES-256 key and IV as hex")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "routes":
        from sprig.cli._routes import run_routes

        run_routes(args)
    elif args.command == "keygen":
        from sprig.cli._keygen import run_keygen

        run_keygen(args)
