"""Command-line entry point.

Usage::

    wppg new                                # generate the project
    wppg new --cex                          # export to ./wppg.yaml instead
    wppg new --cex=conf/site --cexf=yaml,json
    wppg new --output ~/projects
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from wppg import __version__
from wppg.config import Settings
from wppg.errors import UserCancelledError, WppgError
from wppg.pipeline import Pipeline
from wppg.utils import console, print_error, print_warning


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wppg",
        description="wppg -- WordPress Project Generator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  wppg new\n"
            "  wppg new --cex\n"
            "  wppg new --cex=path/to/the/file --cexf=yaml,json\n"
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command", required=True)
    new = subparsers.add_parser(
        "new",
        help="Create a new WordPress project",
        description="Ask about the project, then generate it or export its configuration.",
    )
    new.add_argument(
        "--cex",
        nargs="?",
        const=settings.export_basename,
        default=None,
        metavar="PATH",
        help=(
            "Export the configuration to PATH.<format> instead of generating "
            f"the project (default path: {settings.export_basename})"
        ),
    )
    new.add_argument(
        "--cexf",
        default=settings.export_formats,
        metavar="FORMATS",
        help=(
            "Comma-separated formats of the exported configuration: yaml, yml, "
            f"json, xml (default: {settings.export_formats})"
        ),
    )
    new.add_argument(
        "--output", "-o",
        type=Path,
        default=None,
        help=f"Directory in which the project folder is created (default: {settings.output_dir})",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for ``wppg`` and ``python -m wppg``."""
    try:
        settings = Settings.from_env()
    except ValueError as exc:
        print_error(f"Error: invalid WPPG_* environment settings: {exc}")
        return 1

    args = build_parser(settings).parse_args(argv)
    if args.output is not None:
        settings.output_dir = args.output
    export_path = args.cex
    if export_path is not None and not export_path.strip():
        export_path = settings.export_basename

    try:
        pipeline = Pipeline(settings, export_path=export_path, export_formats=args.cexf)
        result = pipeline.run()
    except UserCancelledError as exc:
        print_warning(str(exc))
        return 1
    except WppgError as exc:
        print_error(f"Error: {exc}")
        return 1
    except KeyboardInterrupt:
        console.print()
        print_warning("Aborted.")
        return 130

    if not result.success:
        print_error("Some configuration files could not be written.")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
