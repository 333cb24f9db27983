"""CLI entry point for minikanban."""

import argparse
from pathlib import Path

from . import __version__
from .config import Settings
from .logging import setup_logging


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="minikanban",
        description="Terminal task board with query filters, audit log and integrity checks",
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=None,
        help="Directory holding the board state and minikanban.yml (default: ~/.minikanban)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase logging verbosity (-v for INFO, -vv for DEBUG)",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Path to write logs to file",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    actions = parser.add_mutually_exclusive_group()
    actions.add_argument(
        "--generate",
        action="store_true",
        help="Generate default minikanban.yml in the data directory and exit",
    )
    actions.add_argument(
        "--export",
        nargs="?",
        const=Path("."),
        type=Path,
        default=None,
        metavar="DIR",
        help="Export the board as kanban-export-YYYY-MM-DD.json into DIR (default: .)",
    )
    actions.add_argument(
        "--import",
        dest="import_file",
        type=Path,
        default=None,
        metavar="FILE",
        help="Replace the board with a validated export file",
    )
    actions.add_argument(
        "--check",
        action="store_true",
        help="Report integrity issues and exit (exit code 1 if any)",
    )
    actions.add_argument(
        "--fix",
        action="store_true",
        help="Apply every available integrity fix and exit",
    )
    actions.add_argument(
        "--audit-report",
        action="store_true",
        help="Print the audit log summary and exit",
    )
    actions.add_argument(
        "--query",
        default=None,
        metavar="EXPR",
        help='List tasks matching a query, e.g. "tag:ui p:high due:week"',
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    args = parse_args(argv)

    settings_kwargs: dict = {}
    if args.data_dir:
        settings_kwargs["data_dir"] = args.data_dir
    if args.verbose:
        settings_kwargs["verbose"] = args.verbose
    if args.log_file:
        settings_kwargs["log_file"] = args.log_file

    settings = Settings(**settings_kwargs)

    setup_logging(settings.verbose, settings.log_file)

    if args.generate:
        from .cli.generate import run_generate

        raise SystemExit(run_generate(settings.data_dir))

    if args.export is not None:
        from .cli.commands import run_export

        raise SystemExit(run_export(settings, args.export))

    if args.import_file is not None:
        from .cli.commands import run_import

        raise SystemExit(run_import(settings, args.import_file))

    if args.check:
        from .cli.commands import run_check

        raise SystemExit(run_check(settings))

    if args.fix:
        from .cli.commands import run_fix

        raise SystemExit(run_fix(settings))

    if args.audit_report:
        from .cli.commands import run_audit_report

        raise SystemExit(run_audit_report(settings))

    if args.query is not None:
        from .cli.commands import run_query

        raise SystemExit(run_query(settings, args.query))

    # Import here to avoid circular imports
    from .app import run

    run(settings)


if __name__ == "__main__":
    main()
