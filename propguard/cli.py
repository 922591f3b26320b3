"""CLI entrypoints for propguard commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError
from .logging import configure_logging
from .runner import CheckRunner
from .validators import PropertyLookupError, ValidationError

EXIT_INTERRUPTED = 130


def _add_verbosity_options(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    group = parser.add_mutually_exclusive_group()
    for flags, help_text in (
        (("-v", "--verbose"), "Increase log verbosity for troubleshooting."),
        (("-q", "--quiet"), "Only log warnings and errors."),
    ):
        group.add_argument(
            *flags,
            action="store_true",
            default=argparse.SUPPRESS if suppress_default else False,
            help=help_text,
        )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="propguard",
        description="Verify that text files carry the required Subversion properties.",
    )
    _add_verbosity_options(parser)
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write DEBUG logs to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    check_parser = subparsers.add_parser(
        "check",
        help="Check svn:eol-style and svn:keywords on every text file.",
    )
    _add_verbosity_options(check_parser, suppress_default=True)
    check_parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the project root (defaults to current directory).",
    )
    check_parser.add_argument(
        "--svn-binary",
        default=None,
        help="Subversion client to invoke (overrides svn.binary in .propguard.yml).",
    )
    check_parser.add_argument(
        "--report",
        type=Path,
        default=None,
        help="Write a JSON validation report to this path.",
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for propguard commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(
        verbose=bool(args.verbose),
        quiet=bool(args.quiet),
        log_file=args.log_file,
    )

    if args.command == "check":
        runner = CheckRunner()
        try:
            results = runner.run_check(
                args.path,
                svn_binary=args.svn_binary,
                report_path=args.report,
            )
        except PropertyLookupError as exc:
            if exc.interrupted:
                parser.exit(EXIT_INTERRUPTED, f"propguard check interrupted: {exc}\n")
            parser.exit(1, f"propguard check failed: {exc}\n")
        except ValidationError as exc:
            parser.exit(1, f"propguard check failed: {exc}\n")
        except (ConfigError, ValueError, FileNotFoundError, NotADirectoryError) as exc:
            parser.exit(1, f"{exc}\n")
        for result in results:
            print(f"{result.validator}: {result.message}")
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


if __name__ == "__main__":
    main(sys.argv[1:])
