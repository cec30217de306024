"""CLI entrypoint for the skillint corpus linter."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from skillint import __version__
from skillint.cli.handlers import handle_check, handle_plan, handle_rules, handle_validate_config
from skillint.constants.branding import CLI_DESCRIPTION
from skillint.constants.reporting import DEFAULT_OUTPUT_FORMAT, VALID_GROUP_BY
from skillint.constants.rules import VALID_CATEGORIES

SEVERITY_CHOICES: tuple[str, ...] = ("low", "medium", "high")


def build_parser() -> argparse.ArgumentParser:
    """Build top-level CLI parser."""
    parser = argparse.ArgumentParser(
        prog="skillint",
        description=CLI_DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    check = subparsers.add_parser("check", help="Lint skills, design docs, and pgpm plans under a root")
    check.add_argument("-r", "--root", type=Path, required=True, help="Corpus root path")
    check.add_argument("-c", "--config", type=Path, help="Explicit config file")
    check.add_argument(
        "-o",
        "--output-dir",
        type=Path,
        default=None,
        help="Report directory (no files written if omitted)",
    )
    check.add_argument(
        "--output-format",
        default=DEFAULT_OUTPUT_FORMAT,
        help="Comma-separated output formats: json, csv, sarif (default: json)",
    )
    check.add_argument(
        "--only",
        action="append",
        default=[],
        metavar="RULE",
        help="Run only this rule (repeat for multiple rules)",
    )
    check.add_argument(
        "--disable",
        action="append",
        default=[],
        metavar="RULE",
        help="Skip this rule (repeat for multiple rules)",
    )
    check.add_argument("--min-severity", choices=SEVERITY_CHOICES, help="Hide findings below this severity")
    check.add_argument("--category", choices=VALID_CATEGORIES, help="Show only findings of this category")
    check.add_argument("--group-by", choices=VALID_GROUP_BY, help="Group stdout findings by subject or rule")
    check.add_argument(
        "--fail-on",
        choices=SEVERITY_CHOICES,
        help="Exit 1 when any finding is at or above this severity",
    )
    check.add_argument("--no-stdout", action="store_true", help="Silence stdout output")
    check.add_argument("--no-color", action="store_true", help="Disable colored output")
    check.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    validate = subparsers.add_parser("validate-config", help="Validate configuration without linting")
    validate.add_argument("-r", "--root", type=Path, required=True, help="Corpus root path")
    validate.add_argument("-c", "--config", type=Path, help="Explicit config file")

    plan = subparsers.add_parser("plan", help="Parse a pgpm plan file and print its changes")
    plan.add_argument("path", type=Path, help="Path to a pgpm.plan file")
    plan.add_argument("--json", action="store_true", help="Print the parsed plan as JSON")

    subparsers.add_parser("rules", help="List bundled rules")

    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args(argv)

    level = logging.DEBUG if getattr(args, "verbose", False) else logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s %(message)s")

    if args.command == "check":
        return handle_check(args)
    if args.command == "validate-config":
        return handle_validate_config(args)
    if args.command == "plan":
        return handle_plan(args)
    if args.command == "rules":
        return handle_rules(args)

    parser.error(f"Unsupported command: {args.command}")
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
