"""CLI subcommand handlers and threshold evaluation."""

from __future__ import annotations

import argparse
import json
import sys

from skillint.constants.reporting import VALID_OUTPUT_FORMATS
from skillint.constants.scoring import SEVERITY_RANK
from skillint.exceptions import ConfigError, PlanParseError, SkillintError
from skillint.exceptions.validation import format_errors
from skillint.model import LintResult
from skillint.parsers import parse_plan_file
from skillint.reporting.stdout import StdoutReporter
from skillint.rules import rule_catalog
from skillint.scanner import lint_workspace
from skillint.validation import preflight_validate


def evaluate_fail_threshold(result: LintResult, *, fail_on: str | None) -> int:
    """Return 1 if any finding meets the ``--fail-on`` severity, 0 otherwise."""
    if fail_on is None:
        return 0
    threshold = SEVERITY_RANK.get(fail_on, 0)
    for finding in result.findings:
        if SEVERITY_RANK.get(finding.severity, 0) >= threshold:
            return 1
    return 0


def parse_output_formats(raw: str) -> tuple[str, ...]:
    """Split ``--output-format`` into validated tokens, raising ConfigError on bad input."""
    raw_tokens = raw.split(",")
    output_formats = tuple(fmt for fmt in (token.strip().lower() for token in raw_tokens) if fmt)
    if not output_formats or len(output_formats) != len(raw_tokens):
        raise ConfigError("--output-format contains empty or malformed tokens")
    invalid_formats = set(output_formats) - VALID_OUTPUT_FORMATS
    if invalid_formats:
        raise ConfigError(
            f"unknown output format(s): {', '.join(sorted(invalid_formats))}. "
            f"Valid formats: {', '.join(sorted(VALID_OUTPUT_FORMATS))}"
        )
    return output_formats


def handle_check(args: argparse.Namespace) -> int:
    """Run ``skillint check``."""
    try:
        output_formats = parse_output_formats(args.output_format)
    except ConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2

    validation_errors = preflight_validate(root=args.root, config_path=args.config)
    if validation_errors:
        print(format_errors(validation_errors), file=sys.stderr)
        return 2

    try:
        result = lint_workspace(
            root=args.root,
            out=args.output_dir,
            config_path=args.config,
            output_formats=output_formats,
            only_rules=tuple(args.only),
            disable_rules=tuple(args.disable),
            min_severity=args.min_severity,
            category=args.category,
        )
    except ConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2
    except SkillintError as exc:
        print(f"Linter error: {exc}", file=sys.stderr)
        return 1

    exit_code = evaluate_fail_threshold(result, fail_on=args.fail_on)

    if not args.no_stdout:
        use_color = not args.no_color and sys.stdout.isatty()
        reporter = StdoutReporter(
            result,
            color=use_color,
            group_by=args.group_by,
            min_severity=args.min_severity,
            category=args.category,
            fail_on=args.fail_on,
            exit_code=exit_code,
        )
        print(reporter.render())

    return exit_code


def handle_validate_config(args: argparse.Namespace) -> int:
    """Run config validation and report results."""
    errors = preflight_validate(root=args.root, config_path=args.config)
    if errors:
        print(format_errors(errors), file=sys.stderr)
        return 2

    print("Configuration is valid.")
    return 0


def handle_plan(args: argparse.Namespace) -> int:
    """Parse one pgpm plan and print its changes; exit 1 on syntax errors."""
    try:
        plan = parse_plan_file(args.path)
    except PlanParseError as exc:
        print(f"Plan error: {exc}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(plan.to_dict(), indent=2))
    else:
        project = plan.project or "<no %project>"
        print(f"{project}: {len(plan.changes)} changes, {len(plan.tags)} tags")
        for change in plan.changes:
            deps = f" [{' '.join(dep.raw for dep in change.dependencies)}]" if change.dependencies else ""
            tags = "".join(f" @{tag}" for tag in change.tags)
            print(f"  {change.line:>4}  {change.name}{deps}{tags}")

    for error in plan.errors:
        print(f"{args.path}:{error.line}: {error.message}: {error.text}", file=sys.stderr)
    return 1 if plan.errors else 0


def handle_rules(args: argparse.Namespace) -> int:
    """List bundled rules with category and default score."""
    catalog = rule_catalog()
    width = max(len(str(entry["rule_id"])) for entry in catalog)
    for entry in catalog:
        print(f"{entry['rule_id']:<{width}}  {entry['category']:<8}  {entry['score']:>3}  {entry['title']}")
    return 0
