"""Config file validation for lint runs."""

from __future__ import annotations

import difflib
from pathlib import Path
from typing import Any

import yaml

from skillint.constants.config import (
    CONFIG_FILENAME,
    RULE_OVERRIDE_ALLOWED_KEYS,
    RULE_OVERRIDE_ALLOWED_SEVERITIES,
)
from skillint.constants.scoring import SEVERITY_RANK
from skillint.constants.validation import (
    ALLOWED_CONFIG_KEYS,
    ALLOWED_DOCS_KEYS,
    ALLOWED_RULES_KEYS,
    ALLOWED_SKILLS_KEYS,
    CFG001,
    CFG002,
    CFG003,
    CFG004,
    CFG005,
    CFG006,
    CFG007,
    CFG008,
    CFG009,
    DOCS_LIST_KEYS,
    LIST_OF_STRINGS_KEYS,
    SKILLS_INT_KEYS,
    SKILLS_LIST_KEYS,
)
from skillint.exceptions.validation import ValidationError


def validate_config_file(
    root: Path,
    config_path: Path | None = None,
    *,
    config_explicit: bool = False,
) -> list[ValidationError]:
    """Validate a skillint.yaml file and return all validation errors.

    This is the collect-all entry point used by both ``skillint validate-config``
    and ``skillint check`` preflight.  It never raises; all problems are returned
    as :class:`ValidationError` instances.
    """
    errors: list[ValidationError] = []
    root = root.resolve()
    path = config_path.resolve() if config_path else (root / CONFIG_FILENAME)
    path_str = str(path)

    if not path.exists():
        if config_explicit:
            errors.append(
                ValidationError(
                    code=CFG001,
                    path=path_str,
                    field="",
                    message=f"config file not found: {path}",
                )
            )
        return errors

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        errors.append(
            ValidationError(
                code=CFG002,
                path=path_str,
                field="",
                message=f"invalid YAML: {exc}",
            )
        )
        return errors

    if raw is None:
        return errors

    if not isinstance(raw, dict):
        errors.append(
            ValidationError(
                code=CFG003,
                path=path_str,
                field="",
                message=f"config must be a YAML mapping, got {type(raw).__name__}",
            )
        )
        return errors

    for key in sorted(map(str, raw.keys())):
        if key not in ALLOWED_CONFIG_KEYS:
            errors.append(
                ValidationError(
                    code=CFG004,
                    path=path_str,
                    field=key,
                    message=f"unknown key `{key}`",
                    hint=suggest_key(key, ALLOWED_CONFIG_KEYS),
                )
            )

    if "max_file_mb" in raw:
        _check_positive_int(raw["max_file_mb"], "max_file_mb", path_str, errors)

    for key in LIST_OF_STRINGS_KEYS:
        if key in raw:
            _check_string_list(raw[key], key, path_str, errors)

    _validate_rules_block(raw, path_str, errors)
    _validate_skills_block(raw, path_str, errors)
    _validate_docs_block(raw, path_str, errors)
    _validate_rule_overrides_block(raw, path_str, errors)

    return errors


def suggest_key(unknown: str, allowed: frozenset[str]) -> str:
    """Return a 'did you mean ...' hint for a close key match, or empty string."""
    matches = difflib.get_close_matches(unknown, sorted(allowed), n=1, cutoff=0.6)
    if matches:
        return f"did you mean `{matches[0]}`?"
    return ""


def _nested_block(
    raw: dict[str, Any],
    block: str,
    allowed: frozenset[str],
    path_str: str,
    errors: list[ValidationError],
) -> dict[str, Any] | None:
    """Return a nested mapping after reporting shape and unknown-key errors."""
    if block not in raw or raw[block] is None:
        return None
    value = raw[block]
    if not isinstance(value, dict):
        errors.append(
            ValidationError(
                code=CFG009,
                path=path_str,
                field=block,
                message=f"`{block}` must be a mapping",
            )
        )
        return None

    for key in sorted(map(str, value.keys())):
        if key not in allowed:
            errors.append(
                ValidationError(
                    code=CFG004,
                    path=path_str,
                    field=f"{block}.{key}",
                    message=f"unknown key `{key}` in `{block}`",
                    hint=suggest_key(key, allowed),
                )
            )
    return value


def _validate_rules_block(raw: dict[str, Any], path_str: str, errors: list[ValidationError]) -> None:
    """Validate the ``rules`` enablement mapping."""
    rules = _nested_block(raw, "rules", ALLOWED_RULES_KEYS, path_str, errors)
    if rules is None:
        return

    for sub_key in ("enabled", "disabled"):
        if sub_key in rules:
            _check_string_list(rules[sub_key], f"rules.{sub_key}", path_str, errors)

    enabled = rules.get("enabled") or []
    disabled = rules.get("disabled") or []
    if isinstance(enabled, list) and isinstance(disabled, list):
        overlap = sorted({str(item) for item in enabled} & {str(item) for item in disabled})
        if overlap:
            errors.append(
                ValidationError(
                    code=CFG008,
                    path=path_str,
                    field="rules",
                    message=f"rule(s) in both enabled and disabled: {', '.join(overlap)}",
                    hint="remove duplicates from one list",
                )
            )


def _validate_skills_block(raw: dict[str, Any], path_str: str, errors: list[ValidationError]) -> None:
    """Validate the ``skills`` limits mapping."""
    skills = _nested_block(raw, "skills", ALLOWED_SKILLS_KEYS, path_str, errors)
    if skills is None:
        return

    for key in SKILLS_INT_KEYS:
        if key in skills:
            _check_positive_int(skills[key], f"skills.{key}", path_str, errors)
    for key in SKILLS_LIST_KEYS:
        if key in skills:
            _check_string_list(skills[key], f"skills.{key}", path_str, errors)
    if "require_archive" in skills and not isinstance(skills["require_archive"], bool):
        errors.append(
            ValidationError(
                code=CFG005,
                path=path_str,
                field="skills.require_archive",
                message="invalid type for `skills.require_archive`",
                hint="expected a boolean",
            )
        )


def _validate_docs_block(raw: dict[str, Any], path_str: str, errors: list[ValidationError]) -> None:
    """Validate the ``docs`` template vocabulary mapping."""
    docs = _nested_block(raw, "docs", ALLOWED_DOCS_KEYS, path_str, errors)
    if docs is None:
        return

    for key in DOCS_LIST_KEYS:
        if key in docs:
            _check_string_list(docs[key], f"docs.{key}", path_str, errors)

    statuses = docs.get("decision_statuses")
    if isinstance(statuses, list) and not statuses:
        errors.append(
            ValidationError(
                code=CFG007,
                path=path_str,
                field="docs.decision_statuses",
                message="`docs.decision_statuses` must not be empty",
            )
        )


def _validate_rule_overrides_block(
    raw: dict[str, Any],
    path_str: str,
    errors: list[ValidationError],
) -> None:
    """Validate the optional ``rule_overrides`` mapping."""
    if "rule_overrides" not in raw:
        return

    overrides = raw["rule_overrides"]
    if overrides is None:
        return
    if not isinstance(overrides, dict):
        errors.append(
            ValidationError(
                code=CFG009,
                path=path_str,
                field="rule_overrides",
                message="`rule_overrides` must be a mapping",
            )
        )
        return

    for rule_id, override in overrides.items():
        if not isinstance(rule_id, str) or not rule_id.strip():
            errors.append(
                ValidationError(
                    code=CFG005,
                    path=path_str,
                    field="rule_overrides",
                    message="rule_overrides keys must be non-empty strings",
                )
            )
            continue
        if not isinstance(override, dict):
            errors.append(
                ValidationError(
                    code=CFG009,
                    path=path_str,
                    field=f"rule_overrides.{rule_id}",
                    message=f"`rule_overrides.{rule_id}` must be a mapping",
                )
            )
            continue

        for key in sorted(map(str, override)):
            if key not in RULE_OVERRIDE_ALLOWED_KEYS:
                errors.append(
                    ValidationError(
                        code=CFG004,
                        path=path_str,
                        field=f"rule_overrides.{rule_id}.{key}",
                        message=f"unknown key `{key}` in `rule_overrides.{rule_id}`",
                        hint=suggest_key(key, RULE_OVERRIDE_ALLOWED_KEYS),
                    )
                )

        max_severity = _validate_rule_override_severity(
            override=override,
            rule_id=rule_id,
            key="max_severity",
            path_str=path_str,
            errors=errors,
        )
        min_severity = _validate_rule_override_severity(
            override=override,
            rule_id=rule_id,
            key="min_severity",
            path_str=path_str,
            errors=errors,
        )

        if (
            max_severity is not None
            and min_severity is not None
            and SEVERITY_RANK[min_severity] > SEVERITY_RANK[max_severity]
        ):
            errors.append(
                ValidationError(
                    code=CFG008,
                    path=path_str,
                    field=f"rule_overrides.{rule_id}",
                    message=(
                        "contradictory rule override: "
                        f"min_severity {min_severity!r} is higher than max_severity {max_severity!r}"
                    ),
                    hint="set min_severity <= max_severity",
                )
            )


def _validate_rule_override_severity(
    *,
    override: dict[str, Any],
    rule_id: str,
    key: str,
    path_str: str,
    errors: list[ValidationError],
) -> str | None:
    """Validate max/min severity values in rule overrides."""
    if key not in override:
        return None
    severity = override[key]
    if not isinstance(severity, str) or severity not in RULE_OVERRIDE_ALLOWED_SEVERITIES:
        errors.append(
            ValidationError(
                code=CFG006,
                path=path_str,
                field=f"rule_overrides.{rule_id}.{key}",
                message=f"invalid value for `{key}`",
                hint=f"expected one of: {', '.join(sorted(RULE_OVERRIDE_ALLOWED_SEVERITIES))}; got: {severity!r}",
            )
        )
        return None
    return severity


def _check_string_list(value: Any, field: str, path_str: str, errors: list[ValidationError]) -> None:
    if value is not None and (not isinstance(value, (list, tuple)) or not all(isinstance(i, str) for i in value)):
        errors.append(
            ValidationError(
                code=CFG005,
                path=path_str,
                field=field,
                message=f"invalid type for `{field}`",
                hint="expected a list of strings",
            )
        )


def _check_positive_int(value: Any, field: str, path_str: str, errors: list[ValidationError]) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        errors.append(
            ValidationError(
                code=CFG005,
                path=path_str,
                field=field,
                message=f"invalid type for `{field}`",
                hint="expected a positive integer",
            )
        )
    elif value <= 0:
        errors.append(
            ValidationError(
                code=CFG007,
                path=path_str,
                field=field,
                message=f"`{field}` must be a positive integer, got {value}",
            )
        )
