"""Config loading and normalization for lint runs."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from skillint.config.model import SkillintConfig
from skillint.constants.config import (
    CONFIG_FILENAME,
    DEFAULT_DOC_GLOBS,
    DEFAULT_DOC_IGNORE_NAMES,
    DEFAULT_EXCLUDE_DIRS,
    DEFAULT_MAX_FILE_MB,
    DEFAULT_PLAN_GLOBS,
    DEFAULT_SKILL_GLOBS,
    RULE_OVERRIDE_ALLOWED_KEYS,
    RULE_OVERRIDE_ALLOWED_SEVERITIES,
)
from skillint.constants.scoring import SEVERITY_RANK
from skillint.exceptions import ConfigError
from skillint.types.config import DocsConfig, RuleOverrideConfig, RulesConfig, SkillsConfig


def load_config(root: Path, config_path: Path | None = None) -> SkillintConfig:
    """Load and validate linter config from ``skillint.yaml`` or an explicit path."""
    root = root.resolve()
    path = config_path.resolve() if config_path else (root / CONFIG_FILENAME)
    if not path.exists():
        if config_path is not None:
            raise ConfigError(f"Config file not found: {path}")
        return SkillintConfig()

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML config file at {path}: {exc}") from exc

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Config file at {path} must be a YAML mapping")

    rules_raw = _ensure_mapping(raw.get("rules"), "rules")
    skills_raw = _ensure_mapping(raw.get("skills"), "skills")
    docs_raw = _ensure_mapping(raw.get("docs"), "docs")

    max_file_mb = raw.get("max_file_mb", DEFAULT_MAX_FILE_MB)
    if isinstance(max_file_mb, bool) or not isinstance(max_file_mb, int) or max_file_mb <= 0:
        raise ConfigError("max_file_mb must be a positive integer")

    return SkillintConfig(
        skill_globs=_string_tuple(raw.get("skill_globs", list(DEFAULT_SKILL_GLOBS)), "skill_globs"),
        doc_globs=_string_tuple(raw.get("doc_globs", list(DEFAULT_DOC_GLOBS)), "doc_globs"),
        plan_globs=_string_tuple(raw.get("plan_globs", list(DEFAULT_PLAN_GLOBS)), "plan_globs"),
        exclude_dirs=_string_tuple(raw.get("exclude_dirs", list(DEFAULT_EXCLUDE_DIRS)), "exclude_dirs"),
        doc_ignore_names=_string_tuple(
            raw.get("doc_ignore_names", list(DEFAULT_DOC_IGNORE_NAMES)),
            "doc_ignore_names",
        ),
        max_file_mb=max_file_mb,
        rules=RulesConfig(
            enabled=tuple(rule_id.upper() for rule_id in _ensure_string_list(rules_raw.get("enabled"), "rules.enabled")),
            disabled=tuple(
                rule_id.upper() for rule_id in _ensure_string_list(rules_raw.get("disabled"), "rules.disabled")
            ),
        ),
        rule_overrides=_build_rule_overrides(raw.get("rule_overrides")),
        skills=_build_skills_config(skills_raw),
        docs=_build_docs_config(docs_raw),
    )


def _ensure_mapping(value: Any, key_name: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"{key_name} must be a mapping")
    return value


def _ensure_string_list(value: Any, key_name: str) -> list[str]:
    """Coerce a value to a list of strings, raising ConfigError on type mismatch."""
    if value is None:
        return []
    if not isinstance(value, (list, tuple)) or not all(isinstance(item, str) for item in value):
        raise ConfigError(f"{key_name} must be a list of strings")
    return list(value)


def _string_tuple(value: Any, key_name: str) -> tuple[str, ...]:
    return tuple(item.strip() for item in _ensure_string_list(value, key_name) if item.strip())


def _positive_int(value: Any, key_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ConfigError(f"{key_name} must be a positive integer")
    return value


def _build_skills_config(raw: dict[str, Any]) -> SkillsConfig:
    defaults = SkillsConfig()
    require_archive = raw.get("require_archive", defaults.require_archive)
    if not isinstance(require_archive, bool):
        raise ConfigError("skills.require_archive must be a boolean")
    return SkillsConfig(
        max_lines=_positive_int(raw.get("max_lines", defaults.max_lines), "skills.max_lines"),
        name_max_length=_positive_int(raw.get("name_max_length", defaults.name_max_length), "skills.name_max_length"),
        description_max_length=_positive_int(
            raw.get("description_max_length", defaults.description_max_length),
            "skills.description_max_length",
        ),
        allowed_frontmatter_keys=_string_tuple(
            raw.get("allowed_frontmatter_keys", list(defaults.allowed_frontmatter_keys)),
            "skills.allowed_frontmatter_keys",
        ),
        trigger_phrases=tuple(
            phrase.lower()
            for phrase in _string_tuple(
                raw.get("trigger_phrases", list(defaults.trigger_phrases)),
                "skills.trigger_phrases",
            )
        ),
        require_archive=require_archive,
    )


def _build_docs_config(raw: dict[str, Any]) -> DocsConfig:
    defaults = DocsConfig()
    return DocsConfig(
        decision_statuses=_string_tuple(
            raw.get("decision_statuses", list(defaults.decision_statuses)), "docs.decision_statuses"
        ),
        implementation_statuses=_string_tuple(
            raw.get("implementation_statuses", list(defaults.implementation_statuses)),
            "docs.implementation_statuses",
        ),
        required_fields=_string_tuple(raw.get("required_fields", list(defaults.required_fields)), "docs.required_fields"),
        date_fields=_string_tuple(raw.get("date_fields", list(defaults.date_fields)), "docs.date_fields"),
        plan_sections=_string_tuple(raw.get("plan_sections", list(defaults.plan_sections)), "docs.plan_sections"),
        spec_sections=_string_tuple(raw.get("spec_sections", list(defaults.spec_sections)), "docs.spec_sections"),
    )


def _build_rule_overrides(raw: Any) -> dict[str, RuleOverrideConfig]:
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigError("rule_overrides must be a mapping")

    overrides: dict[str, RuleOverrideConfig] = {}
    for rule_id, body in raw.items():
        if not isinstance(rule_id, str) or not rule_id.strip():
            raise ConfigError("rule_overrides keys must be non-empty rule ids")
        if not isinstance(body, dict):
            raise ConfigError(f"rule_overrides.{rule_id} must be a mapping")
        unknown = set(body) - RULE_OVERRIDE_ALLOWED_KEYS
        if unknown:
            raise ConfigError(f"rule_overrides.{rule_id} has unknown keys: {', '.join(sorted(map(str, unknown)))}")
        max_severity = body.get("max_severity")
        min_severity = body.get("min_severity")
        for key, value in (("max_severity", max_severity), ("min_severity", min_severity)):
            if value is not None and (not isinstance(value, str) or value not in RULE_OVERRIDE_ALLOWED_SEVERITIES):
                raise ConfigError(
                    f"rule_overrides.{rule_id}.{key} must be one of "
                    f"{sorted(RULE_OVERRIDE_ALLOWED_SEVERITIES)}, got {value!r}"
                )
        if max_severity is not None and min_severity is not None:
            if SEVERITY_RANK[min_severity] > SEVERITY_RANK[max_severity]:
                raise ConfigError(f"rule_overrides.{rule_id}: min_severity exceeds max_severity")
        overrides[rule_id.strip().upper()] = RuleOverrideConfig(max_severity=max_severity, min_severity=min_severity)
    return overrides
