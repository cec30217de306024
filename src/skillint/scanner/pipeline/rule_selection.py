"""Rule execution set resolution for config and CLI selectors."""

from __future__ import annotations

from dataclasses import dataclass

from skillint.config import SkillintConfig, effective_rule_ids
from skillint.exceptions import ConfigError
from skillint.types import RuleOverrideConfig


@dataclass(frozen=True)
class EffectiveRuleSelection:
    """Deterministic effective rule selection for a lint run."""

    executed_rule_ids: tuple[str, ...]
    disabled_rule_ids: tuple[str, ...]
    active_rule_overrides: dict[str, RuleOverrideConfig]
    unknown_config_rule_ids: tuple[str, ...]


def resolve_effective_rule_selection(
    *,
    config: SkillintConfig,
    available_rule_ids: tuple[str, ...],
    cli_only_rules: tuple[str, ...] = (),
    cli_disable_rules: tuple[str, ...] = (),
) -> EffectiveRuleSelection:
    """Resolve executed and disabled rule IDs.

    Config ``rules.enabled``/``rules.disabled`` apply first, then CLI
    ``--only`` narrows and ``--disable`` removes. Unknown CLI rule IDs are a
    configuration error; unknown config rule IDs are reported back so the
    caller can warn about them.
    """
    available_set = set(available_rule_ids)
    cli_only = {rule_id.upper() for rule_id in cli_only_rules}
    cli_disable = {rule_id.upper() for rule_id in cli_disable_rules}
    _raise_unknown_cli_rules("--only", sorted(cli_only - available_set))
    _raise_unknown_cli_rules("--disable", sorted(cli_disable - available_set))

    config_rule_ids = set(config.rules.enabled) | set(config.rules.disabled) | set(config.rule_overrides)
    unknown_config_rule_ids = tuple(sorted(config_rule_ids - available_set))

    selected = effective_rule_ids(config, available_rule_ids)
    if cli_only:
        selected = tuple(rule_id for rule_id in selected if rule_id in cli_only)
    executed = tuple(rule_id for rule_id in selected if rule_id not in cli_disable)
    executed_set = set(executed)
    disabled = tuple(rule_id for rule_id in available_rule_ids if rule_id not in executed_set)

    active_rule_overrides = {
        rule_id: override for rule_id, override in sorted(config.rule_overrides.items()) if rule_id in executed_set
    }

    return EffectiveRuleSelection(
        executed_rule_ids=executed,
        disabled_rule_ids=disabled,
        active_rule_overrides=active_rule_overrides,
        unknown_config_rule_ids=unknown_config_rule_ids,
    )


def _raise_unknown_cli_rules(flag: str, unknown_rule_ids: list[str]) -> None:
    """Raise ConfigError when CLI rule selectors contain unknown rule IDs."""
    if not unknown_rule_ids:
        return
    raise ConfigError(f"Unknown rule IDs for {flag}: {', '.join(unknown_rule_ids)}")
