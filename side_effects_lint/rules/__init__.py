"""Rules package."""

from collections.abc import Sequence
from dataclasses import dataclass

from side_effects_lint.rules.base import (
    FALLBACK_REASON,
    SUGGESTION,
    Finding,
    IgnoreRule,
    RuleSet,
    SideEffectRule,
)
from side_effects_lint.rules.ignore import IGNORE_RULES
from side_effects_lint.rules.side_effects import DEFAULT_SDK_NAMESPACES, side_effect_rules

__all__ = [
    "DEFAULT_SDK_NAMESPACES",
    "FALLBACK_REASON",
    "SUGGESTION",
    "Finding",
    "IgnoreRule",
    "RuleInfo",
    "RuleSet",
    "SideEffectRule",
    "build_rule_set",
    "default_rule_set",
    "list_rule_info",
]


@dataclass(frozen=True, slots=True)
class RuleInfo:
    """Rule metadata for listing and selection."""

    rule_id: str
    reason: str
    description: str
    priority: int


def default_rule_set() -> RuleSet:
    """Return the rule set with every side-effect rule enabled."""
    return build_rule_set()


def build_rule_set(
    *,
    enabled_rule_ids: list[str] | None = None,
    disabled_rule_ids: list[str] | None = None,
    sdk_namespaces: Sequence[str] | None = None,
) -> RuleSet:
    """Build a rule set applying enable/disable filters in priority order."""
    candidates = side_effect_rules(
        tuple(sdk_namespaces) if sdk_namespaces is not None else DEFAULT_SDK_NAMESPACES
    )
    known = {rule.rule_id for rule in candidates}
    requested = set(enabled_rule_ids or []) | set(disabled_rule_ids or [])
    unknown = [rule_id for rule_id in requested if rule_id not in known]
    if unknown:
        joined = ", ".join(sorted(unknown))
        raise ValueError(f"Unknown rule ids: {joined}")

    enabled = set(enabled_rule_ids) if enabled_rule_ids is not None else known
    disabled = set(disabled_rule_ids or [])
    selected = tuple(
        rule for rule in candidates if rule.rule_id in enabled and rule.rule_id not in disabled
    )
    return RuleSet(ignore_rules=IGNORE_RULES, side_effect_rules=selected)


def list_rule_info() -> list[RuleInfo]:
    """Return metadata for all known side-effect rules, highest priority first."""
    return [
        RuleInfo(
            rule_id=rule.rule_id,
            reason=rule.reason,
            description=rule.description,
            priority=index,
        )
        for index, rule in enumerate(side_effect_rules(), start=1)
    ]
