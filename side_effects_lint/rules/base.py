"""Rule and finding models."""

from __future__ import annotations

from dataclasses import dataclass
from re import Pattern

FALLBACK_REASON = "possible side effect."
SUGGESTION = "Move this code into an exported function or class method."


@dataclass(frozen=True, slots=True)
class Finding:
    """A suspected top-level side effect tied to one file line."""

    file: str
    line: int
    code: str
    reason: str
    rule_id: str


@dataclass(frozen=True, slots=True)
class IgnoreRule:
    """Line predicate that suppresses classification entirely."""

    rule_id: str
    pattern: Pattern[str]

    def matches(self, text: str) -> bool:
        return self.pattern.search(text) is not None


@dataclass(frozen=True, slots=True)
class SideEffectRule:
    """Line predicate paired with the reason reported when it matches."""

    rule_id: str
    pattern: Pattern[str]
    reason: str
    description: str = ""

    def matches(self, text: str) -> bool:
        return self.pattern.search(text) is not None


@dataclass(frozen=True, slots=True)
class RuleSet:
    """Immutable rule configuration shared by every scanned file.

    ``ignore_rules`` are checked first and any match suppresses the line.
    ``side_effect_rules`` are checked in priority order and the first
    match decides the reported reason.
    """

    ignore_rules: tuple[IgnoreRule, ...]
    side_effect_rules: tuple[SideEffectRule, ...]

    @property
    def rule_ids(self) -> list[str]:
        return [rule.rule_id for rule in self.side_effect_rules]
