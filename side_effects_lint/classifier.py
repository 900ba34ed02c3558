"""Module-scope line classification."""

from __future__ import annotations

from side_effects_lint.rules.base import Finding, RuleSet
from side_effects_lint.source_lines import SourceLine


class LineClassifier:
    """Applies ignore rules, then side-effect rules, to a single line."""

    def __init__(self, rule_set: RuleSet) -> None:
        self.rule_set = rule_set

    def classify(self, line: SourceLine, *, inside_block: bool) -> Finding | None:
        if inside_block:
            return None

        text = line.text
        if any(rule.matches(text) for rule in self.rule_set.ignore_rules):
            return None

        for rule in self.rule_set.side_effect_rules:
            if rule.matches(text):
                return Finding(
                    file=line.file,
                    line=line.lineno,
                    code=text,
                    reason=rule.reason,
                    rule_id=rule.rule_id,
                )
        return None
