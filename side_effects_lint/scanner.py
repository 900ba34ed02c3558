"""Scan orchestration and finding aggregation."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from side_effects_lint.classifier import LineClassifier
from side_effects_lint.rules import default_rule_set
from side_effects_lint.rules.base import Finding, RuleSet
from side_effects_lint.scope import BraceScopeTracker, ScopeOracle
from side_effects_lint.source_lines import iter_source_lines, split_lines

logger = logging.getLogger(__name__)

ScopeFactory = Callable[[], ScopeOracle]


@dataclass(slots=True)
class ScanResult:
    """Ordered findings across every scanned file."""

    findings: list[Finding] = field(default_factory=list)
    files_scanned: int = 0

    @property
    def files_with_findings(self) -> list[str]:
        return list(dict.fromkeys(finding.file for finding in self.findings))


def scan_lines(
    file: str,
    lines: Iterable[str],
    *,
    rule_set: RuleSet | None = None,
    scope_factory: ScopeFactory = BraceScopeTracker,
) -> list[Finding]:
    """Scan one file's lines in order with a fresh scope tracker."""
    classifier = LineClassifier(rule_set if rule_set is not None else default_rule_set())
    scope = scope_factory()
    findings: list[Finding] = []
    for source_line in iter_source_lines(file, lines):
        inside_block = scope.observe(source_line.text)
        finding = classifier.classify(source_line, inside_block=inside_block)
        if finding is not None:
            findings.append(finding)
    logger.debug("Scanned %s: %d finding(s)", file, len(findings))
    return findings


def scan_text(
    file: str,
    text: str,
    *,
    rule_set: RuleSet | None = None,
    scope_factory: ScopeFactory = BraceScopeTracker,
) -> list[Finding]:
    """Split raw file content and scan it."""
    return scan_lines(file, split_lines(text), rule_set=rule_set, scope_factory=scope_factory)


def collect(findings_per_file: Iterable[list[Finding]]) -> list[Finding]:
    """Concatenate per-file findings in the order supplied.

    No deduplication or sorting happens; scanning a file twice reports it twice.
    """
    collected: list[Finding] = []
    for findings in findings_per_file:
        collected.extend(findings)
    return collected


def scan_sources(
    sources: Iterable[tuple[str, list[str]]],
    *,
    rule_set: RuleSet | None = None,
    scope_factory: ScopeFactory = BraceScopeTracker,
) -> ScanResult:
    """Scan ``(file id, lines)`` pairs and aggregate their findings."""
    active_rules = rule_set if rule_set is not None else default_rule_set()
    per_file: list[list[Finding]] = []
    for file, lines in sources:
        per_file.append(
            scan_lines(file, lines, rule_set=active_rules, scope_factory=scope_factory)
        )
    return ScanResult(findings=collect(per_file), files_scanned=len(per_file))
