"""Output rendering."""

from __future__ import annotations

import json
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import click

from side_effects_lint import __version__
from side_effects_lint.rules.base import SUGGESTION, Finding
from side_effects_lint.scanner import ScanResult

REPORT_HEADER = "Side Effect Linter Report\n========================\n"
NO_FINDINGS_MESSAGE = "No top-level side effects detected."


def render_report(findings: list[Finding]) -> str:
    """Render the plain-text report persisted to disk."""
    if not findings:
        return NO_FINDINGS_MESSAGE + "\n"

    parts = [REPORT_HEADER]
    for finding in findings:
        parts.append(
            f"\nFile: {finding.file}\n"
            f"Line: {finding.line}\n"
            f"Code: {finding.code}\n"
            f"Reason: {finding.reason}\n"
            f"Suggestion: {SUGGESTION}\n"
        )
    return "".join(parts)


def render_human(result: ScanResult) -> str:
    """Render a colorized console summary."""
    if not result.findings:
        return click.style(NO_FINDINGS_MESSAGE, fg="green", bold=True)

    lines: list[str] = [
        click.style(
            f"{len(result.findings)} top-level side effect(s) in "
            f"{len(result.files_with_findings)} of {result.files_scanned} file(s)",
            fg="red",
            bold=True,
        )
    ]
    current_file: str | None = None
    for finding in result.findings:
        if finding.file != current_file:
            current_file = finding.file
            lines.append(click.style(finding.file, bold=True))
        lines.append(f"  {finding.line}: [{finding.rule_id}] {finding.reason}")
        lines.append(f"    code: {finding.code.strip()}")
    lines.append(f"follow-up: {SUGGESTION}")
    return "\n".join(lines)


def render_json(result: ScanResult, *, roots: list[str]) -> str:
    """Render stable JSON output for CI and automation."""
    return json.dumps(build_json_payload(result, roots=roots), sort_keys=True)


def build_json_payload(result: ScanResult, *, roots: list[str]) -> dict[str, Any]:
    """Build stable JSON payload for CI and automation."""
    return {
        "findings": [_serialize_finding(item) for item in result.findings],
        "summary": {
            "files_scanned": result.files_scanned,
            "files_with_findings": len(result.files_with_findings),
            "finding_count": len(result.findings),
        },
        "meta": {
            "generated_at": datetime.now(tz=UTC)
            .replace(microsecond=0)
            .isoformat()
            .replace("+00:00", "Z"),
            "roots": list(roots),
            "version": __version__,
        },
    }


def write_report(path: Path, text: str) -> Path:
    """Persist a rendered report, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    if not text.endswith("\n"):
        text += "\n"
    path.write_text(text, encoding="utf-8")
    return path


def _serialize_finding(finding: Finding) -> dict[str, Any]:
    return {
        "file": finding.file,
        "line": finding.line,
        "code": finding.code,
        "reason": finding.reason,
        "rule_id": finding.rule_id,
        "suggestion": SUGGESTION,
    }
