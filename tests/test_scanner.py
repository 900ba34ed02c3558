"""Per-file scanning and aggregation tests."""

from __future__ import annotations

from side_effects_lint.rules import build_rule_set
from side_effects_lint.rules.base import Finding
from side_effects_lint.scanner import collect, scan_lines, scan_sources, scan_text

MODULE = [
    "import { db } from './db';",
    "const cache = new Map();",
    "",
    "firebase.initializeApp(config);",
    "export function init() {",
    "  window.myGlobal = true;",
    "  register();",
    "}",
    "window.myGlobal = true;",
    "document.addEventListener('click', handler);",
    "class Store {",
    "  load() {",
    "    fetchAll();",
    "  }",
    "}",
    "doSomething();",
]


def test_scan_lines_reports_only_module_scope_effects() -> None:
    findings = scan_lines("src/app.js", MODULE)
    assert [(item.line, item.rule_id) for item in findings] == [
        (4, "service_init"),
        (9, "global_assignment"),
        (10, "event_listener"),
        (16, "top_level_call"),
    ]
    assert all(item.file == "src/app.js" for item in findings)


def test_function_body_is_exempt() -> None:
    lines = ["function init() {", "  window.myGlobal = true;", "}"]
    assert scan_lines("a.js", lines) == []


def test_scan_is_idempotent() -> None:
    assert scan_lines("a.js", MODULE) == scan_lines("a.js", MODULE)


def test_scope_state_resets_between_files() -> None:
    unclosed = ["function broken() {", "  work();"]
    result = scan_sources([("a.js", unclosed), ("b.js", ["boot();"])])
    assert [(item.file, item.line) for item in result.findings] == [("b.js", 1)]
    assert result.files_scanned == 2


def test_scan_sources_preserves_file_order() -> None:
    result = scan_sources([("z.js", ["one();", "two();"]), ("a.js", ["three();"])])
    assert [(item.file, item.line) for item in result.findings] == [
        ("z.js", 1),
        ("z.js", 2),
        ("a.js", 1),
    ]
    assert result.files_with_findings == ["z.js", "a.js"]


def test_collect_keeps_duplicates() -> None:
    finding = Finding(file="a.js", line=1, code="go();", reason="r", rule_id="top_level_call")
    assert collect([[finding], [], [finding]]) == [finding, finding]


def test_scan_text_handles_crlf_line_numbers() -> None:
    findings = scan_text("a.ts", "const a = 1;\r\nstart();\r\n")
    assert [(item.line, item.code) for item in findings] == [(2, "start();")]


def test_custom_rule_set_is_used() -> None:
    rule_set = build_rule_set(enabled_rule_ids=["global_assignment"])
    findings = scan_lines("a.js", ["doSomething();", "window.x = 1;"], rule_set=rule_set)
    assert [item.rule_id for item in findings] == ["global_assignment"]


def test_custom_scope_oracle_is_used() -> None:
    class EverythingInside:
        def observe(self, line: str) -> bool:
            return True

    assert scan_lines("a.js", ["doSomething();"], scope_factory=EverythingInside) == []


def test_files_with_findings_lists_each_file_once_in_first_seen_order() -> None:
    result = scan_sources(
        [("b.js", ["one();", "two();"]), ("a.js", ["three();"]), ("b.js", ["four();"])]
    )
    assert len(result.findings) == 4
    assert result.files_with_findings == ["b.js", "a.js"]
