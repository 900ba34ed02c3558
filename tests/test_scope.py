"""Brace-counting scope tracker tests."""

from __future__ import annotations

from side_effects_lint.scope import BraceScopeTracker


def _observe_all(lines: list[str]) -> list[bool]:
    tracker = BraceScopeTracker()
    return [tracker.observe(line) for line in lines]


def test_function_body_and_closing_line_are_inside_block() -> None:
    flags = _observe_all(["function init() {", "  window.myGlobal = true;", "}", "boot();"])
    assert flags == [True, True, True, False]


def test_nested_method_braces_keep_class_open() -> None:
    flags = _observe_all(
        [
            "export default class App {",
            "  render() {",
            "    draw();",
            "  }",
            "}",
            "start();",
        ]
    )
    assert flags == [True, True, True, True, True, False]


def test_line_with_both_braces_does_not_change_depth() -> None:
    tracker = BraceScopeTracker()
    tracker.observe("async function load() {")
    assert tracker.observe("  if (ok) { go(); } else {") is True
    assert tracker.depth == 1
    assert tracker.in_block is True


def test_single_line_function_closes_on_same_line() -> None:
    tracker = BraceScopeTracker()
    assert tracker.observe("function noop() {}") is True
    assert tracker.in_block is False
    assert tracker.observe("init();") is False


def test_opener_without_brace_closes_immediately() -> None:
    tracker = BraceScopeTracker()
    assert tracker.observe("function later()") is True
    assert tracker.in_block is False
    assert tracker.observe("{") is False


def test_multiple_braces_on_one_line_count_once() -> None:
    tracker = BraceScopeTracker()
    tracker.observe("export function build() {")
    tracker.observe("  const nested = { a: { b: 1 } };")
    assert tracker.depth == 1
    assert tracker.in_block is True


def test_assigned_function_expression_is_not_tracked() -> None:
    tracker = BraceScopeTracker()
    assert tracker.observe("const handler = function () {") is False
    assert tracker.in_block is False
