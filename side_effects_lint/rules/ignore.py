"""Lines that are never reported: declarations, comments and blanks."""

from __future__ import annotations

from re import compile

from side_effects_lint.rules.base import IgnoreRule

# Matched against the raw line, so only unindented declarations and
# line comments are exempt.
IGNORE_RULES: tuple[IgnoreRule, ...] = (
    IgnoreRule(
        "export_declaration",
        compile(r"^export\s+(default\s+)?(function|class|const|let|var|async|\{)"),
    ),
    IgnoreRule("declaration", compile(r"^(function|class|const|let|var|async)\s")),
    IgnoreRule("line_comment", compile(r"^//")),
    IgnoreRule("block_comment_open", compile(r"^\s*/\*")),
    IgnoreRule("block_comment_close", compile(r"^\s*\*/")),
    IgnoreRule("block_comment_line", compile(r"^\s*\*")),
    IgnoreRule("blank", compile(r"^\s*$")),
)
