"""Function/class body tracking for line-by-line scans."""

from __future__ import annotations

from re import compile
from typing import Protocol

BLOCK_OPENER_RE = compile(
    r"^(?:export\s+(?:default\s+)?)?(?:async\s+)?function\s"
    r"|^(?:export\s+(?:default\s+)?)?class\s"
)


class ScopeOracle(Protocol):
    """Decides whether each line of one file sits inside a function/class body."""

    def observe(self, line: str) -> bool:
        """Consume the next line and return True when it must not be classified."""


class BraceScopeTracker:
    """Heuristic brace counter started by a function or class declaration.

    Only the presence of ``{`` and ``}`` on a line is counted, once each,
    including braces inside strings, comments and regex literals. The line
    that closes the block is still reported as inside it. ``depth`` carries
    over between blocks of the same file and can end below zero.
    """

    def __init__(self) -> None:
        self.in_block = False
        self.depth = 0

    def observe(self, line: str) -> bool:
        if not self.in_block and BLOCK_OPENER_RE.search(line.strip()):
            self.in_block = True

        if not self.in_block:
            return False

        if "{" in line:
            self.depth += 1
        if "}" in line:
            self.depth -= 1
        if self.depth <= 0:
            self.in_block = False
        return True
