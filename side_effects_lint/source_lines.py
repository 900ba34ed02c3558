"""Source line primitives."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from re import compile

LINE_BREAK_RE = compile(r"\r?\n")


@dataclass(frozen=True, slots=True)
class SourceLine:
    """A single physical line of a scanned file."""

    file: str
    lineno: int
    text: str


def split_lines(text: str) -> list[str]:
    """Split file content on LF or CRLF, keeping a trailing empty line."""
    return LINE_BREAK_RE.split(text)


def iter_source_lines(file: str, lines: Iterable[str]) -> Iterator[SourceLine]:
    """Yield 1-based ``SourceLine`` records for one file."""
    for index, text in enumerate(lines, start=1):
        yield SourceLine(file=file, lineno=index, text=text)
