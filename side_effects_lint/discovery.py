"""Source file discovery and reading."""

from __future__ import annotations

import fnmatch
import logging
from collections.abc import Iterable, Iterator, Sequence
from pathlib import Path

from side_effects_lint.source_lines import split_lines

logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS = (".js", ".ts")


class DiscoveryError(RuntimeError):
    """Raised when a source file cannot be read."""


def discover_files(
    roots: Sequence[Path],
    *,
    extensions: Sequence[str] = DEFAULT_EXTENSIONS,
    include: Sequence[str] = (),
    exclude: Sequence[str] = (),
    base: Path | None = None,
) -> list[Path]:
    """Recursively collect files under each root, in root order.

    Include/exclude globs are matched against the POSIX path relative to
    ``base`` when the file lives below it.
    """
    suffixes = tuple(extensions)
    found: list[Path] = []
    for root in roots:
        if not root.is_dir():
            logger.debug("Skipping missing root %s", root)
            continue
        for path in _walk(root):
            if not path.name.endswith(suffixes):
                continue
            display = display_path(path, base)
            if include and not any(fnmatch.fnmatch(display, pattern) for pattern in include):
                continue
            if exclude and any(fnmatch.fnmatch(display, pattern) for pattern in exclude):
                continue
            found.append(path)
    logger.debug("Discovered %d file(s) under %d root(s)", len(found), len(roots))
    return found


def read_source(path: Path) -> list[str]:
    """Read a file as UTF-8 and split it into lines."""
    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        raise DiscoveryError(f"Unable to read {path}: {exc}") from exc
    return split_lines(text)


def load_sources(
    paths: Iterable[Path], *, base: Path | None = None
) -> Iterator[tuple[str, list[str]]]:
    """Yield ``(file id, lines)`` pairs, skipping unreadable files."""
    for path in paths:
        try:
            lines = read_source(path)
        except DiscoveryError as exc:
            logger.warning("%s", exc)
            continue
        yield (display_path(path, base), lines)


def display_path(path: Path, base: Path | None) -> str:
    """Return ``path`` relative to ``base`` as POSIX text when possible."""
    if base is not None and path.is_relative_to(base):
        return path.relative_to(base).as_posix()
    return path.as_posix()


def _walk(directory: Path) -> Iterator[Path]:
    try:
        entries = sorted(directory.iterdir(), key=lambda item: item.name)
    except OSError as exc:
        logger.warning("Unable to list %s: %s", directory, exc)
        return
    for entry in entries:
        # Symlinked directories are not followed.
        if entry.is_dir() and not entry.is_symlink():
            yield from _walk(entry)
        elif entry.is_file():
            yield entry
