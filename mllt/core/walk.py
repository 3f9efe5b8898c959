"""Directory traversal honouring ``.gitignore``-style ignore files."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterator

from pathspec import GitIgnoreSpec

from .errors import ScanError

logger = logging.getLogger(__name__)

IGNORE_FILENAMES = (".gitignore", ".ignore")


def _load_spec(directory: Path) -> GitIgnoreSpec | None:
    """Read the ignore files in ``directory`` into one spec, if any exist."""
    lines: list[str] = []
    for name in IGNORE_FILENAMES:
        path = directory / name
        if not path.is_file():
            continue
        try:
            lines.extend(path.read_text(encoding="utf-8").splitlines())
        except (OSError, UnicodeDecodeError) as exc:
            raise ScanError(path, str(exc)) from exc
    if not lines:
        return None
    return GitIgnoreSpec.from_lines(lines)


class IgnoreRules:
    """Stack of ignore specs, each anchored at the directory that declared it.

    Deeper specs take precedence, so a ``!pattern`` in a subdirectory can
    re-include something excluded further up.
    """

    def __init__(self, layers: tuple[tuple[Path, GitIgnoreSpec], ...] = ()) -> None:
        self._layers = layers

    @classmethod
    def above(cls, root: Path) -> IgnoreRules:
        """Rules declared in the ancestors of ``root`` (outermost first)."""
        rules = cls()
        for ancestor in reversed(root.parents):
            rules = rules.descend(ancestor)
        return rules

    def descend(self, directory: Path) -> IgnoreRules:
        spec = _load_spec(directory)
        if spec is None:
            return self
        return IgnoreRules(self._layers + ((directory, spec),))

    def is_ignored(self, path: Path, *, is_dir: bool = False) -> bool:
        for base, spec in reversed(self._layers):
            relative = path.relative_to(base).as_posix()
            if is_dir:
                relative += "/"
            result = spec.check_file(relative)
            if result.include is not None:
                return bool(result.include)
        return False


def _scan_dir(directory: Path, inherited: IgnoreRules) -> Iterator[tuple[Path, bool]]:
    try:
        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda entry: entry.name)
    except OSError as exc:
        raise ScanError(directory, exc.strerror or str(exc)) from exc
    rules = inherited.descend(directory)

    for entry in entries:
        path = directory / entry.name
        is_dir = entry.is_dir()
        if rules.is_ignored(path, is_dir=is_dir):
            logger.debug(f"Ignored {'directory' if is_dir else 'file'}: {path}")
            continue
        yield path, is_dir
        # Symlinked directories are reported but not followed.
        if is_dir and not entry.is_symlink():
            yield from _scan_dir(path, rules)


def walk_tree(root: Path) -> Iterator[tuple[Path, bool]]:
    """Walk ``root`` depth-first in sorted order, skipping ignored entries.

    Entries of a directory are visited by name; a subdirectory is yielded
    and then fully walked before its next sibling, so ``blog/2024/entry``
    comes before ``blog/post`` and both before ``index``.

    Args:
        root: Directory to walk

    Yields:
        ``(absolute_path, is_dir)`` for every entry below ``root``

    Raises:
        ScanError: if ``root`` or any directory below it cannot be read
    """
    root = Path(root).resolve()
    if not root.is_dir():
        raise ScanError(root, "not a directory")

    yield from _scan_dir(root, IgnoreRules.above(root))
