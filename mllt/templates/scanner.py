"""Template discovery under a theme or content root."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

from ..core.errors import ScanError
from ..core.models import TEMPLATE_SUFFIX, ScannedTemplate
from ..core.walk import walk_tree
from .naming import template_identifier

logger = logging.getLogger(__name__)


def scan_templates(root: Path, suffix: str = TEMPLATE_SUFFIX) -> Iterator[ScannedTemplate]:
    """Yield every template file below ``root``.

    The tree is walked lazily and again on every call; ignored paths are
    skipped (see :func:`mllt.core.walk.walk_tree`). A file named just
    ``suffix`` has no name to register and is skipped with a warning.

    Args:
        root: Theme or content directory
        suffix: Template file suffix

    Yields:
        Scanned templates in sorted traversal order

    Raises:
        ScanError: on the first unreadable directory or file
    """
    root = Path(root).resolve()
    logger.debug(f"Scanning {root} for *{suffix} templates")

    for path, is_dir in walk_tree(root):
        if is_dir or not path.name.endswith(suffix):
            continue
        if path.name == suffix:
            logger.warning(f"Skipping template with an empty name: {path}")
            continue
        identifier = template_identifier(path, root, suffix)
        try:
            source = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ScanError(path, str(exc)) from exc
        yield ScannedTemplate(
            identifier=identifier,
            path=path,
            relative_path=path.relative_to(root),
            source=source,
        )
