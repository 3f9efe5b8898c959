"""New project scaffolding."""

from __future__ import annotations

import logging
from importlib import resources
from pathlib import Path

from ..core.errors import ScaffoldError

logger = logging.getLogger(__name__)

SAMPLE_FILES = (
    "mllt.toml",
    "theme/style.hbs",
    "theme/header.hbs",
    "theme/head.hbs",
    "theme/footer.hbs",
    "theme/page.hbs",
    "content/index.hbs",
)
PROJECT_DIRS = ("theme", "content", "assets")


def _sample(name: str) -> str:
    return resources.files(__package__).joinpath(f"files/{name}").read_text(encoding="utf-8")


def create_dir_all_checked(path: Path, clobber: bool) -> None:
    """Create ``path`` unless it exists and holds files we must not clobber."""
    if path.is_file():
        raise ScaffoldError(path, "is a file")

    if path.is_dir():
        is_empty = next(path.iterdir(), None) is None
        if not is_empty and not clobber:
            raise ScaffoldError(
                path,
                "directory is non-empty. To clobber existing files, use `--force`.",
            )
        return

    if path.exists():
        raise ScaffoldError(path, "exists, unidentified record type")

    try:
        path.mkdir(parents=True)
    except OSError as exc:
        raise ScaffoldError(path, exc.strerror or str(exc)) from exc


def write_file_checked(path: Path, content: str, clobber: bool) -> None:
    """Write ``content`` to ``path``, refusing to overwrite unless ``clobber``."""
    if path.exists():
        if not clobber:
            raise ScaffoldError(path, "file already exists")
        logger.warning(f"File already exists and will be overwritten: {path}")
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise ScaffoldError(path, exc.strerror or str(exc)) from exc


def instantiate_site(base_path: Path, clobber: bool = False) -> list[Path]:
    """Create a sample mllt project at ``base_path``.

    Args:
        base_path: Project root to create
        clobber: Overwrite existing files instead of failing

    Returns:
        Files written
    """
    base_path = Path(base_path)
    create_dir_all_checked(base_path, clobber)
    for name in PROJECT_DIRS:
        create_dir_all_checked(base_path / name, clobber)

    written: list[Path] = []
    for name in SAMPLE_FILES:
        target = base_path / name
        write_file_checked(target, _sample(name), clobber)
        written.append(target)

    logger.info(f"Created new site at {base_path}")
    return written
