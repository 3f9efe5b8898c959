"""Incremental static asset sync."""

from __future__ import annotations

import logging
import shutil
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from ..core.errors import MetadataError, OutputError
from ..core.models import SyncReport
from ..core.walk import walk_tree
from ..rendering.io import ensure_dir

logger = logging.getLogger(__name__)


def _mtime_ns(path: Path) -> int:
    try:
        return path.stat().st_mtime_ns
    except OSError as exc:
        raise MetadataError(path, exc.strerror or str(exc)) from exc


def needs_copy(source: Path, destination: Path) -> bool:
    """Return True when ``destination`` is missing or older than ``source``.

    Equal modification times count as up to date.
    """
    if not destination.exists():
        return True
    return _mtime_ns(source) > _mtime_ns(destination)


def sync_file(source: Path, destination: Path) -> bool:
    """Copy ``source`` over ``destination`` if it is newer.

    The copy keeps the source modification time, so an unchanged source is
    skipped on the next sync.

    Returns:
        True if the file was copied
    """
    if not needs_copy(source, destination):
        logger.debug(f"Skipped (source not newer): {destination}")
        return False

    ensure_dir(destination.parent)
    try:
        shutil.copy2(source, destination)
    except OSError as exc:
        raise OutputError(destination, exc.strerror or str(exc)) from exc
    logger.debug(f"Copied: {destination}")
    return True


def sync_assets(source_root: Path, dest_root: Path, workers: int = 1) -> SyncReport:
    """Mirror ``source_root`` into ``dest_root``, copying only stale files.

    Args:
        source_root: Static assets directory
        dest_root: Site output directory
        workers: Number of copy threads

    Returns:
        Which files were copied or skipped and which directories were created
    """
    source_root = Path(source_root).resolve()
    dest_root = Path(dest_root)
    report = SyncReport()

    files: list[tuple[Path, Path]] = []
    for path, is_dir in walk_tree(source_root):
        destination = dest_root / path.relative_to(source_root)
        if is_dir:
            if ensure_dir(destination):
                report.created_dirs.append(destination)
                logger.debug(f"Created directory: {destination}")
        else:
            files.append((path, destination))

    if workers <= 1:
        results = [sync_file(src, dst) for src, dst in files]
    else:
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="mllt-sync") as pool:
            results = list(pool.map(lambda pair: sync_file(*pair), files))

    for (_, destination), copied in zip(files, results):
        (report.copied if copied else report.skipped).append(destination)

    logger.info(
        f"Synced assets: {len(report.copied)} copied, {len(report.skipped)} up to date"
    )
    return report
