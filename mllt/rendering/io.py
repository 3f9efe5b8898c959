"""File I/O operations for rendering."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

from ..core.errors import OutputError


def _file_mode() -> int:
    # mkstemp creates 0600 files; give pages the mode a plain open() would.
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


FILE_MODE = _file_mode()


def ensure_dir(path: Path) -> bool:
    """Create ``path`` and its parents if missing.

    Returns:
        True if the directory was created by this call
    """
    if path.is_dir():
        return False
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise OutputError(path, exc.strerror or str(exc)) from exc
    return True


def atomic_write_text(path: Path, text: str) -> None:
    """Write text to a file atomically using a temporary file.

    The file ends up with the permissions the process umask allows.

    Args:
        path: Destination file path
        text: Text content to write
    """
    ensure_dir(path.parent)

    try:
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=str(path.parent))
    except OSError as exc:
        raise OutputError(path, exc.strerror or str(exc)) from exc
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as tmp:
            tmp.write(text)
            tmp.flush()
            os.fsync(tmp.fileno())
        os.chmod(tmp_name, FILE_MODE)
        os.replace(tmp_name, path)
    except OSError as exc:
        raise OutputError(path, exc.strerror or str(exc)) from exc
    finally:
        Path(tmp_name).unlink(missing_ok=True)
