"""Template identifiers derived from file paths."""

from __future__ import annotations

from pathlib import Path

from ..core.errors import InvalidPathError
from ..core.models import TEMPLATE_SUFFIX


def template_identifier(path: Path, root: Path, suffix: str = TEMPLATE_SUFFIX) -> str:
    """Map a template file to its registry identifier.

    The identifier is the path relative to ``root`` with the template suffix
    removed and ``/`` as separator, so ``theme/partials/nav.hbs`` under root
    ``theme`` becomes ``partials/nav``.

    Raises:
        InvalidPathError: if ``path`` is outside ``root`` or not valid text
    """
    try:
        relative = Path(path).relative_to(root)
    except ValueError as exc:
        raise InvalidPathError(path, f"not inside {root}") from exc

    name = relative.as_posix()
    try:
        name.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise InvalidPathError(path, "path is not valid UTF-8") from exc

    if suffix and name.endswith(suffix):
        name = name[: -len(suffix)]
    if not name or name == ".":
        raise InvalidPathError(path, "empty template name")
    return name
