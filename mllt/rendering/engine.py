"""Page rendering engine."""

from __future__ import annotations

import logging
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from pathlib import Path
from typing import Any, Iterable, Mapping

from ..core.models import OUTPUT_SUFFIX, ScannedTemplate
from ..templates.registry import RegistryView
from .io import atomic_write_text

logger = logging.getLogger(__name__)


def output_path(page: ScannedTemplate, out_dir: Path, suffix: str = OUTPUT_SUFFIX) -> Path:
    """Mirror a content page's relative path under ``out_dir``.

    ``blog/post.hbs`` becomes ``<out_dir>/blog/post.html``.
    """
    return Path(out_dir) / page.relative_path.with_suffix(suffix)


def render_page(
    view: RegistryView,
    page: ScannedTemplate,
    context: Mapping[str, Any],
    out_dir: Path,
) -> Path:
    """Render a single content page.

    Args:
        view: Frozen template registry
        page: Content template to render
        context: Template context data
        out_dir: Site output directory

    Returns:
        Output file path
    """
    logger.debug(f"Rendering page: {page.identifier}")

    rendered_text = view.render(page.identifier, context)
    destination = output_path(page, out_dir)
    atomic_write_text(destination, rendered_text)
    logger.debug(f"Rendered {page.relative_path} → {destination}")

    return destination


def render_pages(
    view: RegistryView,
    pages: Iterable[ScannedTemplate],
    context: Mapping[str, Any],
    out_dir: Path,
    workers: int = 1,
) -> list[Path]:
    """Render every content page.

    Pages only read the frozen registry and the shared context, so with
    ``workers > 1`` they render on a thread pool. The first failure stops
    the pass and is re-raised; pages already written stay on disk.

    Args:
        view: Frozen template registry
        pages: Content templates to render
        context: Template context data
        out_dir: Site output directory
        workers: Number of rendering threads

    Returns:
        List of output file paths
    """
    if workers <= 1:
        outputs = [render_page(view, page, context, out_dir) for page in pages]
    else:
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="mllt-render") as pool:
            futures = [
                pool.submit(render_page, view, page, context, out_dir) for page in pages
            ]
            done, pending = wait(futures, return_when=FIRST_EXCEPTION)
            for future in pending:
                future.cancel()
            for future in futures:
                if future in done and future.exception() is not None:
                    raise future.exception()
            outputs = [future.result() for future in futures]

    logger.info(f"Rendered {len(outputs)} page(s)")
    return outputs
