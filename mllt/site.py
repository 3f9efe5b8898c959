"""Site orchestration: register templates, render pages, sync assets."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from .assets.sync import sync_assets
from .core.context import build_context
from .core.models import BuildReport, Config
from .rendering.engine import render_pages
from .rendering.io import ensure_dir
from .templates.registry import TemplateRegistry
from .templates.scanner import scan_templates

logger = logging.getLogger(__name__)


class Site:
    """One site build driven by a resolved :class:`Config`.

    The render context and template registry live as long as the
    ``Site``. :meth:`reload_templates` rebuilds the registry in place so a
    long-lived process can rebuild without constructing a new ``Site``.
    """

    def __init__(self, config: Config) -> None:
        self.config = config
        self.context: dict[str, Any] = build_context(config)
        self.registry = TemplateRegistry(strict=config.site.strict)

    @property
    def out_dir(self) -> Path:
        return self.config.site.out_dir

    def _register_tree(self, root: Path, label: str) -> int:
        count = 0
        for template in scan_templates(root):
            self.registry.register(template.identifier, template.source, origin=template.path)
            count += 1
        logger.info(f"Registered {count} {label} template(s) from {root}")
        return count

    def reload_templates(self) -> int:
        """Clear the registry and register the theme, then the content tree.

        Content templates are registered too, so pages can include or wrap
        one another. Returns the number of registered identifiers.
        """
        self.registry.clear()
        if self.config.site.theme is not None:
            self._register_tree(self.config.site.theme, "theme")
        else:
            logger.info("No theme folder specified! Skipping...")
        self._register_tree(self.config.site.content, "content")
        return len(self.registry)

    def render(self) -> BuildReport:
        """Render every content page and sync static assets."""
        view = self.registry.freeze()
        ensure_dir(self.out_dir)

        logger.info("Rendering content pages...")
        pages = render_pages(
            view,
            scan_templates(self.config.site.content),
            self.context,
            self.out_dir,
            workers=self.config.site.workers,
        )

        assets = None
        if self.config.site.assets is not None:
            logger.info("Copying static assets...")
            assets = sync_assets(
                self.config.site.assets, self.out_dir, workers=self.config.site.workers
            )
        else:
            logger.info("No assets folder specified! Skipping...")

        return BuildReport(templates=len(view), pages=pages, assets=assets)

    def build(self) -> BuildReport:
        """Reload all templates, then render."""
        self.reload_templates()
        return self.render()
