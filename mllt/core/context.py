"""Render context construction."""

from __future__ import annotations

import logging
from functools import lru_cache
from importlib import resources
from typing import Any

from .models import Config

logger = logging.getLogger(__name__)

BUNDLED_NORMALIZE_KEY = "_bundled_normalize"


@lru_cache(maxsize=1)
def bundled_normalize_css() -> str:
    """Return the normalize.css stylesheet shipped with the package."""
    return (
        resources.files("mllt.core")
        .joinpath("normalize.min.css")
        .read_text(encoding="utf-8")
    )


def build_context(config: Config) -> dict[str, Any]:
    """Build the context shared by every render in a build.

    Args:
        config: Resolved site configuration

    Returns:
        Context dictionary with ``site``, ``params`` and bundled resources
    """
    logger.debug("Building render context from config")

    return {
        "site": config.site.model_dump(mode="json", by_alias=True),
        "params": dict(config.params),
        BUNDLED_NORMALIZE_KEY: bundled_normalize_css(),
    }
