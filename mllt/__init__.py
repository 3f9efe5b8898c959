"""mllt - a tiny static site generator.

Compiles a theme and a content tree of Jinja2 templates into one registry,
renders every content page to HTML and syncs static assets into the output.
"""

__version__ = "0.1.0"

# Configure logging for library use
import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())

from .core.models import Config
from .site import Site

# Re-export main CLI entry point
from .cli import main

__all__ = ["Config", "Site", "main"]
