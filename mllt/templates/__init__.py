"""Template discovery, registration and layout transclusion."""

from .layout import CONTENT_VARIABLE, LAYOUT_HELPER_NAME, LayoutHelper
from .naming import template_identifier
from .registry import RegistryView, TemplateRegistry
from .scanner import scan_templates

__all__ = [
    "CONTENT_VARIABLE",
    "LAYOUT_HELPER_NAME",
    "LayoutHelper",
    "RegistryView",
    "TemplateRegistry",
    "scan_templates",
    "template_identifier",
]
