"""Layout transclusion helper.

A page wraps itself in another registered template with a call block::

    {% call layout("page") %}
      <h1>{{ params.title }}</h1>
    {% endcall %}

The block body is rendered first and handed to ``page`` as ``content``.
``page`` may itself call ``layout`` to wrap the result again, so layouts
compose from the innermost body outwards.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Callable, Iterator

from jinja2 import pass_context
from jinja2.runtime import Context
from markupsafe import Markup

from ..core.errors import BlockContentRequired, InvalidArgumentType

if TYPE_CHECKING:
    from .registry import TemplateRegistry

logger = logging.getLogger(__name__)

LAYOUT_HELPER_NAME = "layout"
CONTENT_VARIABLE = "content"


class _ScopeStack(threading.local):
    """Per-thread record of open ``content`` frames.

    Each nested template renders against its own frame dict, so this stack
    only tracks nesting depth and guarantees frames are closed on error.
    """

    def __init__(self) -> None:
        self.frames: list[dict[str, Any]] = []


class LayoutHelper:
    """Renders a block body, then renders a named template around it."""

    def __init__(self, registry: TemplateRegistry) -> None:
        self._registry = registry
        self._scopes = _ScopeStack()

    @property
    def depth(self) -> int:
        """Number of ``content`` scopes currently open on this thread."""
        return len(self._scopes.frames)

    @contextmanager
    def content_scope(self, context: Context, body: str) -> Iterator[dict[str, Any]]:
        """Build the context for a wrapping template with ``body`` as ``content``.

        The yielded frame is a fresh copy, so the caller's own ``content``
        is untouched once the wrapper returns.
        """
        frame = dict(context.get_all())
        # Already rendered markup; autoescape must leave it alone.
        frame[CONTENT_VARIABLE] = Markup(body)
        self._scopes.frames.append(frame)
        try:
            yield frame
        finally:
            self._scopes.frames.pop()

    @pass_context
    def transclude(
        self,
        context: Context,
        identifier: Any,
        caller: Callable[[], str] | None = None,
    ) -> Markup:
        """Wrap the enclosed block in the template named ``identifier``.

        Args:
            context: Active template context (injected by Jinja2)
            identifier: Registry identifier of the wrapping template
            caller: Renders the enclosed block (injected by ``{% call %}``)

        Returns:
            The wrapping template's output, marked safe

        Raises:
            BlockContentRequired: if used as ``{{ layout(...) }}``
            InvalidArgumentType: if ``identifier`` is not a string
            TemplateNotFound: if ``identifier`` is not registered
        """
        if caller is None:
            raise BlockContentRequired(
                context.name,
                f"'{LAYOUT_HELPER_NAME}' must be used as a block: "
                f"{{% call {LAYOUT_HELPER_NAME}(...) %}}...{{% endcall %}}",
            )
        if not isinstance(identifier, str):
            raise InvalidArgumentType(
                context.name,
                f"'{LAYOUT_HELPER_NAME}' expects a template name string, "
                f"got {type(identifier).__name__}",
            )

        body = caller()
        logger.debug(f"Wrapping {context.name or 'block'} in layout '{identifier}'")
        with self.content_scope(context, body) as frame:
            return Markup(self._registry.render(identifier, frame))
