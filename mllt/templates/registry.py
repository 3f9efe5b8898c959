"""Named template registry backed by a Jinja2 environment.

Theme and content templates are registered under their identifiers during
the write phase. :meth:`TemplateRegistry.freeze` ends that phase and hands
out a :class:`RegistryView`, the read-only handle the render pass uses.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Iterator, Mapping

import jinja2
from jinja2 import BaseLoader, ChainableUndefined, Environment, StrictUndefined

from ..core.errors import (
    CompileError,
    RegistryFrozenError,
    RenderError,
    TemplateNotFound,
    UnknownField,
)
from .layout import LAYOUT_HELPER_NAME, LayoutHelper

logger = logging.getLogger(__name__)


class _RegistryLoader(BaseLoader):
    """Jinja2 loader resolving names against registered template sources."""

    def __init__(self, sources: Mapping[str, tuple[str, str | None]]) -> None:
        self._sources = sources

    def get_source(
        self, environment: Environment, template: str,
    ) -> tuple[str, str | None, Callable[[], bool]]:
        try:
            source, filename = self._sources[template]
        except KeyError:
            raise jinja2.TemplateNotFound(template) from None
        return source, filename, lambda: self._sources.get(template, (None,))[0] is source

    def list_templates(self) -> list[str]:
        return sorted(self._sources)


class TemplateRegistry:
    """Compiled templates keyed by identifier.

    Args:
        strict: Raise :class:`UnknownField` for values missing from the
            context instead of rendering them as empty strings.
    """

    def __init__(self, *, strict: bool = False) -> None:
        self.strict = strict
        self.collisions: list[str] = []
        self._sources: dict[str, tuple[str, str | None]] = {}
        self._frozen = False
        self._env = Environment(
            loader=_RegistryLoader(self._sources),
            undefined=StrictUndefined if strict else ChainableUndefined,
            autoescape=True,
            keep_trailing_newline=True,
        )
        self.layout = LayoutHelper(self)
        self._env.globals[LAYOUT_HELPER_NAME] = self.layout.transclude

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._sources

    def __len__(self) -> int:
        return len(self._sources)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._sources))

    @property
    def frozen(self) -> bool:
        return self._frozen

    def register(self, identifier: str, source: str, origin: Path | None = None) -> None:
        """Compile ``source`` and store it under ``identifier``.

        An existing entry with the same identifier is replaced; the collision
        is logged and recorded in :attr:`collisions`.

        Raises:
            CompileError: if the source is not a valid template
            RegistryFrozenError: if called after :meth:`freeze`
        """
        if self._frozen:
            raise RegistryFrozenError(
                f"Cannot register '{identifier}': registry is frozen for rendering"
            )

        previous = self._sources.get(identifier)
        self._sources[identifier] = (source, str(origin) if origin else None)
        try:
            self._env.get_template(identifier)
        except jinja2.TemplateSyntaxError as exc:
            if previous is None:
                del self._sources[identifier]
            else:
                self._sources[identifier] = previous
            raise CompileError(identifier, exc.message or str(exc), exc.lineno) from exc

        if previous is not None:
            self.collisions.append(identifier)
            logger.warning(
                f"Template '{identifier}' registered more than once; "
                f"{origin or 'new source'} replaces {previous[1] or 'earlier source'}"
            )
        logger.debug(f"Registered template: {identifier}")

    def render(self, identifier: str, context: Mapping[str, Any]) -> str:
        """Render a registered template against ``context``.

        Raises:
            TemplateNotFound: if ``identifier`` (or anything it references)
                is not registered
            UnknownField: in strict mode, if a referenced value is missing
            RenderError: for any other template runtime failure
        """
        try:
            template = self._env.get_template(identifier)
        except jinja2.TemplateNotFound as exc:
            raise TemplateNotFound(identifier) from exc

        try:
            return template.render(dict(context))
        except RenderError:
            raise
        except jinja2.UndefinedError as exc:
            raise UnknownField(identifier, exc.message or str(exc)) from exc
        except jinja2.TemplateNotFound as exc:
            raise TemplateNotFound(exc.name or str(exc), identifier) from exc
        except jinja2.TemplateError as exc:
            raise RenderError(identifier, exc.message or str(exc)) from exc
        except Exception as exc:
            # Python errors raised by expressions inside the template.
            raise RenderError(identifier, f"{type(exc).__name__}: {exc}") from exc

    def freeze(self) -> RegistryView:
        """End the registration phase and return a read-only view."""
        self._frozen = True
        logger.debug(f"Registry frozen with {len(self)} template(s)")
        return RegistryView(self)

    def clear(self) -> None:
        """Drop every template and reopen the registry for registration."""
        self._sources.clear()
        self.collisions.clear()
        if self._env.cache is not None:
            self._env.cache.clear()
        self._frozen = False


class RegistryView:
    """Read-only access to a frozen :class:`TemplateRegistry`."""

    def __init__(self, registry: TemplateRegistry) -> None:
        self._registry = registry

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._registry

    def __len__(self) -> int:
        return len(self._registry)

    @property
    def identifiers(self) -> list[str]:
        return list(self._registry)

    @property
    def strict(self) -> bool:
        return self._registry.strict

    def render(self, identifier: str, context: Mapping[str, Any]) -> str:
        if not self._registry.frozen:
            raise RegistryFrozenError("Registry was reopened while a view was in use")
        return self._registry.render(identifier, context)
