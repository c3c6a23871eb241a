"""Renderer registry for docrender.

Holds the renderers known to an application, tracks the default renderer,
and runs a render pass across every enabled renderer concurrently.
Example: ``await registry.render(project)`` → ``html`` and ``json`` output.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from docrender.exceptions import DuplicateRendererError, UnregisteredDefaultError
from docrender.render.html import HtmlRenderer
from docrender.render.serializer import JsonSerializer

if TYPE_CHECKING:
    from docrender.config import DocrenderConfig
    from docrender.render.base import Renderer
    from docrender.types import ProjectReflection

__all__ = ["RenderOutcome", "RendererRegistry"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderOutcome:
    """Result of one renderer's task in a render pass."""

    renderer: str
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


async def _run(renderer: Renderer, project: ProjectReflection) -> None:
    # A plugin may raise before returning its coroutine; keep that inside the task.
    await renderer.render(project)


class RendererRegistry:
    """Name → renderer map with a default and a concurrent render pass.

    Constructed with the built-in ``html`` (the default) and ``json``
    renderers. Plugins add their own with :meth:`register` before the
    host calls :meth:`render`.

    Usage::

        registry = RendererRegistry(config)
        registry.register(MarkdownRenderer(config))
        await registry.render(project)

    Args:
        config: Configuration handed to the built-in renderers.
        logger: Sink for per-renderer failure messages. Defaults to this
            module's logger.
    """

    def __init__(
        self,
        config: DocrenderConfig,
        *,
        logger: logging.Logger | None = None,
    ) -> None:
        self._renderers: dict[str, Renderer] = {}
        self._logger = logger if logger is not None else logging.getLogger(__name__)

        html = HtmlRenderer(config)
        self.register(html)
        self.register(JsonSerializer(config))
        self._default: Renderer = html

    def register(self, renderer: Renderer) -> None:
        """Add a renderer.

        Raises:
            DuplicateRendererError: If a renderer with the same name exists.
        """
        name = renderer.name
        if name in self._renderers:
            raise DuplicateRendererError(f"Renderer names must be unique, duplicate: {name}")

        self._renderers[name] = renderer
        logger.debug("Registered renderer %s", name)

    def set_default(self, renderer: Renderer) -> None:
        """Use ``renderer`` when no renderer is enabled.

        Raises:
            UnregisteredDefaultError: If ``renderer`` is not the instance
                registered under its name.
        """
        if self._renderers.get(renderer.name) is not renderer:
            raise UnregisteredDefaultError(
                "A renderer can only be set as the default if it has been registered, "
                f"got {renderer.name!r}"
            )
        self._default = renderer
        logger.debug("Default renderer set to %s", renderer.name)

    @property
    def default_renderer(self) -> Renderer:
        return self._default

    def get(self, name: str) -> Renderer | None:
        """Return the renderer registered as ``name``, or None."""
        return self._renderers.get(name)

    def has_renderer(self, name: str) -> bool:
        """Check whether a renderer is registered."""
        return name in self._renderers

    def list_renderers(self) -> list[str]:
        """List registered renderer names."""
        return sorted(self._renderers)

    def enabled_renderers(self) -> list[Renderer]:
        """Renderers whose ``is_enabled()`` is currently true."""
        return [r for r in self._renderers.values() if r.is_enabled()]

    def __contains__(self, name: object) -> bool:
        return name in self._renderers

    def __len__(self) -> int:
        return len(self._renderers)

    async def render(self, project: ProjectReflection) -> list[RenderOutcome]:
        """Run every enabled renderer on ``project`` and wait for all of them.

        Falls back to the default renderer if none is enabled. A failing
        renderer is logged and does not stop the others; this method does
        not raise for renderer failures.

        Returns:
            One outcome per renderer that was run.
        """
        selected = self.enabled_renderers()

        # Nothing enabled explicitly, just render the default output.
        if not selected:
            logger.info("No renderers enabled, using default %s", self._default.name)
            selected = [self._default]

        logger.info("Rendering with %s", ", ".join(r.name for r in selected))
        results = await asyncio.gather(
            *(_run(r, project) for r in selected),
            return_exceptions=True,
        )

        outcomes: list[RenderOutcome] = []
        for renderer, result in zip(selected, results, strict=True):
            if isinstance(result, BaseException):
                self._logger.error(
                    str(result) or repr(result),
                    extra={"renderer": renderer.name},
                )
                outcomes.append(RenderOutcome(renderer.name, result))
            else:
                outcomes.append(RenderOutcome(renderer.name))

        failed = sum(1 for o in outcomes if not o.ok)
        logger.info("Render pass complete: %d ok, %d failed", len(outcomes) - failed, failed)
        return outcomes
