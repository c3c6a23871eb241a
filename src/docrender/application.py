"""Host application for docrender.

Owns the renderer registry for one run: builds it from the configuration,
lets plugins extend it, then triggers the single render pass.
"""

from __future__ import annotations

import asyncio
import importlib
import logging
from importlib.metadata import entry_points
from typing import TYPE_CHECKING, Any

from docrender.config import DocrenderConfig
from docrender.exceptions import DocrenderError, PluginError
from docrender.registry import RendererRegistry

if TYPE_CHECKING:
    from docrender.registry import RenderOutcome
    from docrender.types import ProjectReflection

__all__ = ["PLUGIN_ENTRY_POINT_GROUP", "Application"]

logger = logging.getLogger(__name__)

PLUGIN_ENTRY_POINT_GROUP = "docrender.plugins"


class Application:
    """Wires configuration, plugins, and the renderer registry together.

    A plugin is a module (or entry point target) exposing ``load(app)``.
    ``load`` typically calls ``app.renderers.register(...)`` and may call
    ``app.renderers.set_default(...)``.

    Usage::

        app = Application(load_config(path))
        app.load_plugins()
        outcomes = app.render(project)
    """

    def __init__(
        self,
        config: DocrenderConfig | None = None,
        *,
        logger: logging.Logger | None = None,
    ) -> None:
        self.config = config or DocrenderConfig()
        self.logger = logger if logger is not None else logging.getLogger("docrender")
        self.renderers = RendererRegistry(self.config, logger=self.logger)
        self._loaded_plugins: list[str] = []

    @property
    def loaded_plugins(self) -> list[str]:
        return list(self._loaded_plugins)

    def load_plugins(self) -> list[str]:
        """Load configured plugin modules and installed entry points.

        Returns:
            Names of the plugins that were loaded.

        Raises:
            PluginError: If a plugin cannot be imported or its ``load``
                hook fails.
        """
        for module_name in self.config.plugins.modules:
            try:
                module = importlib.import_module(module_name)
            except ImportError as e:
                raise PluginError(f"Could not import plugin module {module_name!r}: {e}") from e
            self._call_hook(module_name, module)

        if self.config.plugins.entry_points:
            for ep in entry_points(group=PLUGIN_ENTRY_POINT_GROUP):
                try:
                    target = ep.load()
                except Exception as e:
                    raise PluginError(f"Could not load plugin entry point {ep.name!r}: {e}") from e
                self._call_hook(ep.name, target)

        return self.loaded_plugins

    def _call_hook(self, name: str, target: Any) -> None:
        hook = target if callable(target) else getattr(target, "load", None)
        if hook is None:
            raise PluginError(f"Plugin {name!r} has no load(app) function")

        try:
            hook(self)
        except DocrenderError:
            raise
        except Exception as e:
            raise PluginError(f"Plugin {name!r} failed to load: {e}") from e

        self._loaded_plugins.append(name)
        logger.info("Loaded plugin %s", name)

    async def render_async(self, project: ProjectReflection) -> list[RenderOutcome]:
        """Run the render pass inside an existing event loop."""
        return await self.renderers.render(project)

    def render(self, project: ProjectReflection) -> list[RenderOutcome]:
        """Run the render pass to completion. Never raises for renderer failures."""
        outcomes = asyncio.run(self.renderers.render(project))
        failed = [o.renderer for o in outcomes if not o.ok]
        if failed:
            logger.warning("Renderers failed: %s", ", ".join(failed))
        return outcomes
