"""Jinja2 template engine for the html renderer.

Loads templates from an optional user-override directory and the built-in
templates shipped in ``docrender/templates/``. Overrides take precedence.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import jinja2

from docrender.exceptions import RenderError

__all__ = ["TemplateEngine"]

logger = logging.getLogger(__name__)


class TemplateEngine:
    """Jinja2 template engine with built-in and user-override support.

    Template search order:
      1. ``override_dir`` (user overrides, optional)
      2. ``docrender/templates/`` (built-in, always present)

    Args:
        override_dir: Directory whose templates shadow the built-in ones.
    """

    def __init__(self, override_dir: Path | None = None) -> None:
        from importlib.resources import files

        search_paths: list[str] = []
        self._override_dir: Path | None = None

        if override_dir is not None:
            self._override_dir = override_dir
            if override_dir.is_dir():
                search_paths.append(str(override_dir))
                logger.info("User template overrides enabled: %s", override_dir)
            else:
                logger.warning("Template override directory %s does not exist", override_dir)

        builtin_dir = Path(str(files("docrender") / "templates"))
        if not builtin_dir.is_dir():
            logger.debug("Expected template dir at: %s", builtin_dir)
            raise RenderError(
                "Built-in template directory not found, installation may be corrupted"
            )
        search_paths.append(str(builtin_dir))

        self._loader = jinja2.FileSystemLoader(search_paths)
        self._env = jinja2.Environment(
            loader=self._loader,
            autoescape=jinja2.select_autoescape(["html", "html.j2"]),
            undefined=jinja2.StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def render(self, template_name: str, **context: Any) -> str:
        """Render a template with the given context.

        Raises:
            RenderError: If the template is not found or rendering fails.
        """
        try:
            template = self._env.get_template(template_name)
        except jinja2.TemplateNotFound as e:
            raise RenderError(f"Template not found: {template_name}") from e

        try:
            return template.render(**context)
        except jinja2.TemplateError as e:
            raise RenderError(f"Failed to render template {template_name}: {e}") from e

    def list_templates(self) -> list[str]:
        """List all available template names (built-in + overrides)."""
        return sorted(self._loader.list_templates())

    def is_overridden(self, template_name: str) -> bool:
        """Check if a template has a user override."""
        if self._override_dir is None:
            return False
        return (self._override_dir / template_name).is_file()
