"""HTML renderer — writes a static documentation site."""

from __future__ import annotations

import asyncio
import logging
import re
from pathlib import Path
from typing import TYPE_CHECKING

from docrender.exceptions import RenderError
from docrender.render.base import BaseRenderer
from docrender.render.templates import TemplateEngine

if TYPE_CHECKING:
    from docrender.config import DocrenderConfig
    from docrender.types import ProjectReflection, Reflection

__all__ = ["HtmlRenderer"]

logger = logging.getLogger(__name__)

DEFAULT_HTML_OUT = "docs"

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_.-]+")


def page_url(reflection: Reflection) -> str:
    """Relative URL of the page generated for a top-level reflection."""
    kind = _UNSAFE_CHARS.sub("_", reflection.kind.lower()) or "other"
    name = _UNSAFE_CHARS.sub("_", reflection.name) or str(reflection.id)
    return f"{kind}/{name}.{reflection.id}.html"


class HtmlRenderer(BaseRenderer):
    """Renders ``index.html`` plus one page per top-level reflection.

    Output goes to ``[html] out``. When invoked as the fallback renderer
    with no output directory configured, writes to ``./docs``.
    """

    name = "html"

    def __init__(self, config: DocrenderConfig) -> None:
        super().__init__(config)
        self._engine: TemplateEngine | None = None

    def is_enabled(self) -> bool:
        return bool(self.config.html.out)

    @property
    def output_dir(self) -> Path:
        return Path(self.config.html.out or DEFAULT_HTML_OUT)

    @property
    def engine(self) -> TemplateEngine:
        if self._engine is None:
            override = self.config.html.templates
            self._engine = TemplateEngine(Path(override) if override else None)
        return self._engine

    def build_pages(self, project: ProjectReflection) -> dict[str, str]:
        """Render every page. Returns relative path → HTML text."""
        title = self.config.html.title or self.config.project.name or project.name
        version = self.config.project.version or project.version
        nav = [(child.name, child.kind, page_url(child)) for child in project.children]

        pages = {
            "index.html": self.engine.render(
                "index.html.j2",
                title=title,
                version=version,
                project=project,
                nav=nav,
                root="",
            )
        }
        for child in project.children:
            pages[page_url(child)] = self.engine.render(
                "reflection.html.j2",
                title=title,
                version=version,
                reflection=child,
                nav=nav,
                root="../",
            )
        return pages

    async def render(self, project: ProjectReflection) -> None:
        pages = self.build_pages(project)
        out = self.output_dir
        if self.config.html.clean_output_dir:
            _check_clean_target(out)
        try:
            await asyncio.to_thread(self._write_pages, out, pages)
        except OSError as e:
            raise RenderError(f"Could not write HTML output to {out}: {e}") from e
        logger.info("HTML generated at %s (%d pages)", out, len(pages))

    def _write_pages(self, out: Path, pages: dict[str, str]) -> None:
        for rel_path, text in pages.items():
            path = out / rel_path
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(text, encoding="utf-8")
        if self.config.html.clean_output_dir:
            _remove_stale_pages(out, set(pages))


def _check_clean_target(out: Path) -> None:
    """Refuse to clean a directory that holds the working directory.

    Raises:
        RenderError: If ``out`` is a filesystem root, the working directory,
            or one of its ancestors.
    """
    resolved = out.resolve()
    cwd = Path.cwd().resolve()
    if resolved == Path(resolved.anchor) or resolved == cwd or resolved in cwd.parents:
        raise RenderError(
            f"Refusing to clean HTML output directory {out}: it contains the working directory"
        )


def _remove_stale_pages(out: Path, keep: set[str]) -> None:
    # Only .html pages are ours; other renderers may write into the same directory.
    for path in out.rglob("*.html"):
        if path.relative_to(out).as_posix() not in keep:
            path.unlink(missing_ok=True)
            logger.debug("Removed stale page %s", path)
