"""JSON renderer — writes the documentation model as a JSON tree."""

from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import TYPE_CHECKING

from docrender.exceptions import RenderError
from docrender.render.base import BaseRenderer

if TYPE_CHECKING:
    from docrender.types import ProjectReflection

__all__ = ["JsonSerializer"]

logger = logging.getLogger(__name__)

DEFAULT_JSON_OUT = "docs.json"


class JsonSerializer(BaseRenderer):
    """Serializes the whole model to ``[json] out``.

    The output is readable by :func:`docrender.types.load_project`.
    """

    name = "json"

    def is_enabled(self) -> bool:
        return bool(self.config.json.out)

    @property
    def output_path(self) -> Path:
        return Path(self.config.json.out or DEFAULT_JSON_OUT)

    def serialize(self, project: ProjectReflection) -> str:
        """Return the JSON text for ``project``."""
        data = asdict(project)
        if self.config.project.name:
            data["name"] = self.config.project.name
        if self.config.project.version:
            data["version"] = self.config.project.version
        indent = 2 if self.config.json.pretty else None
        return json.dumps(data, indent=indent, ensure_ascii=False) + "\n"

    async def render(self, project: ProjectReflection) -> None:
        path = self.output_path
        text = self.serialize(project)
        try:
            await asyncio.to_thread(self._write, path, text)
        except OSError as e:
            raise RenderError(f"Could not write JSON output to {path}: {e}") from e
        logger.info("JSON written to %s", path)

    @staticmethod
    def _write(path: Path, text: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
