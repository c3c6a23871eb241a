"""Documentation model handed to renderers.

Frozen dataclasses built upstream and shared, read-only, by every renderer
in a render pass:
  ProjectReflection → Reflection → Reflection ...
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from docrender.exceptions import ModelError

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

__all__ = [
    "Comment",
    "ProjectReflection",
    "Reflection",
    "SourceReference",
    "load_project",
    "project_from_dict",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Comment:
    """Doc comment attached to a reflection."""

    summary: str = ""
    tags: tuple[tuple[str, str], ...] = ()


@dataclass(frozen=True)
class SourceReference:
    """Where a reflection was declared."""

    file_name: str
    line: int = 0


@dataclass(frozen=True)
class Reflection:
    """A documented declaration (module, class, function, ...)."""

    id: int
    name: str
    kind: str
    comment: Comment | None = None
    children: tuple[Reflection, ...] = ()
    sources: tuple[SourceReference, ...] = ()

    def walk(self) -> Iterator[Reflection]:
        """Yield this reflection and all descendants, depth first."""
        yield self
        for child in self.children:
            yield from child.walk()


@dataclass(frozen=True)
class ProjectReflection:
    """Root of the documentation model."""

    name: str
    version: str = ""
    readme: str = ""
    children: tuple[Reflection, ...] = ()

    def walk(self) -> Iterator[Reflection]:
        """Yield every reflection in the project, depth first."""
        for child in self.children:
            yield from child.walk()


def _comment_from_dict(data: Any) -> Comment | None:
    if not data:
        return None
    if not isinstance(data, dict):
        raise ModelError(f"Malformed documentation model: comment {data!r} is not an object")
    tags = tuple((str(tag), str(text)) for tag, text in data.get("tags", ()))
    return Comment(summary=data.get("summary", ""), tags=tags)


def _reflection_from_dict(data: Any) -> Reflection:
    if not isinstance(data, dict):
        raise ModelError(f"Malformed documentation model: reflection {data!r} is not an object")
    return Reflection(
        id=int(data["id"]),
        name=data["name"],
        kind=data["kind"],
        comment=_comment_from_dict(data.get("comment")),
        children=tuple(_reflection_from_dict(c) for c in data.get("children", ())),
        sources=tuple(
            SourceReference(file_name=s["file_name"], line=int(s.get("line", 0)))
            for s in data.get("sources", ())
        ),
    )


def project_from_dict(data: dict[str, Any]) -> ProjectReflection:
    """Build a :class:`ProjectReflection` from its serialized dict form.

    Raises:
        ModelError: If required keys are missing or have the wrong type.
    """
    try:
        return ProjectReflection(
            name=data["name"],
            version=data.get("version", ""),
            readme=data.get("readme", ""),
            children=tuple(_reflection_from_dict(c) for c in data.get("children", ())),
        )
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        raise ModelError(f"Malformed documentation model: {e!r}") from e


def load_project(path: Path) -> ProjectReflection:
    """Load a documentation model from a JSON file.

    The format is the one written by the ``json`` renderer.
    """
    if not path.exists():
        raise ModelError(f"Model file not found: {path}")

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        logger.error("Failed to load model from %s: %s", path, e)
        raise ModelError(f"Failed to load model from {path}: {e}") from e

    if not isinstance(data, dict):
        raise ModelError(f"Model file {path} must contain a JSON object")

    project = project_from_dict(data)
    logger.info("Loaded model %r from %s", project.name, path)
    return project
