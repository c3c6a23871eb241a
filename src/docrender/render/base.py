"""Renderer contract and shared base class for the built-in renderers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from docrender.config import DocrenderConfig
    from docrender.types import ProjectReflection

__all__ = ["BaseRenderer", "Renderer"]


@runtime_checkable
class Renderer(Protocol):
    """Anything that turns a documentation model into output.

    Plugins do not need to inherit from anything; an object exposing these
    three members can be registered.
    """

    @property
    def name(self) -> str:
        """Unique name. The built-in renderers use ``html`` and ``json``."""
        ...

    def is_enabled(self) -> bool:
        """Return True if the user configured this renderer's output."""
        ...

    async def render(self, project: ProjectReflection) -> None:
        """Generate output for ``project``.

        Exceptions raised here are caught and reported by the registry.
        This may be called even when :meth:`is_enabled` returns False if
        the renderer is the registry's default.

        Args:
            project: The documentation model. Must not be modified.
        """
        ...


class BaseRenderer(ABC):
    """Base class for config-driven renderers.

    Subclasses set :attr:`name` and implement :meth:`is_enabled` and
    :meth:`render`.
    """

    name: str = ""

    def __init__(self, config: DocrenderConfig) -> None:
        self.config = config

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"

    @abstractmethod
    def is_enabled(self) -> bool:
        """Return True if this renderer's output option is set."""

    @abstractmethod
    async def render(self, project: ProjectReflection) -> None:
        """Write this renderer's output for ``project``.

        Raises:
            RenderError: If rendering or writing output fails.
        """
