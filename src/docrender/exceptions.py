"""Custom exception hierarchy for docrender."""

__all__ = [
    "ConfigError",
    "DocrenderError",
    "DuplicateRendererError",
    "ModelError",
    "PluginError",
    "RenderError",
    "UnregisteredDefaultError",
]


class DocrenderError(Exception):
    """Base exception for all docrender errors."""


class ConfigError(DocrenderError):
    """Raised when configuration loading or validation fails."""


class ModelError(DocrenderError):
    """Raised when a documentation model cannot be loaded."""


class RenderError(DocrenderError):
    """Raised by a renderer when producing its output fails."""


class PluginError(DocrenderError):
    """Raised when plugin loading or registration fails."""


class DuplicateRendererError(PluginError):
    """Raised when a renderer name is already registered."""


class UnregisteredDefaultError(PluginError):
    """Raised when promoting a renderer that is not the registered instance."""
