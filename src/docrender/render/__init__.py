"""Renderers — the renderer contract and the built-in html/json output."""

from docrender.render.base import BaseRenderer, Renderer
from docrender.render.html import HtmlRenderer
from docrender.render.serializer import JsonSerializer
from docrender.render.templates import TemplateEngine

__all__ = [
    "BaseRenderer",
    "HtmlRenderer",
    "JsonSerializer",
    "Renderer",
    "TemplateEngine",
]
