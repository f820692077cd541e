"""Status page renderer module."""

from trestus.renderer.html_renderer import HtmlRenderer, load_template_data
from trestus.renderer.io import AtomicWriter
from trestus.renderer.json_renderer import JsonRenderer
from trestus.renderer.models import (
    GeneratedFile,
    RenderManifest,
    RenderOptions,
    RenderResult,
)
from trestus.renderer.writer import StatusPageWriter


__all__ = [
    "AtomicWriter",
    "GeneratedFile",
    "HtmlRenderer",
    "JsonRenderer",
    "RenderManifest",
    "RenderOptions",
    "RenderResult",
    "StatusPageWriter",
    "load_template_data",
]
