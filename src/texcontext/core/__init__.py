"""Core context resolution and rendering primitives."""

from __future__ import annotations

from .connector import (
    DocumentAccessDeniedError,
    DocumentConnector,
    DocumentNotFoundError,
    Folder,
    NamedFile,
    SingleFile,
)
from .exceptions import (
    ArtifactWriteError,
    ResourceUnavailableError,
    TemplateDecodeError,
    TemplateResourceError,
    TexContextError,
)
from .models import MAIN_FILE, Context, DocumentPayload, RenderedOutput
from .renderer import PlaceholderTokens, Renderer, render
from .resolver import ContextResolver
from .templates import default_template


__all__ = [
    "MAIN_FILE",
    "ArtifactWriteError",
    "Context",
    "ContextResolver",
    "DocumentAccessDeniedError",
    "DocumentConnector",
    "DocumentNotFoundError",
    "DocumentPayload",
    "Folder",
    "NamedFile",
    "PlaceholderTokens",
    "RenderedOutput",
    "Renderer",
    "ResourceUnavailableError",
    "SingleFile",
    "TemplateDecodeError",
    "TemplateResourceError",
    "TexContextError",
    "default_template",
    "render",
]
