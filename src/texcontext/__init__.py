"""Prepare LaTeX file sets from templates and document payloads."""

from __future__ import annotations

from texcontext.adapters import LocalStorageConnector
from texcontext.core import (
    MAIN_FILE,
    ArtifactWriteError,
    Context,
    ContextResolver,
    DocumentConnector,
    DocumentPayload,
    PlaceholderTokens,
    RenderedOutput,
    Renderer,
    ResourceUnavailableError,
    TemplateDecodeError,
    TemplateResourceError,
    TexContextError,
    default_template,
    render,
)
from texcontext.core.artifacts import default_output_dir, write_rendered_output
from texcontext.core.config import BuildConfig
from texcontext.version import get_version


__version__ = get_version()

__all__ = [
    "MAIN_FILE",
    "ArtifactWriteError",
    "BuildConfig",
    "Context",
    "ContextResolver",
    "DocumentConnector",
    "DocumentPayload",
    "LocalStorageConnector",
    "PlaceholderTokens",
    "RenderedOutput",
    "Renderer",
    "ResourceUnavailableError",
    "TemplateDecodeError",
    "TemplateResourceError",
    "TexContextError",
    "__version__",
    "default_output_dir",
    "default_template",
    "get_version",
    "render",
    "write_rendered_output",
]
