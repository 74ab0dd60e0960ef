"""Immutable value objects exchanged between resolution and rendering.

Context
: Template text plus a flat mapping of auxiliary files. The reserved
  ``main.tex`` name never appears among the auxiliary files.

DocumentPayload
: Title, abstract and body injected into a template.

RenderedOutput
: Final file set handed to packaging. Always holds ``main.tex``.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType


MAIN_FILE = "main.tex"


def _freeze_files(files: Mapping[str, bytes] | None) -> Mapping[str, bytes]:
    frozen: dict[str, bytes] = {}
    for name, content in (files or {}).items():
        if not isinstance(content, (bytes, bytearray, memoryview)):
            raise TypeError(f"File '{name}' must hold bytes, got {type(content).__name__}.")
        frozen[str(name)] = bytes(content)
    return MappingProxyType(frozen)


@dataclass(frozen=True, slots=True)
class Context:
    """Resolved template text and the auxiliary files shipped alongside it."""

    template: str
    files: Mapping[str, bytes] = field(default_factory=dict)

    def __post_init__(self) -> None:
        files = _freeze_files(self.files)
        if MAIN_FILE in files:
            raise ValueError(f"Auxiliary files must not contain the reserved '{MAIN_FILE}' entry.")
        object.__setattr__(self, "files", files)


@dataclass(frozen=True, slots=True)
class DocumentPayload:
    """Content injected into the template placeholders."""

    title: str
    abstract: str
    body: str


@dataclass(frozen=True, slots=True)
class RenderedOutput:
    """Rendered file set including the generated main file."""

    title: str
    files: Mapping[str, bytes]

    def __post_init__(self) -> None:
        files = _freeze_files(self.files)
        if MAIN_FILE not in files:
            raise ValueError(f"Rendered output is missing the '{MAIN_FILE}' entry.")
        object.__setattr__(self, "files", files)

    @property
    def main_file(self) -> str:
        return MAIN_FILE

    @property
    def main_file_content(self) -> bytes:
        """Return the raw bytes of the rendered main file."""
        return self.files[MAIN_FILE]

    @property
    def main_file_string(self) -> str:
        """Return the rendered main file decoded as UTF-8."""
        return self.main_file_content.decode("utf-8")


__all__ = ["MAIN_FILE", "Context", "DocumentPayload", "RenderedOutput"]
