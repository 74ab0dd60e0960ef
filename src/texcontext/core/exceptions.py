"""Custom exception hierarchy for context resolution and rendering."""

from __future__ import annotations


class TexContextError(RuntimeError):
    """Base exception for document preparation failures."""


class ResourceUnavailableError(TexContextError):
    """Raised when an identifier or local path cannot be resolved or read."""


class TemplateDecodeError(TexContextError):
    """Raised when template bytes are not valid UTF-8."""


class TemplateResourceError(TexContextError):
    """Raised when the packaged default template is missing or unreadable."""


class ArtifactWriteError(TexContextError):
    """Raised when a rendered file set cannot be written to disk."""


def exception_messages(exc: BaseException) -> list[str]:
    """Return the collected message chain for an exception and its causes."""
    messages: list[str] = []
    visited: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in visited:
        visited.add(id(current))
        text = str(current).strip()
        if text:
            first_line = text.splitlines()[0].strip()
            if first_line:
                messages.append(first_line)
        current = current.__cause__ or current.__context__
    return messages


def exception_hint(exc: BaseException) -> str | None:
    """Return the most specific message available for an exception chain."""
    messages = exception_messages(exc)
    return messages[-1] if messages else None


__all__ = [
    "ArtifactWriteError",
    "ResourceUnavailableError",
    "TemplateDecodeError",
    "TemplateResourceError",
    "TexContextError",
    "exception_hint",
    "exception_messages",
]
