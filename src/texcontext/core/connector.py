"""Contract consumed from external document-storage providers."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Protocol, runtime_checkable


STORAGE_ENV_VAR = "TEXCONTEXT_STORAGE"

class ConnectorError(RuntimeError):
    """Base class for failures signalled by a storage connector."""


class DocumentNotFoundError(ConnectorError):
    """Raised when an identifier does not address any document or folder."""


class DocumentAccessDeniedError(ConnectorError):
    """Raised when the provider refuses access to the addressed item."""


@dataclass(frozen=True, slots=True)
class NamedFile:
    """A single file returned by a connector."""

    name: str
    content: bytes


@dataclass(frozen=True, slots=True)
class SingleFile:
    """Response for an identifier addressing one document."""

    file: NamedFile


@dataclass(frozen=True, slots=True)
class Folder:
    """Response for an identifier addressing a folder (immediate files only)."""

    files: tuple[NamedFile, ...] = ()

    @classmethod
    def of(cls, files: Iterable[NamedFile]) -> Folder:
        return cls(tuple(files))


ConnectorResponse = SingleFile | Folder


@runtime_checkable
class DocumentConnector(Protocol):
    """Interface implemented by document-storage providers."""

    def get_file_or_directory(self, identifier: str) -> ConnectorResponse: ...


__all__ = [
    "STORAGE_ENV_VAR",
    "ConnectorError",
    "ConnectorResponse",
    "DocumentAccessDeniedError",
    "DocumentConnector",
    "DocumentNotFoundError",
    "Folder",
    "NamedFile",
    "SingleFile",
]
