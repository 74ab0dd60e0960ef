"""Document storage backed by a local directory tree.

Identifiers are POSIX-style paths relative to the storage root. A regular file
resolves to a single document; a directory resolves to its immediate regular
files, sorted by name. Nested directories are ignored, and so are folder
entries whose links resolve outside the root.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path, PurePosixPath

from texcontext.core.connector import (
    STORAGE_ENV_VAR,
    DocumentAccessDeniedError,
    DocumentNotFoundError,
    Folder,
    NamedFile,
    SingleFile,
)


logger = logging.getLogger(__name__)


def _resolve_root(root: str | Path | None) -> Path:
    if root is not None:
        return Path(root).expanduser().resolve()
    env_root = os.environ.get(STORAGE_ENV_VAR)
    if env_root:
        return Path(env_root).expanduser().resolve()
    raise ValueError(
        f"No storage root given; pass one explicitly or set {STORAGE_ENV_VAR}."
    )


class LocalStorageConnector:
    """Serve documents and folders from a directory on disk."""

    def __init__(self, root: str | Path | None = None) -> None:
        self.root = _resolve_root(root)

    def _contains(self, path: Path) -> bool:
        return path.resolve().is_relative_to(self.root)

    def _locate(self, identifier: str) -> Path:
        relative = PurePosixPath(identifier.strip().strip("/") or ".")
        candidate = (self.root / relative).resolve()
        if not candidate.is_relative_to(self.root):
            raise DocumentAccessDeniedError(f"'{identifier}' points outside the storage root.")
        return candidate

    def _list_folder(self, target: Path) -> list[NamedFile]:
        entries: list[NamedFile] = []
        for child in sorted(target.iterdir(), key=lambda path: path.name):
            if not child.is_file():
                continue
            if not self._contains(child):
                logger.debug("Skipping %s: it resolves outside the storage root", child)
                continue
            entries.append(NamedFile(child.name, child.read_bytes()))
        return entries

    def get_file_or_directory(self, identifier: str) -> SingleFile | Folder:
        try:
            target = self._locate(identifier)
            if not target.exists():
                raise DocumentNotFoundError(f"No document or folder named '{identifier}'.")
            if target.is_dir():
                entries = self._list_folder(target)
                logger.debug("Listed %d file(s) in %s", len(entries), target)
                return Folder.of(entries)
            return SingleFile(NamedFile(target.name, target.read_bytes()))
        except PermissionError as exc:
            raise DocumentAccessDeniedError(f"Access to '{identifier}' was denied.") from exc
        except OSError as exc:
            raise DocumentNotFoundError(
                f"Unable to read '{identifier}': {exc.strerror or exc}"
            ) from exc


__all__ = ["STORAGE_ENV_VAR", "LocalStorageConnector"]
