"""Resolution of the template and auxiliary files used to build a document.

A context always carries a template and may carry extra files taken from a
single storage folder (no subdirectories):

: Without an identifier, the built-in template is used and no files are added.
: An identifier addressing a single document uses that document as the
  template, with no extra files.
: An identifier addressing a folder contributes every file except
  ``main.tex``. When the folder holds a ``main.tex`` it becomes the template,
  otherwise the built-in template applies.
"""

from __future__ import annotations

import logging
from os import PathLike
from pathlib import Path

from .connector import (
    ConnectorError,
    DocumentConnector,
    Folder,
    NamedFile,
    SingleFile,
)
from .diagnostics import DiagnosticEmitter, ensure_emitter
from .exceptions import ResourceUnavailableError, TemplateDecodeError
from .models import MAIN_FILE, Context
from .templates import default_template, read_template_text


logger = logging.getLogger(__name__)


def _decode_template(file: NamedFile, source: str) -> str:
    try:
        return file.content.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise TemplateDecodeError(
            f"Template '{file.name}' from '{source}' is not valid UTF-8."
        ) from exc


class ContextResolver:
    """Decide the template text and auxiliary file set for a build."""

    def __init__(
        self,
        connector: DocumentConnector | None = None,
        *,
        emitter: DiagnosticEmitter | None = None,
    ) -> None:
        self.connector = connector
        self.emitter = ensure_emitter(emitter)

    def resolve_default(self) -> Context:
        """Return the built-in template without auxiliary files."""
        return Context(default_template(), {})

    def resolve_from_local_template(self, path: str | PathLike[str]) -> Context:
        """Use the text file at ``path`` as the template."""
        template_path = Path(path).expanduser()
        try:
            template = read_template_text(template_path)
        except UnicodeDecodeError as exc:
            raise TemplateDecodeError(f"Template '{template_path}' is not valid UTF-8.") from exc
        except OSError as exc:
            raise ResourceUnavailableError(
                f"Unable to read template '{template_path}': {exc.strerror or exc}"
            ) from exc

        self.emitter.event(
            "context_resolved",
            {"source": str(template_path), "origin": "local", "files": 0},
        )
        return Context(template, {})

    def resolve_from_external_id(self, identifier: str) -> Context:
        """Resolve a storage identifier addressing a document or a folder."""
        if self.connector is None:
            raise ResourceUnavailableError(
                f"Cannot resolve '{identifier}': no document storage connector is configured."
            )

        try:
            response = self.connector.get_file_or_directory(identifier)
        except ConnectorError as exc:
            raise ResourceUnavailableError(f"Unable to fetch '{identifier}': {exc}") from exc

        match response:
            case SingleFile(file=file):
                context = Context(_decode_template(file, identifier), {})
                origin = "document"
            case Folder(files=entries):
                context = self._context_from_folder(identifier, entries)
                origin = "folder"
            case _:
                raise TypeError(
                    f"Unsupported connector response {type(response).__name__!r} "
                    f"for '{identifier}'."
                )

        logger.debug("Resolved '%s' as %s", identifier, origin)
        self.emitter.event(
            "context_resolved",
            {"source": identifier, "origin": origin, "files": len(context.files)},
        )
        return context

    def _context_from_folder(self, identifier: str, entries: tuple[NamedFile, ...]) -> Context:
        candidate: NamedFile | None = None
        files: dict[str, bytes] = {}
        for entry in entries:
            if entry.name == MAIN_FILE:
                candidate = entry
            else:
                files[entry.name] = entry.content

        if candidate is None:
            self.emitter.event("template_fallback", {"source": identifier})
            template = default_template()
        else:
            template = _decode_template(candidate, identifier)
        return Context(template, files)


__all__ = ["ContextResolver"]
