from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import pytest

from texcontext.core.connector import (
    DocumentAccessDeniedError,
    DocumentNotFoundError,
    Folder,
    NamedFile,
    SingleFile,
)
from texcontext.core.exceptions import ResourceUnavailableError, TemplateDecodeError
from texcontext.core.models import MAIN_FILE
from texcontext.core.resolver import ContextResolver
from texcontext.core.templates import default_template


class FakeConnector:
    def __init__(self, items: Mapping[str, SingleFile | Folder]) -> None:
        self.items = dict(items)
        self.calls: list[str] = []

    def get_file_or_directory(self, identifier: str) -> SingleFile | Folder:
        self.calls.append(identifier)
        if identifier == "forbidden":
            raise DocumentAccessDeniedError("denied")
        try:
            return self.items[identifier]
        except KeyError:
            raise DocumentNotFoundError(identifier) from None


class RecordingEmitter:
    debug_enabled = False

    def __init__(self) -> None:
        self.events: list[tuple[str, dict[str, Any]]] = []

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        return

    def error(self, message: str, exc: BaseException | None = None) -> None:
        return

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        self.events.append((name, dict(payload)))


def test_resolve_default_uses_builtin_template() -> None:
    context = ContextResolver().resolve_default()

    assert context.template == default_template()
    assert dict(context.files) == {}
    for token in (r"\TITLE", r"\ABSTRACT", r"\CONTENT"):
        assert token in context.template


def test_default_template_is_cached() -> None:
    assert default_template() is default_template()


def test_folder_with_main_tex() -> None:
    connector = FakeConnector(
        {
            "folder": Folder.of(
                [NamedFile(MAIN_FILE, b"T \\CONTENT"), NamedFile("fig.png", b"\x89PNG")]
            )
        }
    )

    context = ContextResolver(connector).resolve_from_external_id("folder")

    assert context.template == "T \\CONTENT"
    assert dict(context.files) == {"fig.png": b"\x89PNG"}


def test_folder_without_main_tex_falls_back_to_default() -> None:
    emitter = RecordingEmitter()
    connector = FakeConnector(
        {"folder": Folder.of([NamedFile("a.bib", b"@a"), NamedFile("Main.tex", b"upper")])}
    )

    context = ContextResolver(connector, emitter=emitter).resolve_from_external_id("folder")

    assert context.template == default_template()
    assert dict(context.files) == {"a.bib": b"@a", "Main.tex": b"upper"}
    assert ("template_fallback", {"source": "folder"}) in emitter.events


def test_empty_folder_yields_default_context() -> None:
    connector = FakeConnector({"empty": Folder()})
    context = ContextResolver(connector).resolve_from_external_id("empty")
    assert context.template == default_template()
    assert dict(context.files) == {}


def test_single_document_is_the_template() -> None:
    connector = FakeConnector({"doc": SingleFile(NamedFile("notes.tex", "\u00e9 \\TITLE".encode()))})

    context = ContextResolver(connector).resolve_from_external_id("doc")

    assert context.template == "\u00e9 \\TITLE"
    assert dict(context.files) == {}


def test_single_document_named_main_tex() -> None:
    connector = FakeConnector({"doc": SingleFile(NamedFile(MAIN_FILE, b"main"))})
    context = ContextResolver(connector).resolve_from_external_id("doc")
    assert context.template == "main"
    assert dict(context.files) == {}


def test_missing_identifier_raises_resource_unavailable() -> None:
    resolver = ContextResolver(FakeConnector({}))
    with pytest.raises(ResourceUnavailableError) as excinfo:
        resolver.resolve_from_external_id("nope")
    assert isinstance(excinfo.value.__cause__, DocumentNotFoundError)


def test_access_denied_raises_resource_unavailable() -> None:
    resolver = ContextResolver(FakeConnector({}))
    with pytest.raises(ResourceUnavailableError):
        resolver.resolve_from_external_id("forbidden")


def test_invalid_utf8_template_raises_decode_error() -> None:
    connector = FakeConnector({"folder": Folder.of([NamedFile(MAIN_FILE, b"\xff\xfe\xfa")])})
    with pytest.raises(TemplateDecodeError):
        ContextResolver(connector).resolve_from_external_id("folder")


def test_invalid_utf8_auxiliary_file_is_kept_as_bytes() -> None:
    connector = FakeConnector({"folder": Folder.of([NamedFile("blob.bin", b"\xff\xfe")])})
    context = ContextResolver(connector).resolve_from_external_id("folder")
    assert context.files["blob.bin"] == b"\xff\xfe"


def test_external_id_without_connector() -> None:
    with pytest.raises(ResourceUnavailableError, match="connector"):
        ContextResolver().resolve_from_external_id("anything")


def test_local_template(tmp_path: Path) -> None:
    template = tmp_path / "paper.tex"
    template.write_bytes(b"\\TITLE\r\n\\CONTENT\n")
    emitter = RecordingEmitter()

    context = ContextResolver(emitter=emitter).resolve_from_local_template(template)

    assert context.template == "\\TITLE\n\\CONTENT"
    assert dict(context.files) == {}
    assert emitter.events[0][0] == "context_resolved"


def test_local_template_missing(tmp_path: Path) -> None:
    with pytest.raises(ResourceUnavailableError):
        ContextResolver().resolve_from_local_template(tmp_path / "missing.tex")


def test_local_template_directory_is_unreadable(tmp_path: Path) -> None:
    with pytest.raises(ResourceUnavailableError):
        ContextResolver().resolve_from_local_template(tmp_path)


def test_local_template_invalid_utf8(tmp_path: Path) -> None:
    template = tmp_path / "latin1.tex"
    template.write_bytes("caf\u00e9".encode("latin-1"))
    with pytest.raises(TemplateDecodeError):
        ContextResolver().resolve_from_local_template(template)


def test_resolution_emits_context_event() -> None:
    emitter = RecordingEmitter()
    connector = FakeConnector({"folder": Folder.of([NamedFile("x.png", b"1")])})

    ContextResolver(connector, emitter=emitter).resolve_from_external_id("folder")

    assert (
        "context_resolved",
        {"source": "folder", "origin": "folder", "files": 1},
    ) in emitter.events


def test_local_template_keeps_form_feeds_and_unicode_separators(tmp_path: Path) -> None:
    template = tmp_path / "paged.tex"
    template.write_bytes("a\fb c\u0085d\\TITLE".encode())

    context = ContextResolver().resolve_from_local_template(template)

    assert context.template == "a\fb c\u0085d\\TITLE"


def test_local_template_normalises_only_line_terminators(tmp_path: Path) -> None:
    template = tmp_path / "mixed.tex"
    template.write_bytes(b"one\r\ntwo\rthree\n\nfour\n")

    context = ContextResolver().resolve_from_local_template(template)

    assert context.template == "one\ntwo\nthree\n\nfour"
