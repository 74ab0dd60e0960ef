from __future__ import annotations

import pytest

from texcontext.core.models import MAIN_FILE, Context, DocumentPayload, RenderedOutput


def test_context_rejects_reserved_main_file() -> None:
    with pytest.raises(ValueError, match="main.tex"):
        Context("tpl", {MAIN_FILE: b"x"})


def test_context_copies_files_and_is_read_only() -> None:
    source = {"fig.png": b"\x89PNG"}
    context = Context("tpl", source)

    source["other.txt"] = b"late"
    assert dict(context.files) == {"fig.png": b"\x89PNG"}

    with pytest.raises(TypeError):
        context.files["new.txt"] = b"nope"  # type: ignore[index]


def test_context_is_frozen() -> None:
    context = Context("tpl")
    with pytest.raises(AttributeError):
        context.template = "changed"  # type: ignore[misc]
    assert dict(context.files) == {}


def test_context_rejects_non_bytes_content() -> None:
    with pytest.raises(TypeError, match="bytes"):
        Context("tpl", {"notes.txt": "text"})  # type: ignore[dict-item]


def test_rendered_output_accessors() -> None:
    output = RenderedOutput("Paper", {MAIN_FILE: "caf\u00e9".encode(), "a.bib": b"@misc{}"})

    assert output.main_file == "main.tex"
    assert output.main_file_content == "caf\u00e9".encode()
    assert output.main_file_string == "caf\u00e9"


def test_rendered_output_requires_main_file() -> None:
    with pytest.raises(ValueError, match="main.tex"):
        RenderedOutput("Paper", {"a.bib": b""})


def test_document_payload_is_frozen() -> None:
    doc = DocumentPayload(title="T", abstract="A", body="B")
    with pytest.raises(AttributeError):
        doc.title = "X"  # type: ignore[misc]
