from __future__ import annotations

from pathlib import Path

import pytest

from texcontext.core.artifacts import default_output_dir, write_rendered_output
from texcontext.core.exceptions import ArtifactWriteError
from texcontext.core.models import MAIN_FILE, RenderedOutput


def _output(**extra: bytes) -> RenderedOutput:
    return RenderedOutput("Paper", {MAIN_FILE: b"\\documentclass{article}", **extra})


def test_write_creates_directory_and_files(tmp_path: Path) -> None:
    target = tmp_path / "out" / "paper"

    written = write_rendered_output(_output(**{"fig.png": b"png"}), target)

    assert sorted(path.name for path in written) == ["fig.png", MAIN_FILE]
    assert (target / MAIN_FILE).read_bytes() == b"\\documentclass{article}"
    assert (target / "fig.png").read_bytes() == b"png"


def test_existing_files_are_protected(tmp_path: Path) -> None:
    (tmp_path / MAIN_FILE).write_text("old", encoding="utf-8")

    with pytest.raises(ArtifactWriteError, match="already exists"):
        write_rendered_output(_output(), tmp_path)
    assert (tmp_path / MAIN_FILE).read_text(encoding="utf-8") == "old"

    write_rendered_output(_output(), tmp_path, overwrite=True)
    assert (tmp_path / MAIN_FILE).read_bytes() == b"\\documentclass{article}"


def test_nested_names_are_rejected(tmp_path: Path) -> None:
    with pytest.raises(ArtifactWriteError, match="nested"):
        write_rendered_output(_output(**{"../escape.txt": b"x"}), tmp_path / "out")
    assert not (tmp_path / "escape.txt").exists()


def test_default_output_dir_slugifies_title(tmp_path: Path) -> None:
    assert default_output_dir("A Study of Graphs!", tmp_path) == tmp_path / "a-study-of-graphs"
    assert default_output_dir("", tmp_path) == tmp_path / "document"
    assert default_output_dir(None, tmp_path) == tmp_path / "document"
