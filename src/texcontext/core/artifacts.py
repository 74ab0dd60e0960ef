"""Persist rendered file sets to disk."""

from __future__ import annotations

import logging
from pathlib import Path, PurePath

from slugify import slugify

from .diagnostics import DiagnosticEmitter, ensure_emitter
from .exceptions import ArtifactWriteError
from .models import RenderedOutput


logger = logging.getLogger(__name__)

_FALLBACK_FOLDER = "document"


def default_output_dir(title: str | None, base: Path | None = None) -> Path:
    """Return an output folder derived from ``title``."""
    slug = slugify(title or "", separator="-") or _FALLBACK_FOLDER
    return (base or Path.cwd()) / slug


def _check_name(name: str) -> None:
    pure = PurePath(name)
    if not name or pure.name != name or name in {".", ".."}:
        raise ArtifactWriteError(f"Refusing to write nested or invalid file name '{name}'.")


def write_rendered_output(
    output: RenderedOutput,
    directory: Path,
    *,
    overwrite: bool = False,
    emitter: DiagnosticEmitter | None = None,
) -> list[Path]:
    """Write every file of ``output`` into ``directory`` and return the paths."""
    emitter = ensure_emitter(emitter)
    directory = Path(directory).expanduser()

    for name in output.files:
        _check_name(name)
        if not overwrite and (directory / name).exists():
            raise ArtifactWriteError(
                f"'{directory / name}' already exists; use overwrite to replace it."
            )

    written: list[Path] = []
    try:
        directory.mkdir(parents=True, exist_ok=True)
        for name, content in sorted(output.files.items()):
            destination = directory / name
            destination.write_bytes(content)
            written.append(destination)
    except OSError as exc:
        raise ArtifactWriteError(f"Unable to write artifacts to '{directory}': {exc}") from exc

    logger.debug("Wrote %s", ", ".join(path.name for path in written))
    emitter.event("artifacts_written", {"directory": str(directory), "files": len(written)})
    return written


__all__ = ["default_output_dir", "write_rendered_output"]
