"""Access to the template packaged with texcontext."""

from __future__ import annotations

import logging
from pathlib import Path
from threading import RLock

from .exceptions import TemplateResourceError


logger = logging.getLogger(__name__)

_PACKAGE_ROOT = Path(__file__).resolve().parent.parent
DEFAULT_TEMPLATE_PATH = _PACKAGE_ROOT / "templates" / "default_template.tex"

_DEFAULT_TEMPLATE: str | None = None
_LOCK: RLock = RLock()


def normalise_newlines(text: str) -> str:
    """Convert ``\\r\\n`` and ``\\r`` to ``\\n`` and drop one trailing line break.

    Only line terminators are touched; form feeds and Unicode separators are
    part of the template text.
    """
    normalised = text.replace("\r\n", "\n").replace("\r", "\n")
    return normalised[:-1] if normalised.endswith("\n") else normalised


def read_template_text(path: Path) -> str:
    """Read a template file as UTF-8 with normalised line endings."""
    return normalise_newlines(path.read_bytes().decode("utf-8"))


def default_template() -> str:
    """Return the built-in template, loading it on first use."""
    global _DEFAULT_TEMPLATE
    with _LOCK:
        if _DEFAULT_TEMPLATE is None:
            try:
                _DEFAULT_TEMPLATE = read_template_text(DEFAULT_TEMPLATE_PATH)
            except (OSError, UnicodeDecodeError) as exc:
                raise TemplateResourceError(
                    f"Built-in template '{DEFAULT_TEMPLATE_PATH.name}' cannot be loaded: {exc}"
                ) from exc
            logger.debug("Loaded built-in template from %s", DEFAULT_TEMPLATE_PATH)
        return _DEFAULT_TEMPLATE


__all__ = [
    "DEFAULT_TEMPLATE_PATH",
    "default_template",
    "normalise_newlines",
    "read_template_text",
]
