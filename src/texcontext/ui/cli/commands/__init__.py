"""CLI command implementations exposed via ``texcontext.ui.cli``."""

from __future__ import annotations

from .render import render, select_context
from .template import show_default, version


__all__ = ["render", "select_context", "show_default", "version"]
