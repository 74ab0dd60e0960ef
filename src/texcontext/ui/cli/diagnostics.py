"""Route core diagnostics to the CLI consoles."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from texcontext.core.diagnostics import format_event_message

from .state import CLIState, emit_error, emit_warning, get_cli_state, render_message


class CliEmitter:
    """Record resolver and writer events on the CLI state.

    Events are always recorded so the command can summarise the run; they
    are only echoed to the console with ``--verbose``.
    """

    def __init__(self, state: CLIState | None = None) -> None:
        self._state = state or get_cli_state()

    @property
    def debug_enabled(self) -> bool:
        return self._state.show_tracebacks

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        emit_warning(message, exception=exc)

    def error(self, message: str, exc: BaseException | None = None) -> None:
        emit_error(message, exception=exc)

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        data = dict(payload)
        self._state.record_event(name, data)
        if self._state.verbosity < 1:
            return
        render_message("info", format_event_message(name, data) or f"{name}: {data}")


__all__ = ["CliEmitter"]
