"""Per-invocation CLI state and rich message rendering."""

from __future__ import annotations

from collections.abc import Mapping
from contextvars import ContextVar
from dataclasses import dataclass, field
import sys
from typing import TYPE_CHECKING, Any, TextIO

import click

from texcontext.core.exceptions import exception_hint, exception_messages


if TYPE_CHECKING:
    from rich.console import Console

__all__ = [
    "CLIState",
    "debug_enabled",
    "describe_exception",
    "emit_error",
    "emit_warning",
    "get_cli_state",
    "render_message",
    "set_cli_state",
]


def _bound_console(cached: Console | None, stream: TextIO, **options: Any) -> Console:
    """Return ``cached`` while it still writes to ``stream``, else a new console."""
    from rich.console import Console

    if cached is not None and getattr(cached, "file", None) is stream:
        return cached
    return Console(file=stream, **options)


@dataclass(slots=True)
class CLIState:
    """Verbosity, traceback switch, consoles and recorded events of one run."""

    verbosity: int = 0
    show_tracebacks: bool = False
    events: dict[str, list[dict[str, Any]]] = field(default_factory=dict, init=False)
    _console: Console | None = field(default=None, init=False, repr=False)
    _err_console: Console | None = field(default=None, init=False, repr=False)

    @property
    def console(self) -> Console:
        self._console = _bound_console(self._console, sys.stdout)
        return self._console

    @property
    def err_console(self) -> Console:
        self._err_console = _bound_console(self._err_console, sys.stderr, highlight=False)
        return self._err_console

    def record_event(self, name: str, payload: Mapping[str, Any] | None = None) -> None:
        self.events.setdefault(name, []).append(dict(payload or {}))

    def consume_events(self, name: str) -> list[dict[str, Any]]:
        """Retrieve and clear events for the given name."""
        return self.events.pop(name, [])


_STATE_VAR: ContextVar[CLIState | None] = ContextVar("texcontext_cli_state", default=None)


def get_cli_state(*, create: bool = True) -> CLIState:
    """Return the state of the running command, or the process fallback.

    Inside a click invocation the state lives on the root context, so every
    invocation starts from a fresh instance.
    """
    ctx = click.get_current_context(silent=True)
    if ctx is not None:
        root = ctx.find_root()
        if not isinstance(root.obj, CLIState):
            if not create:
                raise RuntimeError("CLI state is not initialised for this command.")
            root.obj = CLIState()
        _STATE_VAR.set(root.obj)
        return root.obj

    state = _STATE_VAR.get()
    if state is None:
        if not create:
            raise RuntimeError("CLI state is not initialised.")
        state = CLIState()
        _STATE_VAR.set(state)
    return state


def set_cli_state(*, verbosity: int | None = None, debug: bool | None = None) -> CLIState:
    """Update the CLI state, returning the current instance."""
    state = get_cli_state()
    if verbosity is not None:
        state.verbosity = max(0, verbosity)
    if debug is not None:
        state.show_tracebacks = debug
    return state


def describe_exception(message: str, exception: BaseException, verbosity: int) -> list[str]:
    """Return the detail lines printed under ``message`` for ``exception``."""
    if verbosity < 1:
        return []
    lines = [f"type: {type(exception).__name__}"]
    hint = exception_hint(exception)
    if hint and hint not in message:
        lines.append(f"hint: {hint}")
    if verbosity >= 2:
        causes = exception_messages(exception)[1:]
        if causes:
            lines.append("caused by:")
            lines.extend(f"  {cause}" for cause in causes)
    return lines


def render_message(
    level: str,
    message: str,
    *,
    exception: BaseException | None = None,
) -> None:
    """Print ``message`` at ``level``; errors and warnings go to stderr."""
    state = get_cli_state()
    if level == "info":
        state.console.log(message)
        return

    from rich.text import Text

    style = "red" if level == "error" else "yellow"
    text = Text.assemble((f"{level}: ", f"bold {style}"), (message, style))
    if exception is not None:
        details = describe_exception(message, exception, state.verbosity)
        if details:
            text.append("\n" + "\n".join(details), style=style)
    state.err_console.print(text)


def emit_warning(message: str, *, exception: BaseException | None = None) -> None:
    render_message("warning", message, exception=exception)


def emit_error(message: str, *, exception: BaseException | None = None) -> None:
    render_message("error", message, exception=exception)


def debug_enabled() -> bool:
    """Return whether full tracebacks should be displayed."""
    try:
        return get_cli_state(create=False).show_tracebacks
    except RuntimeError:
        return False
