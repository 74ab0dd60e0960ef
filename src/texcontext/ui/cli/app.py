"""Typer application wiring for the texcontext CLI."""

from __future__ import annotations

import typer

from .commands import render, show_default, version
from .state import debug_enabled, emit_error


app = typer.Typer(
    help="Prepare LaTeX file sets from templates and document content.",
    context_settings={"help_option_names": ["--help", "-h"]},
    no_args_is_help=True,
)

app.command("render")(render)
app.command("show-default")(show_default)
app.command("version")(version)


def main() -> None:
    """Entry point compatible with console scripts."""
    try:
        app()
    except KeyboardInterrupt as exc:
        if debug_enabled():
            raise
        emit_error("Operation cancelled by user.", exception=exc)
        raise typer.Exit(code=1) from exc


__all__ = ["app", "main"]
