"""Commands inspecting the built-in template."""

from __future__ import annotations

import typer

from texcontext.core.exceptions import TemplateResourceError
from texcontext.core.templates import DEFAULT_TEMPLATE_PATH, default_template
from texcontext.version import get_version

from ..state import emit_error, get_cli_state


def show_default(
    path_only: bool = typer.Option(
        False, "--path", help="Print the location of the built-in template instead."
    ),
) -> None:
    """Print the built-in template used when no other template is selected."""
    if path_only:
        typer.echo(str(DEFAULT_TEMPLATE_PATH))
        return
    try:
        text = default_template()
    except TemplateResourceError as exc:
        emit_error(str(exc), exception=exc)
        raise typer.Exit(code=1) from exc
    typer.echo(text)


def version() -> None:
    """Print the installed texcontext version."""
    get_cli_state().console.print(get_version(), highlight=False)


__all__ = ["show_default", "version"]
