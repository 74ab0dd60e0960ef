"""Implementation of the ``texcontext render`` command."""

from __future__ import annotations

from pathlib import Path
import sys
from typing import Annotated

from pydantic import ValidationError
import typer

from texcontext.adapters.storage import LocalStorageConnector
from texcontext.core.artifacts import write_rendered_output
from texcontext.core.config import BuildConfig
from texcontext.core.exceptions import TexContextError
from texcontext.core.models import Context, DocumentPayload
from texcontext.core.renderer import render as render_context
from texcontext.core.resolver import ContextResolver

from ..diagnostics import CliEmitter
from ..state import CLIState, emit_error, set_cli_state


CONTENT_PANEL = "Content"
SOURCE_PANEL = "Template Source"
OUTPUT_PANEL = "Output"
DIAGNOSTICS_PANEL = "Diagnostics"


def build_resolver(config: BuildConfig, emitter: CliEmitter | None = None) -> ContextResolver:
    """Create a resolver wired to local storage when an identifier is used."""
    connector = None
    if config.source_id is not None:
        connector = LocalStorageConnector(config.storage_root)
    return ContextResolver(connector, emitter=emitter)


def select_context(config: BuildConfig, resolver: ContextResolver) -> Context:
    """Pick the resolution strategy matching the configured source."""
    if config.template is not None:
        return resolver.resolve_from_local_template(config.template)
    if config.source_id is not None:
        return resolver.resolve_from_external_id(config.source_id)
    return resolver.resolve_default()


def _read_body(body: str | None, body_file: Path | None) -> str:
    if body is not None and body_file is not None:
        raise typer.BadParameter("Use either --body or --body-file, not both.")
    if body_file is None:
        return body or ""
    if str(body_file) == "-":
        return sys.stdin.read()
    return body_file.read_text(encoding="utf-8")


_ORIGIN_LABELS = {
    "local": "local",
    "document": "storage document",
    "folder": "storage folder",
}


def _template_origin(state: CLIState) -> str:
    """Describe where the template came from, based on the recorded events."""
    if state.consume_events("template_fallback"):
        return "built-in"
    resolved = state.consume_events("context_resolved")
    if not resolved:
        return "built-in"
    return _ORIGIN_LABELS.get(resolved[-1].get("origin", ""), "built-in")


def _validation_message(exc: ValidationError) -> str:
    return "; ".join(str(error.get("msg", "")) for error in exc.errors()) or str(exc)


def render(
    title: Annotated[
        str,
        typer.Option("--title", help="Document title.", rich_help_panel=CONTENT_PANEL),
    ],
    abstract: Annotated[
        str,
        typer.Option("--abstract", help="Abstract text.", rich_help_panel=CONTENT_PANEL),
    ] = "",
    body: Annotated[
        str | None,
        typer.Option("--body", help="LaTeX body inserted verbatim.", rich_help_panel=CONTENT_PANEL),
    ] = None,
    body_file: Annotated[
        Path | None,
        typer.Option(
            "--body-file",
            help="Read the LaTeX body from a file ('-' reads standard input).",
            rich_help_panel=CONTENT_PANEL,
        ),
    ] = None,
    template: Annotated[
        Path | None,
        typer.Option(
            "--template",
            "-t",
            help="Local template file containing the placeholders.",
            rich_help_panel=SOURCE_PANEL,
        ),
    ] = None,
    source: Annotated[
        str | None,
        typer.Option(
            "--source",
            "-s",
            help="Storage identifier of a template document or a folder with main.tex.",
            rich_help_panel=SOURCE_PANEL,
        ),
    ] = None,
    storage_root: Annotated[
        Path | None,
        typer.Option(
            "--storage-root",
            help="Directory served as document storage (defaults to $TEXCONTEXT_STORAGE).",
            rich_help_panel=SOURCE_PANEL,
        ),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output directory. Defaults to a slug of the title.",
            rich_help_panel=OUTPUT_PANEL,
        ),
    ] = None,
    overwrite: Annotated[
        bool,
        typer.Option(
            "--overwrite",
            help="Replace files already present in the output directory.",
            rich_help_panel=OUTPUT_PANEL,
        ),
    ] = False,
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose",
            "-v",
            count=True,
            help="Increase CLI verbosity. Combine multiple times for additional diagnostics.",
            rich_help_panel=DIAGNOSTICS_PANEL,
        ),
    ] = 0,
    debug: Annotated[
        bool,
        typer.Option(
            "--debug",
            help="Show full tracebacks when an unexpected error occurs.",
            rich_help_panel=DIAGNOSTICS_PANEL,
        ),
    ] = False,
) -> None:
    """Render a template and write the resulting LaTeX file set."""
    state = set_cli_state(verbosity=verbose, debug=debug)

    try:
        config = BuildConfig(
            template=template,
            source_id=source,
            storage_root=storage_root,
            output_dir=output,
            overwrite=overwrite,
        )
    except ValidationError as exc:
        emit_error(_validation_message(exc), exception=exc)
        raise typer.Exit(code=1) from exc

    try:
        body_text = _read_body(body, body_file)
    except UnicodeDecodeError as exc:
        emit_error(f"Body file '{body_file}' is not valid UTF-8.", exception=exc)
        raise typer.Exit(code=1) from exc
    except OSError as exc:
        emit_error(f"Unable to read body from '{body_file}'.", exception=exc)
        raise typer.Exit(code=1) from exc

    emitter = CliEmitter(state=state)
    try:
        resolver = build_resolver(config, emitter)
        context = select_context(config, resolver)
        rendered = render_context(
            context, DocumentPayload(title=title, abstract=abstract, body=body_text)
        )
        destination = config.resolve_output_dir(title)
        written = write_rendered_output(
            rendered, destination, overwrite=config.overwrite, emitter=emitter
        )
    except (TexContextError, ValueError) as exc:
        if state.show_tracebacks:
            raise
        emit_error(str(exc), exception=exc)
        raise typer.Exit(code=1) from exc

    main_path = destination / rendered.main_file
    origin = _template_origin(state)
    state.console.print(
        f"[green]Rendered[/] {main_path} from the {origin} template ({len(written)} file(s))"
    )


__all__ = ["build_resolver", "render", "select_context"]
