"""CLI command implementations"""

import logging
from pathlib import Path
from typing import Annotated, Callable, Optional

import typer

from outbreak.config import TranslationConfig, load_config
from outbreak.core.errors import OutbreakError
from outbreak.core.models import ListNesting
from outbreak.core.pipeline import convert_document, outline_markdown, translate


LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> TranslationConfig:
    """Load config with standard CLI error handling."""
    try:
        return load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))


def _run(src: Path, dst: Path, convert: Callable[[str], str]) -> None:
    """Read src, convert, write dst (creating parent dirs) and echo the mapping."""
    try:
        text = src.read_text(encoding="utf-8")
    except OSError as e:
        _fail(f"Cannot read {src}", e)
    try:
        converted = convert(text)
    except OutbreakError as e:
        _fail(f"Failed to convert {src}", e)
    dst.parent.mkdir(parents=True, exist_ok=True)
    dst.write_text(converted, encoding="utf-8")
    typer.echo(f"  {src} -> {dst}")


def main_callback(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")] = False,
    ):
    """Convert Obsidian notes into Logseq pages."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format=LOG_FORMAT)


def convert_cmd(
    src: Annotated[Path, typer.Argument(help="Obsidian note to convert")],
    dst: Annotated[Path, typer.Argument(help="Logseq page to write")],
    nesting: Annotated[Optional[ListNesting], typer.Option("--list-nesting", help="Placement of a list after a paragraph")] = None,
    dates: Annotated[Optional[bool], typer.Option("--dates/--no-dates", help="Convert task date emoji")] = None,
    filter_tag: Annotated[Optional[str], typer.Option("--filter-tag", help="Tag removed from tasks; '' disables")] = None,
    ):
    """Run the full conversion: rewrite rules -> chunks -> outline."""
    settings = _settings(overrides={
        "list_nesting": nesting, "convert_dates": dates, "global_filter_tag": filter_tag,
    })
    _run(src, dst, lambda text: convert_document(text, settings))


def translate_cmd(
    src: Annotated[Path, typer.Argument(help="Obsidian note to rewrite")],
    dst: Annotated[Path, typer.Argument(help="File to write")],
    dates: Annotated[Optional[bool], typer.Option("--dates/--no-dates", help="Convert task date emoji")] = None,
    filter_tag: Annotated[Optional[str], typer.Option("--filter-tag", help="Tag removed from tasks; '' disables")] = None,
    ):
    """Apply the rewrite rules only; no outlining."""
    settings = _settings(overrides={"convert_dates": dates, "global_filter_tag": filter_tag})
    _run(src, dst, lambda text: translate(text, settings))


def outline_cmd(
    src: Annotated[Path, typer.Argument(help="Markdown file to outline")],
    dst: Annotated[Path, typer.Argument(help="File to write")],
    nesting: Annotated[Optional[ListNesting], typer.Option("--list-nesting", help="Placement of a list after a paragraph")] = None,
    ):
    """Outline a document as-is; no rewrite rules."""
    settings = _settings(overrides={"list_nesting": nesting})
    _run(src, dst, lambda text: outline_markdown(text, settings.list_nesting))
