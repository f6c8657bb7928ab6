"""
CLI for the cat preprocessor.

mdBook calls the preprocessor twice: once as ``supports <renderer>``, then
with no arguments and ``[context, book]`` JSON on stdin, expecting the
processed book JSON on stdout.

Usage:
    mdbook-cat-prep supports html
    mdbook-cat-prep < input.json > book.json
    mdbook-cat-prep inspect --root path/to/book
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import NoReturn

import typer
from rich.console import Console
from rich.table import Table

from catprep import __version__
from catprep.book import Book
from catprep.config import CatPrepSettings
from catprep.context import CatContext
from catprep.errors import CatPrepError
from catprep.logging import ERROR_PREFIX, configure_logging
from catprep.preprocessor import CatPreprocessor

app = typer.Typer(
    name="cat-prep",
    help="An mdBook preprocessor for preparing study materials.",
    add_completion=False,
    rich_markup_mode="rich",
)

console = Console()
err_console = Console(stderr=True)


def _fail(message: str) -> NoReturn:
    err_console.print(f"{ERROR_PREFIX} {message}", markup=False, highlight=False, soft_wrap=True)
    raise typer.Exit(1)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"cat-prep {__version__}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def callback(
    ctx: typer.Context,
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """Run as an mdBook preprocessor when no command is given."""
    if ctx.invoked_subcommand is None:
        _preprocess()


def _preprocess() -> None:
    try:
        context, book_data = json.loads(sys.stdin.read())
    except (ValueError, TypeError) as e:
        _fail(f"invalid preprocessor input: {e}")

    settings = CatPrepSettings.from_preprocessor_context(context)
    configure_logging(settings.log_level, json_format=settings.log_format == "json")

    preprocessor = CatPreprocessor(settings)
    preprocessor.check_version(context)

    book = Book.from_dict(book_data)
    try:
        preprocessor.run(book)
    except CatPrepError as e:
        _fail(str(e))

    typer.echo(json.dumps(book.to_dict()))


@app.command()
def supports(
    renderer: str = typer.Argument(..., help="Renderer name, e.g. html."),
) -> None:
    """Check whether a renderer is supported by this preprocessor."""
    supported = CatPreprocessor().supports_renderer(renderer)
    raise typer.Exit(0 if supported else 1)


@app.command()
def inspect(
    root: Path = typer.Option(
        Path("."),
        "--root",
        "-r",
        exists=True,
        file_okay=False,
        help="mdBook root directory.",
    ),
    as_json: bool = typer.Option(False, "--json", help="Output as JSON."),
) -> None:
    """Resolve a book on disk and show what was found.

    Nothing is rendered or written.
    """
    settings = CatPrepSettings(book_root=root)
    configure_logging(settings.log_level, json_format=settings.log_format == "json")

    book = Book.from_directory(settings.source_path)
    try:
        context = CatContext.from_book(book, settings=settings)
    except CatPrepError as e:
        _fail(str(e))

    stats = context.stats()
    if as_json:
        typer.echo(json.dumps(stats, indent=2))
        return

    table = Table(title="Cat context")
    table.add_column("Entity", style="cyan")
    table.add_column("Count", justify="right")
    for entity, count in stats.items():
        table.add_row(entity, str(count))
    console.print(table)

    teachers = Table(title="Teachers")
    teachers.add_column("Username", style="cyan")
    teachers.add_column("Name")
    teachers.add_column("Subjects", justify="right")
    teachers.add_column("Articles", justify="right")
    for teacher in context.teachers:
        teachers.add_row(
            teacher.card.username,
            teacher.card.name,
            str(len(teacher.subjects)),
            str(len(teacher.articles)),
        )
    console.print(teachers)


def main() -> None:
    """Entry point for CLI."""
    app()


if __name__ == "__main__":
    main()
