"""gsearch command line entry point."""

from __future__ import annotations

import sys

import typer
from loguru import logger

from gemini_search import __version__
from gemini_search.client import GeminiClient
from gemini_search.config import load_settings
from gemini_search.errors import ConfigurationError, EmptyQueryError, GSearchError, MissingCredentialError
from gemini_search.logging_utils import configure_logging
from gemini_search.terminal import Terminal

app = typer.Typer(
    name="gsearch",
    help="AI-powered CLI search engine using Google's Gemini API",
    add_completion=False,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"gsearch {__version__}")
        raise typer.Exit()


def _join_query(parts: list[str]) -> str:
    query = " ".join(parts)
    if not query.strip():
        raise EmptyQueryError("Please provide a search query")
    return query


@app.command()
def search(
    query: list[str] = typer.Argument(..., help="Search query"),  # noqa: B008
    raw: bool = typer.Option(False, "--raw", "-r", help="Output raw response without formatting"),
    model: str | None = typer.Option(None, "--model", "-m", help="Override the Gemini model"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    version: bool = typer.Option(  # noqa: ARG001
        False, "--version", callback=_version_callback, is_eager=True, help="Show version and exit"
    ),
) -> None:
    """Ask Gemini a question and print a concise answer."""

    terminal = Terminal()
    try:
        settings = load_settings(model=model)
    except ConfigurationError as exc:
        terminal.error(str(exc))
        raise typer.Exit(1) from None
    configure_logging(
        "DEBUG" if verbose else settings.log_level,
        profile="rich" if sys.stderr.isatty() else "default",
    )
    terminal.track_fences = settings.track_fences

    try:
        client = GeminiClient.from_settings(settings)
    except MissingCredentialError:
        terminal.api_key_error()
        raise typer.Exit(1) from None

    with client:
        try:
            text = _join_query(query)
        except EmptyQueryError as exc:
            terminal.error(str(exc))
            raise typer.Exit(1) from None

        terminal.searching(text)
        try:
            response = client.search(text)
        except GSearchError as exc:
            logger.debug("search failed: {}", exc)
            terminal.search_failed(str(exc))
            raise typer.Exit(1) from None

    if raw:
        terminal.raw_answer(response)
    else:
        terminal.answer(response)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
