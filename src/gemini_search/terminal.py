"""Terminal output for gsearch."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.markup import escape

from gemini_search.render import format_output

RULE_WIDTH = 50


class Terminal:
    """Terminal writer using Rich for stdout and stderr."""

    def __init__(self, *, track_fences: bool = True) -> None:
        self.console = Console(highlight=False, soft_wrap=True)
        self.err_console = Console(stderr=True, highlight=False, soft_wrap=True)
        self.track_fences = track_fences

    def searching(self, query: str) -> None:
        """Render the search banner."""
        self.console.print(f"[bold blue]🔍 Searching for: {escape(query)}[/bold blue]")
        self.console.print(f"[dim]{'━' * RULE_WIDTH}[/dim]")

    def answer(self, content: str) -> None:
        """Render a formatted answer in the console's color system."""
        output = format_output(content, track_fences=self.track_fences, color_system=self.console.color_system)
        self.console.file.write(output)
        self.console.file.flush()

    def raw_answer(self, content: str) -> None:
        """Print the answer verbatim."""
        typer.echo(content)

    def error(self, message: str) -> None:
        """Render an error message."""
        self.err_console.print(f"[bold red]Error:[/bold red] {escape(message)}")

    def search_failed(self, message: str) -> None:
        self.err_console.print(f"[bold red]❌ Search failed: {escape(message)}[/bold red]")

    def api_key_error(self) -> None:
        """Display API key error message."""
        self.error("GEMINI_API_KEY environment variable not set")
        self.err_console.print("Please set your Gemini API key:")
        self.err_console.print("export GEMINI_API_KEY=your_api_key_here", markup=False)
