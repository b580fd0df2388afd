"""Main CLI application using Typer."""
import asyncio
from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text

from ..catalog import find_title_matches, is_general_query, select_context
from ..session import ChatSession, SessionObserver
from ..ui.config import LogLevel
from .providers import get_catalog, get_gateway, get_reveal

# Load environment variables
load_dotenv()

# Create Typer app
app = typer.Typer(
    name="reelchat",
    help="Catalog-grounded chat assistant for a small set of streaming titles",
    no_args_is_help=True,
    add_completion=True,
)

# Console for rich output
console = Console()

CatalogOption = typer.Option(
    None,
    "--catalog",
    "-c",
    exists=True,
    dir_okay=False,
    help="JSON file with an alternative catalog"
)

TypingSpeedOption = typer.Option(
    None,
    "--typing-speed",
    "-t",
    min=0,
    help="Milliseconds per revealed character (default: $TYPING_SPEED_MS or 30)"
)


class ConsoleObserver(SessionObserver):
    """Types revealed answers out to the console."""

    def __init__(self, out: Console) -> None:
        self._out = out
        self._printed = 0

    def on_reveal_step(self, visible_text: str) -> None:
        if self._printed == 0:
            self._out.print("[bold green]Bot:[/bold green] ", end="")
        self._out.print(visible_text[self._printed:], end="", markup=False, highlight=False)
        self._printed = len(visible_text)

    def on_model_message(self, message) -> None:
        if self._printed == 0:
            self._out.print("[bold green]Bot:[/bold green] ", end="")
        self._out.print("\n")
        self._printed = 0

    def on_error(self, message: str) -> None:
        self._out.print(Text(f"Error: {message}", style="red"))


def _make_debug_printer(level: str | None):
    """Build a debug callback printing lines at or above ``level``."""
    if level is None:
        return None
    threshold = LogLevel.from_string(level)

    def _print(line_level: str, component: str, message: str) -> None:
        if LogLevel.from_string(line_level) >= threshold:
            console.print(
                Text(f"{line_level.upper():<5} [{component}] {message}", style="dim")
            )

    return _print


@app.command()
def catalog(
    catalog_path: Path | None = CatalogOption,
):
    """Show the titles the assistant knows about."""
    store = get_catalog(catalog_path, console)

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Title", style="cyan")
    table.add_column("Year", style="dim", width=6)
    table.add_column("Genre", style="yellow")
    table.add_column("Director")
    table.add_column("Rating", style="green", width=6)

    for entry in store:
        table.add_row(entry.title, str(entry.year), entry.genre, entry.director, f"{entry.rating:.1f}")

    console.print(table)


@app.command()
def context(
    query: str = typer.Argument(..., help="Query to select grounding context for"),
    catalog_path: Path | None = CatalogOption,
):
    """Show which catalog entries a query would inject into the prompt."""
    store = get_catalog(catalog_path, console)

    matches = find_title_matches(query, store)
    if matches:
        console.print(f"[green]Title match: {', '.join(e.title for e in matches)}[/green]")
    elif is_general_query(query, store):
        console.print("[yellow]General catalog query: full catalog[/yellow]")
    else:
        console.print("[dim]No context: the model will rely on the refusal policy[/dim]")
        return

    console.print(Syntax(select_context(query, store), "json", theme="monokai"))


@app.command()
def ask(
    question: str = typer.Argument(..., help="Question to ask"),
    catalog_path: Path | None = CatalogOption,
    typing_speed: int | None = TypingSpeedOption,
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Print log lines at this level: debug, info, warning, or error"
    ),
):
    """Ask a single question and print the answer."""
    async def _ask() -> bool:
        session = ChatSession(
            catalog=get_catalog(catalog_path, console),
            reveal=get_reveal(typing_speed, console),
            gateway=get_gateway(console),
            observer=ConsoleObserver(console),
        )
        session.set_debug_callback(_make_debug_printer(log_level))
        try:
            return await session.submit(question)
        finally:
            await session.aclose()

    if not asyncio.run(_ask()):
        raise typer.Exit(code=1)


@app.command()
def chat(
    catalog_path: Path | None = CatalogOption,
    typing_speed: int | None = TypingSpeedOption,
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Print log lines at this level: debug, info, warning, or error"
    ),
):
    """Interactive console chat with typed-out answers."""
    async def _chat():
        session = ChatSession(
            catalog=get_catalog(catalog_path, console),
            reveal=get_reveal(typing_speed, console),
            gateway=get_gateway(console),
            observer=ConsoleObserver(console),
        )
        session.set_debug_callback(_make_debug_printer(log_level))

        console.print("[bold cyan]Netflix Recommendation Bot[/bold cyan]")
        console.print("[dim]Type 'exit', 'quit', or 'q' to leave[/dim]\n")
        console.print(f"[bold green]Bot:[/bold green] {session.history.last.text}\n")

        try:
            while True:
                try:
                    user_input = await asyncio.to_thread(
                        console.input, "[bold yellow]You:[/bold yellow] "
                    )
                except (KeyboardInterrupt, EOFError):
                    console.print("\n[dim]Goodbye![/dim]")
                    break

                if not user_input.strip():
                    continue

                if user_input.strip().lower() in ("exit", "quit", "q"):
                    console.print("[dim]Goodbye![/dim]")
                    break

                await session.submit(user_input)
        finally:
            await session.aclose()

    try:
        asyncio.run(_chat())
    except KeyboardInterrupt:
        console.print("\n[dim]Goodbye![/dim]")


@app.command(name="tui")
def tui_command(
    catalog_path: Path | None = CatalogOption,
    typing_speed: int | None = TypingSpeedOption,
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Show log panel with level: debug (all), info, warning, or error"
    ),
):
    """Launch interactive TUI chat interface."""
    async def _tui():
        from ..ui import run_textual_tui

        session = ChatSession(
            catalog=get_catalog(catalog_path, console),
            reveal=get_reveal(typing_speed, console),
            gateway=get_gateway(console),
        )
        await run_textual_tui(session, log_level=log_level)
        console.print("\n[dim]Goodbye![/dim]")

    try:
        asyncio.run(_tui())
    except KeyboardInterrupt:
        pass


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
