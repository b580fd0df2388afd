"""Provider factory functions for CLI.

Centralizes creation of the gateway, catalog and reveal scheduler from
environment variables and command options.
Hides configuration details from command implementations.
"""

import os
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console

from ..catalog import CatalogStore, default_catalog
from ..gateway import ResponseGateway, create_response_gateway
from ..gateway.providers.http import DEFAULT_TIMEOUT, DEFAULT_URL
from ..reveal import RevealScheduler
from ..ui.config import TYPING_SPEED_MS

# Default console for output
_console = Console()


def get_gateway(console: Console | None = None) -> ResponseGateway:
    """Create the response gateway from environment variables.

    Args:
        console: Optional Rich console for output

    Returns:
        Gateway instance

    Raises:
        SystemExit: If the configured backend is unknown or misconfigured

    Environment variables:
        GATEWAY_BACKEND: Backend type (http, gemini; default: http)
        GATEWAY_URL: Proxy endpoint (default: http://localhost:3000/api/gemini)
        GATEWAY_TIMEOUT: Request timeout in seconds (default: 30)
        GEMINI_API_KEY: Gemini API key (for gemini backend)
        GEMINI_MODEL: Gemini model (default: gemini-2.5-flash)
    """
    con = console or _console
    backend = os.getenv("GATEWAY_BACKEND", "http").lower()

    if backend == "http":
        try:
            timeout = float(os.getenv("GATEWAY_TIMEOUT", str(DEFAULT_TIMEOUT)))
        except ValueError:
            con.print("[red]Error: GATEWAY_TIMEOUT must be a number of seconds[/red]")
            raise typer.Exit(code=1)
        return create_response_gateway(
            "http",
            url=os.getenv("GATEWAY_URL", DEFAULT_URL),
            timeout=timeout,
        )

    if backend == "gemini":
        api_key = os.getenv("GEMINI_API_KEY")
        if not api_key:
            con.print("[red]Error: GEMINI_API_KEY not set in environment[/red]")
            raise typer.Exit(code=1)
        model = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
        return create_response_gateway("gemini", api_key=api_key, model=model)

    con.print(f"[red]Error: Unknown gateway backend: {backend}[/red]")
    raise typer.Exit(code=1)


def get_catalog(path: Path | None, console: Console | None = None) -> CatalogStore:
    """Load a catalog file, or return the built-in catalog when no path is given."""
    if path is None:
        return default_catalog()

    con = console or _console
    try:
        return CatalogStore.from_json_file(path)
    except (OSError, ValidationError) as e:
        con.print(f"[red]Error: could not load catalog {path}: {e}[/red]")
        raise typer.Exit(code=1)


def get_reveal(typing_speed_ms: int | None, console: Console | None = None) -> RevealScheduler:
    """Create the reveal scheduler.

    Environment variables:
        TYPING_SPEED_MS: Milliseconds per character when no option is given (default: 30)
    """
    if typing_speed_ms is None:
        try:
            typing_speed_ms = int(os.getenv("TYPING_SPEED_MS", str(TYPING_SPEED_MS)))
        except ValueError:
            con = console or _console
            con.print("[red]Error: TYPING_SPEED_MS must be a whole number of milliseconds[/red]")
            raise typer.Exit(code=1)
    return RevealScheduler(interval=max(typing_speed_ms, 0) / 1000)
