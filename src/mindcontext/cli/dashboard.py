"""
mindcontext CLI - Dashboard command.

Serves the local dashboard API over the dashboard repository clone.
"""

import logging
import threading
import time
import webbrowser

import typer
import uvicorn
from rich.console import Console

from mindcontext.cli.common import require_config
from mindcontext.core.config import get_repo_dir
from mindcontext.core.dashboard import create_app

console = Console()
logger = logging.getLogger(__name__)


def dashboard(
    ctx: typer.Context,
    port: int = typer.Option(
        8080,
        "--port",
        "-p",
        help="Port to run the server on",
    ),
    no_browser: bool = typer.Option(
        False,
        "--no-browser",
        help="Don't open browser automatically",
    ),
) -> None:
    """
    Launch the local dashboard.

    Examples:
        mctx dashboard                  # Launch on default port 8080
        mctx dashboard --port 3000      # Launch on port 3000
        mctx dashboard --no-browser     # Don't open browser
    """
    debug = ctx.obj.get("debug", False) if ctx.obj else False
    config = require_config()

    repo_dir = get_repo_dir()
    if debug:
        console.print(f"[dim]Repository: {repo_dir}[/dim]")

    app = create_app(config, repo_dir)

    url = f"http://localhost:{port}"
    console.print("\n[bold cyan]Starting dashboard server...[/bold cyan]")
    console.print(f"[dim]API: {url}/api/projects[/dim]")
    console.print(f"[dim]Docs: {url}/docs[/dim]")

    if not no_browser:

        def open_browser() -> None:
            time.sleep(1.5)  # Wait for server to start
            console.print(f"\n[green]Opening browser:[/green] {url}")
            webbrowser.open(url)

        threading.Thread(target=open_browser, daemon=True).start()

    console.print("\n[dim]Press Ctrl+C to stop[/dim]\n")

    try:
        uvicorn.run(
            app,
            host="127.0.0.1",
            port=port,
            log_level="debug" if debug else "warning",
        )
    except KeyboardInterrupt:
        console.print("\n[yellow]Dashboard stopped[/yellow]")
