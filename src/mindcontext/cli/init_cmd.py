"""
Init command implementation for mindcontext.

Creates the mindcontext home directory, clones the dashboard repository
and writes the initial config.
"""

import logging
import re

import typer
from rich.console import Console

from mindcontext.cli.errors import ExitCode, print_error
from mindcontext.core.config import (
    ConfigError,
    create_default_config,
    get_home_dir,
    get_repo_dir,
    is_initialized,
    load_config,
    save_config,
)
from mindcontext.core.sync import GitBackend, GitError

console = Console()
logger = logging.getLogger(__name__)

GITHUB_REPO_PATTERN = re.compile(r"github\.com[:/]([^/]+)/([^/.]+)")
TEMPLATE_URL = "https://github.com/tmsjngx0/mindcontext-template"


def derive_dashboard_url(repo_url: str) -> str:
    """
    Derive the GitHub Pages URL of a dashboard repository.

    Example:
        >>> derive_dashboard_url("git@github.com:alice/progress.git")
        'https://alice.github.io/progress'
    """
    match = GITHUB_REPO_PATTERN.search(repo_url)
    if not match:
        return ""
    return f"https://{match.group(1)}.github.io/{match.group(2)}"


def _show_existing(quiet: bool) -> None:
    if quiet:
        return

    home = get_home_dir()
    try:
        config = load_config()
        dashboard = config.dashboard_url or "Not configured"
        projects = len(config.projects)
    except ConfigError:
        dashboard = "Unknown (config unreadable)"
        projects = 0

    console.print("MindContext is already initialized.")
    console.print(f"  Directory: {home}")
    console.print(f"  Dashboard: {dashboard}")
    console.print(f"  Projects: {projects}")
    console.print()
    console.print('Run "mctx reset --force" to start fresh.')


def main(
    repo: str | None = typer.Option(
        None,
        "--repo",
        "-r",
        help="Dashboard repository URL (prompted for when omitted)",
    ),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress output"),
) -> None:
    """
    Initialize mindcontext (~/.mindcontext/).

    Clones your dashboard repository and records this machine's identity.
    Without a repository URL only the config is created; set the repository
    later with `mctx config --dashboard-repo`.

    Examples:
        mctx init
        mctx init --repo git@github.com:me/progress.git
    """
    if is_initialized():
        _show_existing(quiet)
        return

    home = get_home_dir()
    home.mkdir(parents=True, exist_ok=True)

    if repo is None and not quiet:
        console.print("Initializing MindContext...\n")
        console.print("Enter your dashboard repository URL.")
        console.print(f"[dim](Create one from {TEMPLATE_URL})[/dim]\n")
        repo = typer.prompt(
            "Dashboard repo URL (git@github.com:user/repo.git)",
            default="",
            show_default=False,
        )

    repo = (repo or "").strip()
    config = create_default_config()

    if not repo:
        config_path = save_config(config)
        if not quiet:
            console.print("\nNo dashboard URL provided. You can configure it later with:")
            console.print("  mctx config --dashboard-repo <url>")
            console.print(f"\nCreated: {config_path}")
        return

    repo_dir = get_repo_dir()
    if not quiet:
        console.print("\n[cyan]Cloning dashboard repository...[/cyan]")

    try:
        GitBackend.clone(repo, repo_dir)
    except GitError as e:
        if not quiet:
            print_error("Failed to clone repository", reason=e.stderr or str(e))
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    config.dashboard_repo = repo
    config.dashboard_url = derive_dashboard_url(repo)
    save_config(config)

    if not quiet:
        console.print("\n[green]✓[/green] MindContext initialized!")
        console.print(f"  Directory: {home}")
        console.print(f"  Dashboard: {config.dashboard_url or '(not set)'}")
        console.print()
        console.print("Next steps:")
        console.print("  cd <your-project>")
        console.print("  mctx connect")
