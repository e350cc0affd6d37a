"""
Command line interface using Typer with Rich integration.
"""

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional
import typer
from rich.console import Console
from rich.markup import escape
from loguru import logger

from .core import RepoStatus
from .config.settings import Settings
from .errors import NotARepositoryError, ProcessFailure
from .ui.console import RepoStatusConsole


# Create Typer app
app = typer.Typer(
    name="repo-status",
    help="Per-file git status in directory tree order",
    add_completion=False,
    rich_markup_mode="rich",
    no_args_is_help=False  # Allow default command
)

# Global console for error handling
console = Console()


@dataclass
class CLIState:
    settings: Settings
    repo_path: Optional[Path]


def setup_logging(log_level: str = "WARNING", log_file: Optional[Path] = None):
    """Setup logging configuration."""
    logger.remove()  # Remove default handler

    # Console logging with colors
    logger.add(
        sys.stderr,
        level=log_level,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
        colorize=True
    )

    # File logging
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            level="DEBUG",
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
            rotation="1 MB",
            retention="7 days"
        )


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    repo_path: Optional[Path] = typer.Option(
        None, "--repo", "-r",
        help="Directory inside the repository (default: current directory)"
    ),
    config_file: Optional[Path] = typer.Option(
        None, "--config", "-c",
        help="Path to configuration file"
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v",
        help="Enable verbose logging"
    ),
    debug: bool = typer.Option(
        False, "--debug", "-d",
        help="Enable debug logging (includes verbose)"
    ),
    version: bool = typer.Option(
        False, "--version",
        help="Show version information"
    )
):
    """
    Per-file git status in directory tree order.

    [bold blue]Examples:[/bold blue]

    [green]repo-status[/green]                        # Status of every changed file
    [green]repo-status status src tests[/green]       # Status of selected paths
    [green]repo-status tree[/green]                   # Changed files as a tree
    [green]repo-status root[/green]                   # Print the repository root
    [green]repo-status config --show[/green]          # Show configuration
    """
    if version:
        from . import __version__
        console.print(f"[bold blue]Repo Status[/bold blue] version [green]{__version__}[/green]")
        raise typer.Exit()

    settings = Settings.from_file(config_file) if config_file else Settings.load()

    # Setup logging - debug overrides verbose
    if debug:
        log_level = "DEBUG"
    elif verbose:
        log_level = "INFO"
    else:
        log_level = settings.ui.log_level
    setup_logging(log_level, settings.log_file if (verbose or debug) else None)

    ctx.obj = CLIState(settings=settings, repo_path=repo_path)

    # If no subcommand was called, show the status of the whole tree
    if ctx.invoked_subcommand is None:
        _run_status(ctx.obj, [], show_all=False)


@app.command()
def status(
    ctx: typer.Context,
    paths: Optional[List[Path]] = typer.Argument(None, help="Files or directories to query"),
    show_all: bool = typer.Option(
        False, "--all", "-a",
        help="Include up-to-date files"
    )
):
    """
    Show the status of files, resolved with at most two git calls.

    [bold blue]Examples:[/bold blue]

    [green]repo-status status[/green]                 # Every changed file
    [green]repo-status status --all src[/green]       # Every file under src
    """
    _run_status(ctx.obj, paths or [], show_all)


@app.command()
def tree(
    ctx: typer.Context,
    paths: Optional[List[Path]] = typer.Argument(None, help="Files or directories to query"),
    show_all: bool = typer.Option(
        False, "--all", "-a",
        help="Include up-to-date files"
    )
):
    """Show resolved files as a directory tree."""
    state: CLIState = ctx.obj
    if show_all:
        state.settings.ui.show_clean = True
    out = RepoStatusConsole(state.settings)

    try:
        engine = RepoStatus(state.repo_path, state.settings.git)
        records = engine.list_records(_relative_paths(engine, paths or []))
        out.print_status_tree(engine.root.name or str(engine.root), records)
    except (ProcessFailure, ValueError) as e:
        _fail(out, e)


@app.command("file")
def file_status(
    ctx: typer.Context,
    path: Path = typer.Argument(..., help="File to query")
):
    """Print the status of a single file ("none" when git has no opinion)."""
    state: CLIState = ctx.obj
    out = RepoStatusConsole(state.settings)

    try:
        engine = RepoStatus(state.repo_path, state.settings.git)
        result = engine.query_status(engine.relative(path))
    except (ProcessFailure, ValueError) as e:
        _fail(out, e)
    typer.echo(result.value if result else "none")


@app.command()
def root(
    ctx: typer.Context,
    directory: Optional[Path] = typer.Argument(None, help="Directory to start from")
):
    """Print the top-level directory of the repository."""
    state: CLIState = ctx.obj
    out = RepoStatusConsole(state.settings)

    try:
        engine = RepoStatus(directory or state.repo_path, state.settings.git)
    except ProcessFailure as e:
        _fail(out, e)
    typer.echo(str(engine.root))


@app.command()
def config(
    ctx: typer.Context,
    show: bool = typer.Option(
        False, "--show", "-s",
        help="Show current configuration"
    ),
    compare_target: Optional[str] = typer.Option(
        None, "--target", "-t",
        help="Set the tree-ish files are compared against"
    ),
    detect_conflicts: Optional[bool] = typer.Option(
        None, "--conflicts/--no-conflicts",
        help="Query unmerged paths before resolving"
    ),
    save: bool = typer.Option(
        False, "--save",
        help="Save configuration to file"
    )
):
    """
    Manage repo-status configuration.

    [bold blue]Examples:[/bold blue]

    [green]repo-status config --show[/green]                    # Show current config
    [green]repo-status config --conflicts --save[/green]        # Always check for conflicts
    """
    state: CLIState = ctx.obj
    settings = state.settings
    out = RepoStatusConsole(settings)

    if show:
        out.show_configuration()
        return

    config_changed = False

    if compare_target:
        settings.git.compare_target = compare_target
        config_changed = True
        console.print(f"[green]Set compare target to:[/green] {compare_target}")

    if detect_conflicts is not None:
        settings.git.detect_conflicts = detect_conflicts
        config_changed = True
        console.print(f"[green]Set conflict detection to:[/green] {detect_conflicts}")

    # Save if requested
    if save and config_changed:
        config_path = settings.config_dir / "config.json"
        settings.save_to_file(config_path)
        console.print(f"[green]Configuration saved to:[/green] {config_path}")
    elif config_changed:
        console.print("[yellow]Use --save to persist these changes[/yellow]")

    if not config_changed:
        console.print("[yellow]No configuration changes made[/yellow]")
        console.print("Use [green]--show[/green] to see current configuration")


def _fail(out: RepoStatusConsole, error: Exception) -> None:
    """Report an engine failure and exit with status 1."""
    if isinstance(error, NotARepositoryError):
        out.print_error(f"Not a git repository: {escape(str(error))}")
    elif isinstance(error, ProcessFailure):
        out.print_error(f"git failed ({error.exit_code}): {escape(str(error))}")
    else:
        out.print_error(escape(str(error)))
    raise typer.Exit(1)


def _relative_paths(engine: RepoStatus, paths: List[Path]) -> List[str]:
    """Convert command line paths to repository-relative names."""
    try:
        return [name for name in (engine.relative(path) for path in paths) if name]
    except ValueError as e:
        raise ValueError(f"Path is outside the repository {engine.root}: {e}") from e


def _run_status(state: CLIState, paths: List[Path], show_all: bool) -> None:
    """Run status command."""
    if show_all:
        state.settings.ui.show_clean = True
    out = RepoStatusConsole(state.settings)

    try:
        engine = RepoStatus(state.repo_path, state.settings.git)
        statuses = engine.batch_refresh(_relative_paths(engine, paths))
    except (ProcessFailure, ValueError) as e:
        _fail(out, e)

    out.print_status_table(statuses, title=str(engine.root))
    out.show_summary(statuses)


def main():
    """Main entry point for the CLI."""
    try:
        app()
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        sys.exit(130)


if __name__ == "__main__":
    main()
