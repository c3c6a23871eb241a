"""CLI interface for docrender.

Typer-based command-line interface with Rich output formatting.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from docrender import __version__
from docrender.application import Application
from docrender.config import CONFIG_FILE, DocrenderConfig, load_config
from docrender.exceptions import DocrenderError
from docrender.types import load_project

__all__ = ["app"]

app = typer.Typer(
    name="docrender",
    help="docrender — renders a documentation model to HTML, JSON and plugin formats.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)
console = Console()


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _load_config(config_path: Path | None) -> DocrenderConfig:
    """Load an explicit config, else ./docrender.toml if present, else defaults."""
    if config_path is not None:
        return load_config(config_path)
    local = Path.cwd() / CONFIG_FILE
    if local.is_file():
        return load_config(local)
    return DocrenderConfig()


ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", "-c", help=f"Config file (default: ./{CONFIG_FILE} if present)"),
]


@app.command()
def version() -> None:
    """Show docrender version."""
    console.print(f"docrender {__version__}")


@app.command()
def renderers(config_path: ConfigOption = None) -> None:
    """List registered renderers and whether they are enabled."""
    try:
        config = _load_config(config_path)
        application = Application(config)
        application.load_plugins()
    except DocrenderError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(code=1) from e

    registry = application.renderers
    table = Table(show_header=True, box=None, padding=(0, 2))
    table.add_column("renderer", style="bold")
    table.add_column("enabled")
    table.add_column("default", style="dim")
    for name in registry.list_renderers():
        renderer = registry.get(name)
        enabled = "[green]yes[/green]" if renderer.is_enabled() else "[dim]no[/dim]"
        default = "default" if renderer is registry.default_renderer else ""
        table.add_row(name, enabled, default)
    console.print(table)


@app.command()
def render(
    model: Annotated[Path, typer.Argument(help="Documentation model (JSON)")],
    config_path: ConfigOption = None,
    html: Annotated[
        str | None,
        typer.Option("--html", help="Write HTML output to this directory"),
    ] = None,
    json_out: Annotated[
        str | None,
        typer.Option("--json", help="Write JSON output to this file"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show debug logging"),
    ] = False,
) -> None:
    """Render a documentation model with every enabled renderer."""
    _setup_logging(verbose)

    try:
        config = _load_config(config_path)
        if html is not None:
            config.html.out = html
        if json_out is not None:
            config.json.out = json_out
        project = load_project(model)
        application = Application(config)
        application.load_plugins()
    except DocrenderError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(code=1) from e

    outcomes = application.render(project)

    for outcome in outcomes:
        if outcome.ok:
            console.print(f"  [green]Rendered[/green] {outcome.renderer}")
        else:
            message = escape(str(outcome.error))
            console.print(f"  [red]Failed[/red] {outcome.renderer}: {message}")

    failed = sum(1 for o in outcomes if not o.ok)
    if failed:
        console.print(f"\n[yellow]{failed} of {len(outcomes)} renderer(s) failed[/yellow]")
        raise typer.Exit(code=2)
    console.print(f"\n[green]Rendered {project.name}[/green] with {len(outcomes)} renderer(s)")
