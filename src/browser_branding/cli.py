"""CLI interface for browser-branding."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from .core import BrandingPatch, BuildContext
from .exceptions import BrandingError
from .logging import configure_logging_from_env, get_logger

app = typer.Typer(
    name="browser-branding",
    help="Generate browser branding trees from per-brand logos.",
    rich_markup_mode="rich",
)

console = Console()


def _load_context(root: Path, platform: Optional[str] = None) -> BuildContext:
    try:
        return BuildContext.from_root(root, platform=platform)
    except BrandingError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1)


@app.command("list")
def list_brands(
    root: Path = typer.Option(Path("."), "--root", "-r", help="Project root containing project.yaml."),
) -> None:
    """List the brands defined in the project."""
    context = _load_context(root)
    brands = BrandingPatch(context).get()

    if not brands:
        console.print("[yellow]No brands found.[/yellow]")
        return

    table = Table(title="Brands")
    table.add_column("Brand", style="cyan")
    table.add_column("Configured", justify="center")
    for brand in brands:
        configured = "yes" if brand in context.project.brands else "[red]no[/red]"
        table.add_row(brand, configured)
    console.print(table)


@app.command()
def apply(
    brand: str = typer.Argument(..., help="Brand to apply."),
    root: Path = typer.Option(Path("."), "--root", "-r", help="Project root containing project.yaml."),
    platform: Optional[str] = typer.Option(None, "--platform", "-p", help="Target platform, e.g. darwin."),
    log_level: str = typer.Option("INFO", "--log-level", "-l", help="Logging level."),
) -> None:
    """Generate the branding tree for BRAND."""
    configure_logging_from_env(default_level=log_level)
    logger = get_logger()

    context = _load_context(root, platform=platform)
    try:
        BrandingPatch(context).apply(brand)
    except BrandingError as e:
        logger.debug("Branding failed", exc_info=True)
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1)

    console.print(f"[green]Applied branding[/green] [bold]{brand}[/bold] -> {context.output_dir(brand)}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
