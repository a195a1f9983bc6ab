"""PDAO CLI application using Typer.

Serves the API, generates deployment secrets and browses the bundled
address reference data.
"""

import secrets
from typing import Optional

import typer
import uvicorn
from rich.console import Console
from rich.table import Table

from pdao_config import get_settings
from pdao_geo import GeoItem, get_geography

app = typer.Typer(
    name="pdao",
    help="PDAO - registration backend CLI",
    no_args_is_help=True,
)
console = Console()


secrets_app = typer.Typer(
    name="secrets",
    help="Secret generation utilities",
    no_args_is_help=True,
)
app.add_typer(secrets_app)

geo_app = typer.Typer(
    name="geo",
    help="Browse the Philippine address reference data",
    no_args_is_help=True,
)
app.add_typer(geo_app)


@app.command("serve")
def serve(
    host: Optional[str] = typer.Option(None, help="Bind address (default: API_HOST)"),
    port: Optional[int] = typer.Option(None, help="Port (default: API_PORT)"),
    reload: bool = typer.Option(False, help="Reload on code changes"),
) -> None:
    """Run the API with uvicorn.

    DATABASE_URL and JWT_SECRET_KEY must be configured; startup fails
    otherwise.
    """
    settings = get_settings()
    uvicorn.run(
        "pdao.presentation.api.app:create_app",
        factory=True,
        host=host or settings.api_host,
        port=port or settings.api_port,
        reload=reload,
        log_config=None,
    )


@secrets_app.command("generate")
def generate_secrets() -> None:
    """Generate a JWT signing secret for the PDAO configuration.

    Copy the output to your .env file.
    """
    console.print("\n[bold green]PDAO Secret Generation[/bold green]")
    console.print("=" * 60)
    console.print(
        "\nGenerated secrets for your [bold].env[/bold] configuration file:\n"
    )

    # 64 bytes of entropy for HS256
    jwt_secret = secrets.token_urlsafe(64)
    console.print(f"[cyan]JWT_SECRET_KEY[/cyan]={jwt_secret}")

    console.print("\n" + "=" * 60)
    console.print(
        "[yellow]Keep these secrets secure and never commit them "
        "to version control![/yellow]"
    )
    console.print(
        "[dim]Copy the above values to your config/.env (Docker) or "
        "config/.env.dev (local) file.[/dim]\n"
    )


def _print_items(title: str, items: list[GeoItem]) -> None:
    if not items:
        console.print(f"[yellow]No {title.lower()} found.[/yellow]")
        raise typer.Exit(code=1)

    table = Table(title=title)
    table.add_column("Code", style="cyan")
    table.add_column("Name")
    for item in items:
        table.add_row(item.code, item.name)
    console.print(table)


@geo_app.command("regions")
def list_regions() -> None:
    """List all regions."""
    _print_items("Regions", get_geography().regions())


@geo_app.command("provinces")
def list_provinces(region_code: str = typer.Argument(..., help="Region code")) -> None:
    """List the provinces of a region."""
    _print_items("Provinces", get_geography().provinces(region_code))


@geo_app.command("cities")
def list_cities(province_code: str = typer.Argument(..., help="Province code")) -> None:
    """List the cities and municipalities of a province."""
    _print_items("Cities", get_geography().cities(province_code))


@geo_app.command("barangays")
def list_barangays(city_code: str = typer.Argument(..., help="City code")) -> None:
    """List the barangays of a city or municipality."""
    _print_items("Barangays", get_geography().barangays(city_code))


def cli() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    cli()
