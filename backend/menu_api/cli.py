"""
Menu API CLI.

Command-line interface for database setup, demo data and metrics inspection.

Usage:
    menu-api init-db
    menu-api seed
    menu-api overview 1 --user-id 1
"""

import typer
from rich.console import Console
from rich.table import Table

from menu_api.models import Base
from menu_api.seed import seed as seed_demo_data
from menu_api.services.domain import MetricsService
from shared.config.settings import settings
from shared.infrastructure.db import engine, get_db_context

app = typer.Typer(
    name="menu-api",
    help="Restaurant Menu API CLI",
    add_completion=False,
)
console = Console()


# =============================================================================
# Database Commands
# =============================================================================


@app.command()
def init_db():
    """Create all database tables."""
    console.print(f"[blue]Creating tables on: {engine.url.render_as_string(hide_password=True)}[/blue]")
    Base.metadata.create_all(bind=engine)
    console.print("[green]✓ Tables created[/green]")


@app.command()
def seed(
    force: bool = typer.Option(False, "--force", "-f", help="Allow seeding in production"),
):
    """Seed the demo owner, restaurant and menu."""
    if settings.environment == "production" and not force:
        console.print("[red]Cannot seed production without --force[/red]")
        raise typer.Exit(1)

    Base.metadata.create_all(bind=engine)
    with get_db_context() as db:
        restaurant = seed_demo_data(db)

    if restaurant is None:
        console.print("[yellow]Demo data already present[/yellow]")
    else:
        console.print(f"[green]✓ Seeded restaurant '{restaurant.slug}' (id={restaurant.id})[/green]")


# =============================================================================
# Metrics Commands
# =============================================================================


@app.command()
def overview(
    restaurant_id: int = typer.Argument(..., help="Restaurant id"),
    user_id: int = typer.Option(..., "--user-id", "-u", help="Owner user id"),
):
    """Print the metrics overview of a restaurant."""
    with get_db_context() as db:
        result = MetricsService(db).get_restaurant_overview(restaurant_id, user_id)

    if not result.success:
        console.print(f"[red]✗ {result.error}[/red]")
        raise typer.Exit(1)

    data = result.data
    table = Table(title=f"Restaurant {restaurant_id} metrics")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Products", str(data.total_products))
    table.add_row("Views", str(data.total_views))
    table.add_row("Added to cart", str(data.total_added_to_cart))
    table.add_row("Average conversion rate", f"{data.average_conversion_rate:.2f}%")
    if data.top_product is not None:
        table.add_row(
            "Top product",
            f"{data.top_product.product.name} ({data.top_product.views} views)",
        )
    console.print(table)


if __name__ == "__main__":
    app()
