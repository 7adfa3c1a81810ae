"""Database management commands."""

import typer
from rich.console import Console

from src.bilemo.cli.fixtures import DEMO_CLIENT_EMAIL, load_fixtures
from src.bilemo.runtime.init_db import init_db

console = Console()


def init_db_command() -> None:
    """Create all database tables."""
    init_db()
    console.print("[green]✅ Database tables created[/green]")


def load_fixtures_command(
    products: int = typer.Option(100, "--products", "-p", min=0, help="Number of products to create"),
    seed: int | None = typer.Option(None, "--seed", help="Seed for reproducible data"),
) -> None:
    """Load the demo client and a product catalogue."""
    db = init_db()

    with db.session_scope() as session:
        client, count = load_fixtures(session, products=products, seed=seed)

    if client is None:
        console.print(f"[yellow]Client {DEMO_CLIENT_EMAIL} already exists[/yellow]")
    else:
        console.print(f"[green]✅ Created client {DEMO_CLIENT_EMAIL} (id {client.id})[/green]")
    console.print(f"[green]✅ Created {count} products[/green]")


def register_db_commands(app: typer.Typer) -> None:
    app.command("init-db")(init_db_command)
    app.command("load-fixtures")(load_fixtures_command)
