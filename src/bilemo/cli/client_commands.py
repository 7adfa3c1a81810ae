"""Client account commands."""

import asyncio

import typer
from rich.console import Console
from rich.table import Table
from sqlmodel import select

from src.bilemo.core.errors import BileMoError
from src.bilemo.core.services import ClientService, DbSessionService, RedisService
from src.bilemo.core.storage import build_tag_cache
from src.bilemo.entities.core.client import ClientTable
from src.bilemo.runtime.context import get_config

console = Console()


def create_client(
    email: str = typer.Argument(..., help="Login email of the client"),
    password: str = typer.Argument(..., help="Password of the client"),
    admin: bool = typer.Option(False, "--admin", help="Grant ROLE_ADMIN"),
) -> None:
    """Create a client account."""
    db = DbSessionService()
    try:
        with db.session_scope() as session:
            client = ClientService(session).create_client(email, password, admin=admin)
    except BileMoError as e:
        console.print(f"[red]❌ {e.message}[/red]")
        raise typer.Exit(code=1) from e

    role = "admin" if client.is_admin else "user"
    console.print(f"[green]✅ Created {role} client {client.email} (id {client.id})[/green]")


def list_clients() -> None:
    """List client accounts."""
    db = DbSessionService()
    with db.session_scope() as session:
        rows = session.exec(select(ClientTable).order_by(ClientTable.id)).all()

        if not rows:
            console.print("[yellow]No clients found[/yellow]")
            return

        table = Table(title="Clients")
        table.add_column("ID", style="cyan")
        table.add_column("Email", style="green")
        table.add_column("Roles", style="magenta")
        for row in rows:
            table.add_row(str(row.id), row.email, ", ".join(row.roles) or "ROLE_USER")

    console.print(table)


async def _delete_client(client_id: int) -> None:
    redis_service = RedisService()
    cache = await build_tag_cache(get_config().cache, redis_service)
    try:
        with DbSessionService().session_scope() as session:
            await ClientService(session, cache).delete_client(client_id)
    finally:
        await redis_service.close()


def delete_client(
    client_id: int = typer.Argument(..., help="Identifier of the client"),
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation prompt"),
) -> None:
    """Delete a client together with its users."""
    if not force and not typer.confirm(f"Delete client {client_id} and all its users?"):
        console.print("[yellow]Aborted[/yellow]")
        raise typer.Exit(code=0)

    try:
        asyncio.run(_delete_client(client_id))
    except BileMoError as e:
        console.print(f"[red]❌ {e.message}[/red]")
        raise typer.Exit(code=1) from e

    console.print(f"[green]✅ Deleted client {client_id}[/green]")


def register_client_commands(app: typer.Typer) -> None:
    app.command("create-client")(create_client)
    app.command("list-clients")(list_clients)
    app.command("delete-client")(delete_client)
