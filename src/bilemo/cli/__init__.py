"""Main CLI application module."""

import typer

from .client_commands import register_client_commands
from .db_commands import register_db_commands

app = typer.Typer(
    help="BileMo API management tool",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

register_db_commands(app)
register_client_commands(app)


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
