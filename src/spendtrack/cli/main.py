"""Main CLI entry point."""

import logging

import click
from spendtrack.database.factories import create_sqlite_gateway

# Import and register all commands at module level
from spendtrack.cli.commands import (
    category,
    establishment,
    expense,
    seed,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides SPENDTRACK_DB_PATH environment variable)",
    envvar="SPENDTRACK_DB_PATH",
)
@click.option("--verbose", "-v", is_flag=True, help="Log debug output, including SQL statements")
@click.pass_context
def cli(ctx, db_path: str | None, verbose: bool):
    """Spendtrack - Expense entry tracking.

    Record expenses against categories and establishments, keeping every
    entry tied to existing records.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        gateway = create_sqlite_gateway(database_path=db_path)
        gateway.connect()
        gateway.initialize_schema()
        ctx.obj["gateway"] = gateway
        ctx.call_on_close(gateway.disconnect)


# Register all commands
category.register_commands(cli)
establishment.register_commands(cli)
expense.register_commands(cli)
seed.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
