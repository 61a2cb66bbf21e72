"""Main CLI entry point."""

import logging

import click
from studioledger.database.factories import create_sqlite_database

# Import and register all commands at module level
from studioledger.cli.commands import (
    expense,
    revenue,
    withdrawal,
    config,
    report,
    backup,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides STUDIOLEDGER_DB_PATH environment variable)",
    envvar="STUDIOLEDGER_DB_PATH",
)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
@click.pass_context
def cli(ctx, db_path: str | None, verbose: bool):
    """Studioledger - Finance tracking for a nail studio.

    Record studio and personal expenses (with installments), revenue and
    owner withdrawals, and see the monthly overview: health, smart budget
    distribution and pro-labore suggestions.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
expense.register_commands(cli)
revenue.register_commands(cli)
withdrawal.register_commands(cli)
config.register_commands(cli)
report.register_commands(cli)
backup.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
