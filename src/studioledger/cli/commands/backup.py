"""Backup export and import commands."""

import json
from datetime import date

import click
from studioledger.cli.error_handling import handle_domain_error
from studioledger.domain.backup import BackupService
from studioledger.domain.errors import DomainError


@click.group()
def backup_group():
    """Export or restore a JSON backup."""
    pass


@backup_group.command("export")
@click.argument("path", type=click.Path(dir_okay=False, writable=True), required=False)
@click.pass_context
def export_backup(ctx, path: str | None):
    """Write every record and preference to a JSON file.

    PATH defaults to backup_finances_nail_<today>.json in the current
    directory.
    """
    service = BackupService(ctx.obj["db"])
    path = path or f"backup_finances_nail_{date.today().isoformat()}.json"

    snapshot = service.export_snapshot()
    with open(path, "w", encoding="utf-8") as f:
        json.dump(snapshot, f, indent=2, ensure_ascii=False)

    click.echo(f"Exported backup to {path}")
    click.echo(
        f"  {len(snapshot['transactions'])} expenses, {len(snapshot['revenues'])} revenues, "
        f"{len(snapshot['withdrawals'])} withdrawals"
    )


@backup_group.command("import")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def import_backup(ctx, path: str, yes: bool):
    """Replace all current data with a JSON backup."""
    service = BackupService(ctx.obj["db"])

    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        click.echo(f"Error: {path} is not valid JSON: {e}", err=True)
        ctx.exit(1)

    if not yes and not click.confirm("This replaces all your current data. Continue?"):
        click.echo("Import cancelled.")
        return

    try:
        counts = service.import_snapshot(data)
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)

    click.echo(f"Imported backup from {path}")
    click.echo(
        f"  {counts['transactions']} expenses, {counts['revenues']} revenues, "
        f"{counts['withdrawals']} withdrawals"
    )
    if counts["recreated"]:
        click.echo(f"  Recreated {counts['recreated']} missing withdrawal record(s)")


def register_commands(cli: click.Group) -> None:
    """Register backup commands with main CLI."""
    cli.add_command(backup_group, name="backup")
