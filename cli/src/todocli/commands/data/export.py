import click
from todostore.service import transfer
from todocli.config import get_gateway
from todocli.errors import handle_store_errors


@click.command('export')
@click.option('--output', '-o', default=None, help='Output file (default: todo-backup-YYYY-MM-DD.json, "-" for stdout)')
@handle_store_errors
def data_export(output):
    """Export all todos and tags to a JSON snapshot."""
    snapshot = transfer.export_snapshot(get_gateway())
    text = transfer.dump_snapshot(snapshot)
    if output == "-":
        click.echo(text)
        return
    path = output or transfer.backup_filename()
    with open(path, "w", encoding="utf-8") as f:
        f.write(text)
    click.echo(f"Exported {len(snapshot['todos'])} todos to {path}")
