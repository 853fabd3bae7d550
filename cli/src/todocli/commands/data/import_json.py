import sys

import click
from todostore.service import transfer
from todocli.config import config, get_gateway
from todocli.errors import handle_store_errors


@click.command('import')
@click.argument('path', type=click.Path(exists=True, dir_okay=False))
@click.option('--yes', '-y', is_flag=True, default=False, help='Do not ask for confirmation')
@handle_store_errors
def data_import(path, yes):
    """Replace all todos with the contents of a JSON snapshot."""
    gateway = get_gateway()
    with open(path, encoding="utf-8") as f:
        text = f.read()

    if not yes and gateway.list_all():
        click.confirm(
            "Importing data will replace all existing todos. This action cannot be undone. Continue?",
            abort=True,
        )

    result = transfer.import_data(gateway, text, require_tags=config.get("require_tags", False))
    if not result.success:
        click.echo(result.message, err=True)
        sys.exit(1)
    click.echo(result.message)
