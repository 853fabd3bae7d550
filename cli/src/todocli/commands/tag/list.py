import click
from tabulate import tabulate
from todostore.service import tag as tag_service
from todocli.config import get_gateway
from todocli.errors import handle_store_errors


@click.command('list')
@handle_store_errors
def tag_list():
    """List tags with how many todos use each."""
    tags = tag_service.list_tags(get_gateway())
    if not tags:
        click.echo("No tags found")
        return
    table = [[tag.name, count] for tag, count in tags]
    click.echo(tabulate(table, headers=["Tag", "Todos"], tablefmt="simple"))
