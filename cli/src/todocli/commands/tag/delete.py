import click
from todostore.service import tag as tag_service
from todocli.config import get_gateway
from todocli.errors import handle_store_errors


@click.command('delete')
@click.argument('name')
@click.option('--yes', '-y', is_flag=True, default=False, help='Do not ask for confirmation')
@handle_store_errors
def tag_delete(name, yes):
    """Delete a tag and remove it from every todo."""
    gateway = get_gateway()
    count = tag_service.usage_count(gateway, name)
    if count and not yes:
        click.confirm(f"Tag '{name}' is used by {count} todo(s). Delete it?", abort=True)
    stripped = tag_service.delete_tag(gateway, name)
    click.echo(f"Deleted tag '{name}' (removed from {stripped} todos)")
