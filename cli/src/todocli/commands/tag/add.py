import click
from todostore.service import tag as tag_service
from todocli.config import get_gateway
from todocli.errors import handle_store_errors


@click.command('add')
@click.argument('name')
@handle_store_errors
def tag_add(name):
    """Register a tag. Existing tags are left as they are."""
    tag = tag_service.create_tag(get_gateway(), name)
    click.echo(f"Tag '{tag.name}' ready")
