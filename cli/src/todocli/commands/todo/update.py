import click
from todostore.service import todo as todo_service
from todocli.config import get_gateway
from todocli.errors import handle_store_errors


@click.command('update')
@click.argument('todo_id')
@click.option('--text', '-x', default=None, help='New text')
@click.option('--tags', '-t', default=None, help='New comma-separated tags (empty string clears)')
@handle_store_errors
def todo_update(todo_id, text, tags):
    """Update a todo's text or tags."""
    if text is None and tags is None:
        click.echo("No fields to update")
        return

    gateway = get_gateway()
    todo = None
    if text is not None:
        todo = todo_service.update_text(gateway, todo_id, text)
    if tags is not None:
        todo = todo_service.set_tags(gateway, todo_id, [t.strip() for t in tags.split(',')])
    click.echo(f"Updated todo '{todo.text}' ({todo.id})")
