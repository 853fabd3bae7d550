import click
from todostore.service import todo as todo_service
from todocli.config import get_gateway
from todocli.errors import handle_store_errors


@click.command('delete')
@click.argument('todo_id')
@handle_store_errors
def todo_delete(todo_id):
    """Delete a todo."""
    todo_service.delete_todo(get_gateway(), todo_id)
    click.echo(f"Deleted todo {todo_id}")
