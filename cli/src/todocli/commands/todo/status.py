import click
from todostore.entity.dto import Status
from todostore.service import todo as todo_service
from todocli.config import get_gateway
from todocli.errors import handle_store_errors


@click.command('status')
@click.argument('todo_id')
@click.argument('status', type=click.Choice([s.value for s in Status]))
@handle_store_errors
def todo_status(todo_id, status):
    """Move a todo to STATUS."""
    todo = todo_service.change_status(get_gateway(), todo_id, status)
    click.echo(f"Todo '{todo.text}' ({todo.id}) is now {todo.status.value}")


@click.command('cycle')
@click.argument('todo_id')
@handle_store_errors
def todo_cycle(todo_id):
    """Advance a todo to the next status (todo -> planned -> ongoing -> done -> todo)."""
    todo = todo_service.cycle_todo(get_gateway(), todo_id)
    click.echo(f"Todo '{todo.text}' ({todo.id}) is now {todo.status.value}")
