import click
from todostore import lifecycle
from todostore.service import todo as todo_service
from todocli.config import get_gateway
from todocli.errors import handle_store_errors
from todocli.time_util import utc_to_local


@click.command('get')
@click.argument('todo_id')
@handle_store_errors
def todo_get(todo_id):
    """Show todo details."""
    todo = todo_service.get_todo(get_gateway(), todo_id)

    click.echo(f"ID:        {todo.id}")
    click.echo(f"Status:    {todo.status.value}")
    click.echo(f"Tags:      {', '.join(todo.tags) if todo.tags else '-'}")
    click.echo(f"Created:   {utc_to_local(todo.created_at)}")
    if todo.ongoing_start_time:
        click.echo(f"Ongoing:   {utc_to_local(todo.ongoing_start_time)} ({lifecycle.elapsed(todo.ongoing_start_time)})")
    if todo.completed_at:
        click.echo(f"Completed: {utc_to_local(todo.completed_at)}")
    if todo.image:
        click.echo(f"Image:     {len(todo.image)} bytes attached")
    click.echo("")
    click.echo(todo.text)
