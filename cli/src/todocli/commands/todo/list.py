import click
from tabulate import tabulate
from todostore import lifecycle
from todostore.entity.dto import Status
from todostore.service import todo as todo_service
from todocli.config import get_gateway
from todocli.errors import handle_store_errors
from todocli.time_util import utc_to_local


def _first_line(text: str, width: int = 60) -> str:
    line = text.splitlines()[0] if text else ""
    return line if len(line) <= width else line[:width - 3] + "..."


@click.command('list')
@click.option('--status', '-s', default=None, type=click.Choice([s.value for s in Status]), help='Filter by status')
@click.option('--tag', '-t', default=None, help='Filter by tag')
@handle_store_errors
def todo_list(status, tag):
    """List todos, grouped by status and newest first."""
    todos = todo_service.sort_todos(todo_service.list_todos(get_gateway(), status=status))
    if tag:
        todos = [t for t in todos if tag in t.tags]
    if not todos:
        click.echo("No todos found")
        return

    table = []
    for t in todos:
        if t.status == Status.ONGOING:
            timing = lifecycle.elapsed(t.ongoing_start_time)
        elif t.status == Status.DONE:
            timing = utc_to_local(t.completed_at)
        else:
            timing = "-"
        table.append([
            t.id,
            _first_line(t.text),
            t.status.value,
            timing,
            ",".join(t.tags) if t.tags else "-",
            utc_to_local(t.created_at),
        ])
    click.echo(tabulate(table, headers=["ID", "Text", "Status", "Elapsed/Done", "Tags", "Created"], tablefmt="simple"))
