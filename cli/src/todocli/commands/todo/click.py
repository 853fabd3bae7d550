import click

from .add import todo_add
from .list import todo_list
from .get import todo_get
from .status import todo_status, todo_cycle
from .update import todo_update
from .delete import todo_delete

@click.group('todo')
def todo_group():
    """Manage todos."""
    pass

todo_group.add_command(todo_add)
todo_group.add_command(todo_list)
todo_group.add_command(todo_get)
todo_group.add_command(todo_status)
todo_group.add_command(todo_cycle)
todo_group.add_command(todo_update)
todo_group.add_command(todo_delete)
