import click

from .add import tag_add
from .list import tag_list
from .delete import tag_delete

@click.group('tag')
def tag_group():
    """Manage tags."""
    pass

tag_group.add_command(tag_add)
tag_group.add_command(tag_list)
tag_group.add_command(tag_delete)
