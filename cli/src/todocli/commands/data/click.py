import click

from .export import data_export
from .import_json import data_import

@click.group('data')
def data_group():
    """Export and import snapshots."""
    pass

data_group.add_command(data_export)
data_group.add_command(data_import)
