import os
import sys

import click
from dotenv import load_dotenv
from loguru import logger

from todocli.commands.todo.click import todo_group
from todocli.commands.tag.click import tag_group
from todocli.commands.data.click import data_group
CONTEXT_SETTINGS = dict(help_option_names=['-h', '--help'])

@click.group(context_settings=CONTEXT_SETTINGS)
def cli():
    """Track todos through todo / planned / ongoing / done."""
    load_dotenv()
    logger.remove()
    logger.add(sys.stderr, level=os.getenv("TODO_LOG_LEVEL", "WARNING"))


# Register commands
cli.add_command(todo_group)
cli.add_command(tag_group)
cli.add_command(data_group)
