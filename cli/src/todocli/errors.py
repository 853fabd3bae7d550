import functools
import sys

import click
from loguru import logger

from todostore.exceptions import TodoStoreError


def handle_store_errors(func):
    """Report store failures as a message and exit status 1."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except TodoStoreError as e:
            logger.debug("{} failed: {!r}", func.__name__, e)
            click.echo(f"Error: {e}", err=True)
            sys.exit(1)
    return wrapper
