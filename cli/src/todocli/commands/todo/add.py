import base64
import mimetypes

import click
from todostore.service import todo as todo_service
from todocli.config import get_gateway
from todocli.errors import handle_store_errors


def _read_image(path: str) -> str:
    mime, _ = mimetypes.guess_type(path)
    with open(path, "rb") as f:
        data = base64.b64encode(f.read()).decode("ascii")
    return f"data:{mime or 'application/octet-stream'};base64,{data}"


@click.command('add')
@click.argument('text')
@click.option('--image', '-i', default=None, type=click.Path(exists=True, dir_okay=False), help='Attach an image file')
@click.option('--tag', '-t', 'tags', multiple=True, help='Tag (repeatable)')
@handle_store_errors
def todo_add(text, image, tags):
    """Add a todo. A leading 'plan', 'going' or 'done' sets the status."""
    image_data = _read_image(image) if image else None
    todo = todo_service.create_todo(get_gateway(), text, image=image_data, tags=tags)
    click.echo(f"Created todo '{todo.text}' ({todo.id}) [{todo.status.value}]")
