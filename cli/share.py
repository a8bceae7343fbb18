import click
from flask import current_app
from flask.cli import with_appcontext

from models import User
from services.errors import BrainshareError


@click.command("unpublish")
@click.option("--username", required=True, help="User whose share link to revoke")
@with_appcontext
def unpublish_command(username):
    """Revoke a user's shared brain link."""
    user = User.query.filter_by(username=username).first()
    if not user:
        click.echo(f"User {username} not found.")
        raise SystemExit(1)

    try:
        removed = current_app.extensions["share_links"].unpublish(user.id)
    except BrainshareError as e:
        click.echo(f"Could not unpublish {username}: {e.message}")
        raise SystemExit(1)

    if removed:
        click.echo(f"Share link for {username} removed.")
    else:
        click.echo(f"{username} has no share link.")
