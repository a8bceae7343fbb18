import click
from flask import current_app
from flask.cli import with_appcontext

from services.auth_service import signup
from services.errors import BrainshareError


@click.command("create-user")
@click.option("--username", prompt=True, help="Username of the new user")
@click.option(
    "--password",
    prompt=True,
    hide_input=True,
    confirmation_prompt=True,
    help="Password for the new user",
)
@with_appcontext
def create_user(username, password):
    """Create a new user with a hashed password."""
    try:
        user = signup(username, password, rounds=current_app.config.get("BCRYPT_ROUNDS"))
    except BrainshareError as e:
        click.echo(f"Could not create user {username}: {e.message}")
        raise SystemExit(1)

    click.echo(f"User {user.username} created successfully.")
