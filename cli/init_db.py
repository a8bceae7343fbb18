import click
from flask.cli import with_appcontext
from extensions import db


@click.command("init-db")
@click.option(
    "--drop/--no-drop",
    default=True,
    help="Drop existing tables before creating them.",
)
@with_appcontext
def init_db(drop):
    """Initialize the database, dropping all tables first by default.

    This is a destructive operation and should only be used during initial setup
    or when you want to completely reset the database.

    For normal database migrations, use 'flask db migrate' and 'flask db upgrade'
    commands provided by Flask-Migrate.
    """
    dialect_name = db.engine.dialect.name
    if drop:
        click.echo(f"{dialect_name.capitalize()} detected. Dropping all tables...")
        db.drop_all()

    db.create_all()
    click.echo("Database tables created.")
