import click
from ..utils import get_db

@click.group()
def db():
    """Database management commands"""
    pass

@db.command()
@click.pass_context
def init(ctx):
    """Create any missing tables"""
    database = get_db(ctx)
    database.init_db()
    click.echo(click.style("Database initialized: ", fg='blue') +
               click.style(database.engine.url.render_as_string(hide_password=True), fg='cyan'))

@db.command()
@click.confirmation_option(prompt='This deletes every book, user and borrow record. Continue?')
@click.pass_context
def reset(ctx):
    """Drop and recreate all tables"""
    database = get_db(ctx)
    database.drop_all()
    database.init_db()
    click.echo(click.style("Database reset", fg='green'))
