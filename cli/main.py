# cli/main.py
import click

from core.config import settings
from core.logging_config import setup_logging
from .commands.book import book
from .commands.db import db
from .commands.lending import lending
from .commands.user import user

@click.group()
@click.option('--database-url', envvar='DATABASE_URL', default=None,
              help='SQLAlchemy database URL (default: DATABASE_URL or sqlite:///library.db)')
@click.option('--log-level', default=None, help='Logging level (default: LOG_LEVEL or INFO)')
@click.pass_context
def cli(ctx, database_url, log_level):
    """Library Ledger CLI"""
    setup_logging(log_level or settings.log_level, settings.log_file)
    ctx.ensure_object(dict)
    ctx.obj['database_url'] = database_url

@cli.command()
@click.option('--host', default=None, help='Bind address (default: API_HOST)')
@click.option('--port', default=None, type=int, help='Port (default: API_PORT)')
@click.option('--reload/--no-reload', default=False, help='Reload on code changes')
@click.pass_context
def serve(ctx, host, port, reload):
    """Run the REST API with uvicorn"""
    import uvicorn

    if ctx.obj.get('database_url'):
        settings.database_url = ctx.obj['database_url']
    uvicorn.run(
        "api.main:app",
        host=host or settings.api_host,
        port=port or settings.api_port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )

cli.add_command(db)
cli.add_command(book)
cli.add_command(user)
cli.add_command(lending)

def main():
    """Entry point for the CLI"""
    cli()

if __name__ == '__main__':
    main()
