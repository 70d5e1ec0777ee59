# cli/utils.py
import functools
import click
from typing import Callable, Iterable

from core.errors import LibraryError
from core.sa.database import Database
from core.sa.models import Book, BorrowRecord, User

def get_db(ctx: click.Context) -> Database:
    """Get the Database for this invocation, creating it on first use"""
    root = ctx.find_root()
    root.ensure_object(dict)
    if root.obj.get('db') is None:
        root.obj['db'] = Database(root.obj.get('database_url'))
    return root.obj['db']

def handle_errors(func: Callable) -> Callable:
    """Print catalog/lending errors in red and exit with status 1"""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except LibraryError as e:
            click.echo(click.style(f"Error: {e.message}", fg='red'), err=True)
            raise click.exceptions.Exit(1)
    return wrapper

def format_date(value) -> str:
    return value.strftime("%Y-%m-%d %H:%M") if value else '-'

def print_book(book: Book) -> None:
    status = click.style("available", fg='green') if book.available else click.style("lent out", fg='yellow')
    click.echo(
        click.style(f"[{book.id}] ", fg='cyan') +
        click.style(book.title, fg='blue') +
        f" by {book.author} ({status})"
    )
    details = [
        f"ISBN: {book.isbn}" if book.isbn else None,
        f"Published: {book.published_date.isoformat()}" if book.published_date else None,
        f"Genre: {book.genre}" if book.genre else None,
    ]
    details = [d for d in details if d]
    if details:
        click.echo("    " + ", ".join(details))

def print_user(user: User) -> None:
    click.echo(click.style(f"[{user.id}] ", fg='cyan') + f"{user.name} <{user.email}>")

def print_record(record: BorrowRecord) -> None:
    if record.returned:
        state = click.style(f"returned {format_date(record.return_date)}", fg='green')
    else:
        state = click.style("outstanding", fg='yellow')
    click.echo(
        click.style(f"#{record.id} ", fg='cyan') +
        f"book {record.book_id} ({record.book_title}) -> user {record.user_id}, "
        f"borrowed {format_date(record.borrow_date)}, " + state
    )

def print_empty(items: Iterable, item_type: str) -> bool:
    """Print a notice and return True when there is nothing to list"""
    if not list(items):
        click.echo(click.style(f"No {item_type} found", fg='yellow'))
        return True
    return False
