import click
from typing import Optional
from core.services.catalog_service import CatalogService
from ..utils import get_db, handle_errors, print_book, print_empty

@click.group()
def book():
    """Book related commands"""
    pass

@book.command()
@click.argument('title')
@click.argument('author')
@click.option('--isbn', default=None, help='ISBN-10 or ISBN-13')
@click.option('--published', type=click.DateTime(formats=['%Y-%m-%d']), default=None,
              help='Publication date (YYYY-MM-DD)')
@click.option('--genre', default=None, help='Genre')
@click.pass_context
@handle_errors
def add(ctx, title: str, author: str, isbn: Optional[str], published, genre: Optional[str]):
    """Add a book to the catalog

    Example:
        library-ledger book add "Dune" "Frank Herbert" --isbn 9780441172719 --published 1965-08-01
    """
    catalog = CatalogService(get_db(ctx))
    created = catalog.add_book(
        title=title,
        author=author,
        isbn=isbn,
        published_date=published.date() if published else None,
        genre=genre,
    )
    click.echo(click.style("Added book:", fg='green'))
    print_book(created)

@book.command(name='list')
@click.option('--query', '-q', default=None, help='Search title and author')
@click.option('--available/--lent-out', default=None, help='Filter by availability')
@click.option('--isbn', default=None, help='Exact ISBN-10 or ISBN-13')
@click.option('--limit', default=50, type=int, help='Maximum number of books')
@click.pass_context
@handle_errors
def list_books(ctx, query: Optional[str], available: Optional[bool], isbn: Optional[str], limit: int):
    """List books in the catalog"""
    books = CatalogService(get_db(ctx)).list_books(
        query=query, available=available, isbn=isbn, limit=limit
    )
    if print_empty(books, 'books'):
        return
    for item in books:
        print_book(item)

@book.command()
@click.argument('book_id', type=int)
@click.pass_context
@handle_errors
def show(ctx, book_id: int):
    """Show a book"""
    print_book(CatalogService(get_db(ctx)).get_book(book_id))

@book.command()
@click.argument('book_id', type=int)
@click.pass_context
@handle_errors
def delete(ctx, book_id: int):
    """Delete a book that is not lent out, with its returned borrow history"""
    removed = CatalogService(get_db(ctx)).delete_book(book_id)
    click.echo(click.style(f"Deleted book {book_id}", fg='green') +
               f" ({removed} returned borrow records removed)")
