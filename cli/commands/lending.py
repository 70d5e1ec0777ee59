import click
from typing import Optional
from core.services.lending_service import LendingService
from ..utils import get_db, handle_errors, print_empty, print_record

@click.group()
def lending():
    """Borrow and return books"""
    pass

@lending.command()
@click.argument('user_id', type=int)
@click.argument('book_id', type=int)
@click.pass_context
@handle_errors
def borrow(ctx, user_id: int, book_id: int):
    """Lend BOOK_ID to USER_ID

    Example:
        library-ledger lending borrow 7 1
    """
    record = LendingService(get_db(ctx)).borrow_book(user_id, book_id)
    click.echo(click.style("Borrowed:", fg='green'))
    print_record(record)

@lending.command(name='return')
@click.argument('record_id', type=int)
@click.pass_context
@handle_errors
def return_book(ctx, record_id: int):
    """Return the book of borrow record RECORD_ID"""
    record = LendingService(get_db(ctx)).return_book(record_id)
    click.echo(click.style("Returned:", fg='green'))
    print_record(record)

@lending.command(name='list')
@click.option('--user', 'user_id', type=int, default=None, help="Only this user's outstanding records")
@click.option('--outstanding', is_flag=True, help='Only records not yet returned')
@click.option('--desc', 'descending', is_flag=True, help='Newest borrow first')
@click.pass_context
@handle_errors
def list_records(ctx, user_id: Optional[int], outstanding: bool, descending: bool):
    """List borrow records, oldest borrow first"""
    service = LendingService(get_db(ctx))
    if user_id is not None:
        records = service.list_outstanding_for_user(user_id, descending=descending)
    else:
        records = service.list_all(returned=False if outstanding else None, descending=descending)
    if print_empty(records, 'borrow records'):
        return
    for record in records:
        print_record(record)

@lending.command()
@click.pass_context
@handle_errors
def audit(ctx):
    """Check that every book's availability matches the ledger"""
    mismatched = LendingService(get_db(ctx)).audit_availability()
    if not mismatched:
        click.echo(click.style("All books consistent with the ledger", fg='green'))
        return
    click.echo(click.style(f"{len(mismatched)} inconsistent books: ", fg='red') +
               ", ".join(str(book_id) for book_id in mismatched))
    raise click.exceptions.Exit(1)
