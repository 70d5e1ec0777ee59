import click
from typing import Optional
from core.services.catalog_service import CatalogService
from ..utils import get_db, handle_errors, print_empty, print_user

@click.group()
def user():
    """User related commands"""
    pass

@user.command()
@click.argument('name')
@click.argument('email')
@click.pass_context
@handle_errors
def add(ctx, name: str, email: str):
    """Register a user"""
    created = CatalogService(get_db(ctx)).add_user(name=name, email=email)
    click.echo(click.style("Added user:", fg='green'))
    print_user(created)

@user.command(name='list')
@click.option('--query', '-q', default=None, help='Search name and email')
@click.option('--limit', default=50, type=int, help='Maximum number of users')
@click.pass_context
@handle_errors
def list_users(ctx, query: Optional[str], limit: int):
    """List users"""
    users = CatalogService(get_db(ctx)).list_users(query=query, limit=limit)
    if print_empty(users, 'users'):
        return
    for item in users:
        print_user(item)

@user.command()
@click.argument('user_id', type=int)
@click.pass_context
@handle_errors
def delete(ctx, user_id: int):
    """Delete a user with no outstanding loans"""
    removed = CatalogService(get_db(ctx)).delete_user(user_id)
    click.echo(click.style(f"Deleted user {user_id}", fg='green') +
               f" ({removed} returned borrow records removed)")
