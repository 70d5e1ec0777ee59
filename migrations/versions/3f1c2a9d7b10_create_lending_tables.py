"""Create book, user and borrow_record tables

Revision ID: 3f1c2a9d7b10
Revises: 
Create Date: 2026-10-17 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1c2a9d7b10'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table('book',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=500), nullable=False),
        sa.Column('author', sa.String(length=255), nullable=False),
        sa.Column('isbn', sa.String(length=20), nullable=True),
        sa.Column('published_date', sa.Date(), nullable=True),
        sa.Column('genre', sa.String(length=100), nullable=True),
        sa.Column('available', sa.Boolean(), nullable=False),
        sa.Column('version', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('idx_book_title', 'book', ['title'])
    op.create_index('idx_book_author', 'book', ['author'])
    op.create_index('idx_book_isbn', 'book', ['isbn'])
    op.create_index('idx_book_available', 'book', ['available'])

    op.create_table('user',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email', name='uix_user_email')
    )

    op.create_table('borrow_record',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('book_id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('borrow_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('return_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('returned', sa.Boolean(), nullable=False),
        sa.Column('version', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['book_id'], ['book.id'], ),
        sa.ForeignKeyConstraint(['user_id'], ['user.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('idx_borrow_record_book_returned', 'borrow_record', ['book_id', 'returned'])
    op.create_index('idx_borrow_record_user_returned', 'borrow_record', ['user_id', 'returned'])
    op.create_index('idx_borrow_record_borrow_date', 'borrow_record', ['borrow_date'])


def downgrade() -> None:
    # Drop tables in reverse order
    op.drop_index('idx_borrow_record_borrow_date', table_name='borrow_record')
    op.drop_index('idx_borrow_record_user_returned', table_name='borrow_record')
    op.drop_index('idx_borrow_record_book_returned', table_name='borrow_record')
    op.drop_table('borrow_record')
    op.drop_table('user')
    op.drop_index('idx_book_available', table_name='book')
    op.drop_index('idx_book_isbn', table_name='book')
    op.drop_index('idx_book_author', table_name='book')
    op.drop_index('idx_book_title', table_name='book')
    op.drop_table('book')
