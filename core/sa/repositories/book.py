# core/sa/repositories/book.py
from typing import Optional, List
from sqlalchemy import asc, desc
from sqlalchemy.orm import Session
from ..models import Book

class BookRepository:
    """Repository for managing Book entities.

    The repository never commits; callers own the transaction (see
    ``Database.transaction``).
    """

    def __init__(self, session: Session):
        """Initialize the repository with a database session.

        Args:
            session: SQLAlchemy session for database operations
        """
        self.session = session

    def get_by_id(self, book_id: int, for_update: bool = False) -> Optional[Book]:
        """Get a book by its ID.

        Args:
            book_id: The ID of the book to retrieve
            for_update: Lock the row for the rest of the transaction
                        (ignored by backends without row locks, e.g. SQLite)

        Returns:
            The Book object if found, None otherwise
        """
        query = self.session.query(Book).filter(Book.id == book_id)
        if for_update:
            query = query.with_for_update()
        return query.one_or_none()

    def _filtered(
        self,
        query: Optional[str] = None,
        available: Optional[bool] = None,
        isbn: Optional[str] = None
    ):
        base_query = self.session.query(Book)
        if query and query.strip():
            pattern = f"%{query.strip()}%"
            base_query = base_query.filter(Book.title.ilike(pattern) | Book.author.ilike(pattern))
        if available is not None:
            base_query = base_query.filter(Book.available.is_(available))
        if isbn:
            base_query = base_query.filter(Book.isbn == isbn)
        return base_query

    def search_books(
        self,
        query: Optional[str] = None,
        available: Optional[bool] = None,
        isbn: Optional[str] = None,
        sort_order: str = "asc",
        limit: int = 20,
        offset: int = 0
    ) -> List[Book]:
        """Search books by title or author.

        Args:
            query: Search string matched against title and author
            available: Only return books with this availability when set
            isbn: Only return books with exactly this (normalized) ISBN
            sort_order: Order by ID ascending ("asc") or descending ("desc")
            limit: Maximum number of results to return
            offset: Number of records to skip

        Returns:
            List of matching Book objects
        """
        order = desc(Book.id) if sort_order == "desc" else asc(Book.id)
        return (
            self._filtered(query, available, isbn)
            .order_by(order)
            .offset(offset)
            .limit(limit)
            .all()
        )

    def count_books(
        self,
        query: Optional[str] = None,
        available: Optional[bool] = None,
        isbn: Optional[str] = None
    ) -> int:
        """Count books matching the same filters as search_books"""
        return self._filtered(query, available, isbn).count()

    def add(self, book: Book) -> Book:
        """Stage a new or changed book and flush it so it gets an ID"""
        self.session.add(book)
        self.session.flush()
        return book

    def delete(self, book: Book) -> None:
        self.session.delete(book)
        self.session.flush()
