# core/services/catalog_service.py
import logging
from datetime import date
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm.exc import StaleDataError

from core.errors import ConflictError, NotFoundError, ValidationError
from core.sa.database import Database
from core.sa.models import Book, User
from core.sa.repositories import BookRepository, BorrowRecordRepository, UserRepository
from core.utils.validators import normalize_isbn, require_text

logger = logging.getLogger(__name__)

BOOK_FIELDS = ("title", "author", "isbn", "published_date", "genre")
USER_FIELDS = ("name", "email")

class CatalogService:
    """Book and User management.

    ``Book.available`` is never set here: new books start available and only
    LendingService changes the flag afterwards. Deleting a book or user that
    still has an outstanding borrow record is refused; otherwise its returned
    records are deleted explicitly in the same transaction.
    """

    def __init__(self, db: Database):
        self.db = db

    # Books

    def _clean_book_fields(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        cleaned = {}
        try:
            for key, value in fields.items():
                if key not in BOOK_FIELDS:
                    continue
                if key in ("title", "author"):
                    value = require_text(value, key.capitalize())
                elif key == "isbn":
                    value = normalize_isbn(value)
                elif key == "genre" and value is not None:
                    value = value.strip() or None
                cleaned[key] = value
        except ValueError as e:
            raise ValidationError(str(e)) from e
        return cleaned

    def add_book(
        self,
        title: str,
        author: str,
        isbn: Optional[str] = None,
        published_date: Optional[date] = None,
        genre: Optional[str] = None
    ) -> Book:
        """Add a book to the catalog.

        Raises:
            ValidationError: If title or author is empty or the ISBN is invalid
        """
        fields = self._clean_book_fields({
            "title": title,
            "author": author,
            "isbn": isbn,
            "published_date": published_date,
            "genre": genre,
        })
        with self.db.transaction() as session:
            book = BookRepository(session).add(Book(available=True, **fields))
        logger.info(f"Added book {book.id}: {book.title!r}")
        return book

    def get_book(self, book_id: int) -> Book:
        with self.db.transaction() as session:
            book = BookRepository(session).get_by_id(book_id)
        if book is None:
            raise NotFoundError("Book", book_id)
        return book

    def _isbn_filter(self, isbn: Optional[str]) -> Optional[str]:
        try:
            return normalize_isbn(isbn)
        except ValueError as e:
            raise ValidationError(str(e)) from e

    def list_books(
        self,
        query: Optional[str] = None,
        available: Optional[bool] = None,
        isbn: Optional[str] = None,
        limit: int = 20,
        offset: int = 0
    ) -> List[Book]:
        """Search the catalog.

        ``isbn`` is matched exactly after the same normalization as on
        insert, so hyphenated and bare forms find the same books.

        Raises:
            ValidationError: If ``isbn`` is not a valid ISBN
        """
        isbn = self._isbn_filter(isbn)
        with self.db.transaction() as session:
            return BookRepository(session).search_books(
                query=query, available=available, isbn=isbn, limit=limit, offset=offset
            )

    def count_books(
        self,
        query: Optional[str] = None,
        available: Optional[bool] = None,
        isbn: Optional[str] = None
    ) -> int:
        isbn = self._isbn_filter(isbn)
        with self.db.transaction() as session:
            return BookRepository(session).count_books(query=query, available=available, isbn=isbn)

    def update_book(self, book_id: int, **changes: Any) -> Book:
        """Change catalog fields of a book.

        Only title, author, isbn, published_date and genre can change; any
        other key (including ``available``) is ignored.

        Raises:
            NotFoundError: If the book does not exist
            ValidationError: If a new value is invalid
            ConflictError: If the book was changed concurrently
        """
        fields = self._clean_book_fields(changes)
        try:
            with self.db.transaction() as session:
                book = BookRepository(session).get_by_id(book_id, for_update=True)
                if book is None:
                    raise NotFoundError("Book", book_id)
                for key, value in fields.items():
                    setattr(book, key, value)
                session.flush()
        except StaleDataError as e:
            raise ConflictError(f"Book {book_id} was modified concurrently") from e
        logger.info(f"Updated book {book_id}: {sorted(fields)}")
        return book

    def delete_book(self, book_id: int) -> int:
        """Delete a book and its returned borrow history.

        Returns:
            Number of returned borrow records deleted with the book

        Raises:
            NotFoundError: If the book does not exist
            ConflictError: If the book is currently lent out
        """
        try:
            with self.db.transaction() as session:
                books = BookRepository(session)
                records = BorrowRecordRepository(session)
                book = books.get_by_id(book_id, for_update=True)
                if book is None:
                    raise NotFoundError("Book", book_id)
                if records.find_outstanding_by_book(book_id) is not None:
                    logger.warning(f"Delete rejected: book {book_id} is lent out")
                    raise ConflictError(f"Book {book_id} has an outstanding borrow record")
                removed = records.delete_returned_for_book(book_id)
                books.delete(book)
        except StaleDataError as e:
            raise ConflictError(f"Book {book_id} was modified concurrently") from e
        logger.info(f"Deleted book {book_id} and {removed} returned borrow records")
        return removed

    # Users

    def _clean_user_fields(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        cleaned = {}
        try:
            for key, value in fields.items():
                if key not in USER_FIELDS:
                    continue
                cleaned[key] = require_text(value, key.capitalize())
        except ValueError as e:
            raise ValidationError(str(e)) from e
        return cleaned

    def add_user(self, name: str, email: str) -> User:
        """Register a user.

        Raises:
            ValidationError: If name or email is empty
            ConflictError: If the email is already registered
        """
        fields = self._clean_user_fields({"name": name, "email": email})
        with self.db.transaction() as session:
            users = UserRepository(session)
            if users.get_by_email(fields["email"]) is not None:
                raise ConflictError(f"User with email '{fields['email']}' already exists")
            try:
                user = users.add(User(**fields))
            except IntegrityError as e:
                raise ConflictError(f"User with email '{fields['email']}' already exists") from e
        logger.info(f"Added user {user.id}: {user.email}")
        return user

    def get_user(self, user_id: int) -> User:
        with self.db.transaction() as session:
            user = UserRepository(session).get_by_id(user_id)
        if user is None:
            raise NotFoundError("User", user_id)
        return user

    def list_users(self, query: Optional[str] = None, limit: int = 20, offset: int = 0) -> List[User]:
        with self.db.transaction() as session:
            return UserRepository(session).search_users(query=query, limit=limit, offset=offset)

    def count_users(self, query: Optional[str] = None) -> int:
        with self.db.transaction() as session:
            return UserRepository(session).count_users(query)

    def update_user(self, user_id: int, **changes: Any) -> User:
        """Change a user's name and/or email.

        Raises:
            NotFoundError: If the user does not exist
            ValidationError: If a new value is empty
            ConflictError: If the new email belongs to another user
        """
        fields = self._clean_user_fields(changes)
        with self.db.transaction() as session:
            users = UserRepository(session)
            user = users.get_by_id(user_id, for_update=True)
            if user is None:
                raise NotFoundError("User", user_id)
            email = fields.get("email")
            if email is not None:
                other = users.get_by_email(email)
                if other is not None and other.id != user_id:
                    raise ConflictError(f"User with email '{email}' already exists")
            for key, value in fields.items():
                setattr(user, key, value)
            try:
                session.flush()
            except IntegrityError as e:
                raise ConflictError(f"User with email '{email}' already exists") from e
        logger.info(f"Updated user {user_id}: {sorted(fields)}")
        return user

    def delete_user(self, user_id: int) -> int:
        """Delete a user and their returned borrow history.

        Returns:
            Number of returned borrow records deleted with the user

        Raises:
            NotFoundError: If the user does not exist
            ConflictError: If the user still has books to return
        """
        with self.db.transaction() as session:
            users = UserRepository(session)
            records = BorrowRecordRepository(session)
            user = users.get_by_id(user_id, for_update=True)
            if user is None:
                raise NotFoundError("User", user_id)
            outstanding = records.count_outstanding_for_user(user_id)
            if outstanding:
                logger.warning(f"Delete rejected: user {user_id} has {outstanding} outstanding records")
                raise ConflictError(f"User {user_id} has {outstanding} outstanding borrow records")
            removed = records.delete_returned_for_user(user_id)
            try:
                users.delete(user)
            except IntegrityError as e:
                # A borrow committed after the outstanding count was taken
                logger.warning(f"Delete rejected: user {user_id} borrowed a book concurrently")
                raise ConflictError(f"User {user_id} has outstanding borrow records") from e
        logger.info(f"Deleted user {user_id} and {removed} returned borrow records")
        return removed
