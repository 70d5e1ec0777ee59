# core/services/lending_service.py
import logging
from datetime import datetime
from typing import Callable, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm.exc import StaleDataError

from core.errors import ConflictError, NotFoundError
from core.sa.database import Database
from core.sa.models import Book, BorrowRecord
from core.sa.models.base import utcnow
from core.sa.repositories import BookRepository, BorrowRecordRepository, UserRepository

logger = logging.getLogger(__name__)

class LendingService:
    """Borrow/return workflow over the lending ledger.

    This is the only writer of ``BorrowRecord`` rows and of ``Book.available``.
    Each operation runs in one transaction, so after every successful call a
    book is unavailable exactly when it has an outstanding (unreturned) record,
    and a failed call leaves nothing behind.

    Concurrent writers on the same book are serialized by a row lock where the
    backend has one and by the ``version`` column on Book and BorrowRecord
    everywhere: the loser of a race fails its versioned UPDATE, the transaction
    rolls back and the caller gets ConflictError.
    """

    def __init__(self, db: Database, clock: Callable[[], datetime] = utcnow):
        self.db = db
        self.clock = clock

    def borrow_book(self, user_id: int, book_id: int) -> BorrowRecord:
        """Lend a book to a user.

        Args:
            user_id: ID of the borrowing user
            book_id: ID of the book to lend

        Returns:
            The new outstanding BorrowRecord with ``book`` and ``user`` loaded

        Raises:
            NotFoundError: If the user or the book does not exist
            ConflictError: If the book already has an outstanding record
        """
        try:
            with self.db.transaction() as session:
                user = UserRepository(session).get_by_id(user_id, for_update=True)
                if user is None:
                    raise NotFoundError("User", user_id)

                book = BookRepository(session).get_by_id(book_id, for_update=True)
                if book is None:
                    raise NotFoundError("Book", book_id)

                records = BorrowRecordRepository(session)
                outstanding = records.find_outstanding_by_book(book.id)
                if outstanding is not None or not book.available:
                    logger.warning(f"Borrow rejected: book {book_id} is not available (user {user_id})")
                    raise ConflictError(f"Book {book_id} is not available")

                record = BorrowRecord(
                    book=book,
                    user=user,
                    borrow_date=self.clock(),
                    return_date=None,
                    returned=False,
                )
                book.available = False
                try:
                    records.add(record)
                except IntegrityError as e:
                    # The user was deleted after it was read
                    logger.warning(f"Borrow rejected: user {user_id} was deleted concurrently")
                    raise NotFoundError("User", user_id) from e
        except StaleDataError as e:
            logger.warning(f"Borrow rejected: book {book_id} was borrowed concurrently (user {user_id})")
            raise ConflictError(f"Book {book_id} is not available") from e

        logger.info(f"Book {book_id} borrowed by user {user_id} (record {record.id})")
        return record

    def return_book(self, record_id: int) -> BorrowRecord:
        """Close an outstanding borrow record and make its book available.

        Args:
            record_id: ID of the borrow record

        Returns:
            The updated BorrowRecord with ``book`` and ``user`` loaded

        Raises:
            NotFoundError: If the record does not exist
            ConflictError: If the record was already returned
        """
        try:
            with self.db.transaction() as session:
                records = BorrowRecordRepository(session)
                record = records.get_by_id(record_id, for_update=True)
                if record is None:
                    raise NotFoundError("BorrowRecord", record_id)
                if record.returned:
                    logger.warning(f"Return rejected: record {record_id} already returned")
                    raise ConflictError(f"Borrow record {record_id} already returned")

                book = BookRepository(session).get_by_id(record.book_id, for_update=True)
                record.returned = True
                record.return_date = self.clock()
                book.available = True
                session.flush()
                # Resolving references here loads them before the record is detached
                summary = f"Book {record.book.id} ({record.book.title!r}) returned by user {record.user.id}"
        except StaleDataError as e:
            logger.warning(f"Return rejected: record {record_id} was returned concurrently")
            raise ConflictError(f"Borrow record {record_id} already returned") from e

        logger.info(f"{summary} (record {record_id})")
        return record

    def get_record(self, record_id: int) -> BorrowRecord:
        """Get a single borrow record or raise NotFoundError"""
        with self.db.transaction() as session:
            record = BorrowRecordRepository(session).get_by_id(record_id)
        if record is None:
            raise NotFoundError("BorrowRecord", record_id)
        return record

    def list_outstanding_for_user(self, user_id: int, descending: bool = False) -> List[BorrowRecord]:
        """Records the user has not returned yet, oldest borrow first by default.

        Raises:
            NotFoundError: If the user does not exist
        """
        with self.db.transaction() as session:
            if UserRepository(session).get_by_id(user_id) is None:
                raise NotFoundError("User", user_id)
            return BorrowRecordRepository(session).list_outstanding_for_user(user_id, descending)

    def list_for_book(self, book_id: int, descending: bool = False) -> List[BorrowRecord]:
        """Full lending history of a book.

        Raises:
            NotFoundError: If the book does not exist
        """
        with self.db.transaction() as session:
            if BookRepository(session).get_by_id(book_id) is None:
                raise NotFoundError("Book", book_id)
            return BorrowRecordRepository(session).list_for_book(book_id, descending)

    def list_all(
        self,
        returned: Optional[bool] = None,
        descending: bool = False,
        limit: Optional[int] = None,
        offset: int = 0
    ) -> List[BorrowRecord]:
        """Every ledger entry, oldest borrow first by default"""
        with self.db.transaction() as session:
            return BorrowRecordRepository(session).list_all(
                returned=returned, descending=descending, limit=limit, offset=offset
            )

    def count_records(self, returned: Optional[bool] = None) -> int:
        with self.db.transaction() as session:
            return BorrowRecordRepository(session).count(returned)

    def audit_availability(self) -> List[int]:
        """IDs of books whose ``available`` flag disagrees with the ledger.

        Always empty while every write goes through this service; rows edited
        behind its back show up here.
        """
        with self.db.transaction() as session:
            records = BorrowRecordRepository(session)
            mismatched = []
            for book in session.query(Book).order_by(Book.id).all():
                lent_out = records.find_outstanding_by_book(book.id) is not None
                if book.available == lent_out:
                    mismatched.append(book.id)
            return mismatched
