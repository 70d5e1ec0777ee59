# core/sa/repositories/borrow_record.py
from typing import List, Optional
from sqlalchemy import asc, desc
from sqlalchemy.orm import Session, selectinload
from core.sa.models import BorrowRecord

class BorrowRecordRepository:
    """Repository for the lending ledger (BorrowRecord entities).

    Listing methods eagerly load ``book`` and ``user`` so records can be
    serialized after their session is closed.
    """

    def __init__(self, session: Session):
        """Initialize the repository with a database session.

        Args:
            session: SQLAlchemy session for database operations
        """
        self.session = session

    def _query(self):
        return self.session.query(BorrowRecord).options(
            selectinload(BorrowRecord.book),
            selectinload(BorrowRecord.user),
        )

    @staticmethod
    def _order(descending: bool):
        if descending:
            return (desc(BorrowRecord.borrow_date), desc(BorrowRecord.id))
        return (asc(BorrowRecord.borrow_date), asc(BorrowRecord.id))

    def get_by_id(self, record_id: int, for_update: bool = False) -> Optional[BorrowRecord]:
        """Get a borrow record by its ID.

        Args:
            record_id: The ID of the record
            for_update: Lock the row for the rest of the transaction

        Returns:
            The BorrowRecord if found, None otherwise
        """
        if for_update:
            query = self.session.query(BorrowRecord).with_for_update()
        else:
            query = self._query()
        return query.filter(BorrowRecord.id == record_id).one_or_none()

    def find_outstanding_by_book(self, book_id: int) -> Optional[BorrowRecord]:
        """Get the record for a book that has not been returned yet.

        Must run in the same transaction as any write that depends on it.

        Args:
            book_id: The ID of the book

        Returns:
            The outstanding BorrowRecord, or None if the book is not lent out
        """
        return (
            self.session.query(BorrowRecord)
            .filter(BorrowRecord.book_id == book_id, BorrowRecord.returned.is_(False))
            .order_by(BorrowRecord.borrow_date)
            .first()
        )

    def list_outstanding_for_user(self, user_id: int, descending: bool = False) -> List[BorrowRecord]:
        """Get every record a user still has to return, by borrow date"""
        return (
            self._query()
            .filter(BorrowRecord.user_id == user_id, BorrowRecord.returned.is_(False))
            .order_by(*self._order(descending))
            .all()
        )

    def list_for_book(self, book_id: int, descending: bool = False) -> List[BorrowRecord]:
        """Get the full lending history of a book, by borrow date"""
        return (
            self._query()
            .filter(BorrowRecord.book_id == book_id)
            .order_by(*self._order(descending))
            .all()
        )

    def list_all(
        self,
        returned: Optional[bool] = None,
        descending: bool = False,
        limit: Optional[int] = None,
        offset: int = 0
    ) -> List[BorrowRecord]:
        """List ledger entries.

        Args:
            returned: Only records with this returned flag when set
            descending: Newest borrow first instead of oldest first
            limit: Maximum number of records, None for all
            offset: Number of records to skip

        Returns:
            List of BorrowRecord objects
        """
        query = self._query()
        if returned is not None:
            query = query.filter(BorrowRecord.returned.is_(returned))
        query = query.order_by(*self._order(descending)).offset(offset)
        if limit is not None:
            query = query.limit(limit)
        return query.all()

    def count(self, returned: Optional[bool] = None) -> int:
        query = self.session.query(BorrowRecord)
        if returned is not None:
            query = query.filter(BorrowRecord.returned.is_(returned))
        return query.count()

    def count_outstanding_for_user(self, user_id: int) -> int:
        return (
            self.session.query(BorrowRecord)
            .filter(BorrowRecord.user_id == user_id, BorrowRecord.returned.is_(False))
            .count()
        )

    def add(self, record: BorrowRecord) -> BorrowRecord:
        self.session.add(record)
        self.session.flush()
        return record

    def delete_returned_for_book(self, book_id: int) -> int:
        """Delete the closed history of a book.

        Returns:
            Number of records deleted
        """
        return (
            self.session.query(BorrowRecord)
            .filter(BorrowRecord.book_id == book_id, BorrowRecord.returned.is_(True))
            .delete(synchronize_session=False)
        )

    def delete_returned_for_user(self, user_id: int) -> int:
        """Delete the closed history of a user.

        Returns:
            Number of records deleted
        """
        return (
            self.session.query(BorrowRecord)
            .filter(BorrowRecord.user_id == user_id, BorrowRecord.returned.is_(True))
            .delete(synchronize_session=False)
        )
