# core/sa/models/borrow_record.py
from datetime import datetime
from sqlalchemy import Integer, Boolean, ForeignKey, Index
from sqlalchemy.orm import relationship, Mapped, mapped_column
from .base import Base, UTCDateTime, utcnow

class BorrowRecord(Base):
    """One lending of a book to a user.

    A record starts outstanding (``returned`` False, no ``return_date``) and is
    closed exactly once by ``LendingService.return_book``. It never reopens.
    """
    __tablename__ = 'borrow_record'

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    book_id: Mapped[int] = mapped_column(ForeignKey('book.id'), nullable=False)
    user_id: Mapped[int] = mapped_column(ForeignKey('user.id'), nullable=False)
    borrow_date: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False, default=utcnow)
    return_date: Mapped[datetime | None] = mapped_column(UTCDateTime, nullable=True)
    returned: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    version: Mapped[int] = mapped_column(Integer, nullable=False)

    # Relationships
    book = relationship('Book', back_populates='borrow_records')
    user = relationship('User', back_populates='borrow_records')

    __mapper_args__ = {'version_id_col': version}

    __table_args__ = (
        Index('idx_borrow_record_book_returned', 'book_id', 'returned'),
        Index('idx_borrow_record_user_returned', 'user_id', 'returned'),
        Index('idx_borrow_record_borrow_date', 'borrow_date'),
    )

    @property
    def book_title(self) -> str | None:
        return self.book.title if self.book is not None else None

    def __repr__(self) -> str:
        return (
            f"<BorrowRecord id={self.id} book_id={self.book_id} "
            f"user_id={self.user_id} returned={self.returned}>"
        )
