# core/sa/models/book.py
from datetime import date
from sqlalchemy import String, Integer, Boolean, Date, Index
from sqlalchemy.orm import relationship, Mapped, mapped_column
from .base import Base, TimestampMixin

class Book(Base, TimestampMixin):
    __tablename__ = 'book'

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    author: Mapped[str] = mapped_column(String(255), nullable=False)
    isbn: Mapped[str | None] = mapped_column(String(20), nullable=True)
    published_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    genre: Mapped[str | None] = mapped_column(String(100), nullable=True)
    # Written only by LendingService; False iff an outstanding borrow record exists
    available: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    version: Mapped[int] = mapped_column(Integer, nullable=False)

    # Relationships (no cascade: records are removed explicitly by CatalogService)
    borrow_records = relationship(
        'BorrowRecord',
        back_populates='book',
        order_by='BorrowRecord.borrow_date',
        passive_deletes='all',
    )

    __mapper_args__ = {'version_id_col': version}

    __table_args__ = (
        # Search indexes
        Index('idx_book_title', 'title'),
        Index('idx_book_author', 'author'),
        Index('idx_book_isbn', 'isbn'),
        Index('idx_book_available', 'available'),
    )

    def __repr__(self) -> str:
        return f"<Book id={self.id} title={self.title!r} available={self.available}>"
