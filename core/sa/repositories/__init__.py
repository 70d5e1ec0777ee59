# core/sa/repositories/__init__.py
from .book import BookRepository
from .user import UserRepository
from .borrow_record import BorrowRecordRepository

__all__ = ['BookRepository', 'UserRepository', 'BorrowRecordRepository']
