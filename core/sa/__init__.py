# core/sa/__init__.py
from .database import Database
from .models import Base, Book, User, BorrowRecord

__all__ = [
    'Database',
    'Base',
    'Book',
    'User',
    'BorrowRecord',
]
