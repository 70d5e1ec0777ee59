# api/schemas/__init__.py
from .book import Book, BookCreate, BookUpdate, BookList, BookSummary
from .user import User, UserCreate, UserUpdate, UserList, UserSummary
from .borrow_record import BorrowRecord, BorrowRecordList, BorrowRequest
from .common import ErrorResponse
