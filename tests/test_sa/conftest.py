# tests/test_sa/conftest.py
import pytest
from datetime import date
from sqlalchemy.orm import Session

from core.sa.models import Book, User, BorrowRecord

@pytest.fixture(scope="function")
def db_session(database):
    """Create a new database session for a test"""
    session: Session = database.get_session()
    try:
        yield session
    finally:
        session.rollback()
        session.close()

@pytest.fixture
def sample_book(db_session):
    """Create a sample book for testing."""
    book = Book(
        title="Test Book",
        author="Test Author",
        isbn="9780306406157",
        published_date=date(2001, 5, 1),
        genre="Fiction",
        available=True
    )
    db_session.add(book)
    db_session.commit()
    return book

@pytest.fixture
def sample_user(db_session):
    """Create a sample user for testing."""
    user = User(name="Test User", email="test@example.com")
    db_session.add(user)
    db_session.commit()
    return user

@pytest.fixture
def multiple_books(db_session):
    """Create multiple books for testing."""
    books = []
    for i in range(1, 21):  # Create 20 books
        book = Book(
            title=f"Test Book {i}",
            author=f"Author {i % 4}",
            available=i % 5 != 0
        )
        db_session.add(book)
        books.append(book)
    db_session.commit()
    return books

@pytest.fixture
def outstanding_record(db_session, sample_book, sample_user):
    """Create an outstanding borrow record for the sample book and user."""
    record = BorrowRecord(book=sample_book, user=sample_user, returned=False)
    sample_book.available = False
    db_session.add(record)
    db_session.commit()
    return record
