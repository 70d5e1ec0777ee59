# tests/test_sa/test_repositories/test_borrow_record_repository.py
import pytest
from datetime import datetime, timedelta, UTC
from core.sa.repositories.borrow_record import BorrowRecordRepository
from core.sa.models import Book, User, BorrowRecord

@pytest.fixture
def record_repo(db_session):
    """Fixture to create a BorrowRecordRepository instance."""
    return BorrowRecordRepository(db_session)

@pytest.fixture
def ledger(db_session):
    """Create two users, three books and a small lending history.

    Alice returned book 1, then borrowed book 2 and book 3; Bob has book 1.
    """
    start = datetime(2024, 3, 1, 12, 0, tzinfo=UTC)
    alice = User(name="Alice", email="alice@example.com")
    bob = User(name="Bob", email="bob@example.com")
    books = [Book(title=f"Book {i}", author="Writer") for i in range(1, 4)]
    db_session.add_all([alice, bob, *books])
    db_session.flush()

    records = [
        BorrowRecord(book=books[0], user=alice, borrow_date=start,
                     return_date=start + timedelta(days=3), returned=True),
        BorrowRecord(book=books[2], user=alice, borrow_date=start + timedelta(days=5)),
        BorrowRecord(book=books[1], user=alice, borrow_date=start + timedelta(days=4)),
        BorrowRecord(book=books[0], user=bob, borrow_date=start + timedelta(days=6)),
    ]
    for book in books:
        book.available = False
    db_session.add_all(records)
    db_session.commit()
    return {"alice": alice, "bob": bob, "books": books, "records": records}

def test_get_by_id_loads_references(record_repo, ledger, db_session):
    """Test that records come back with book and user loaded."""
    record_id = ledger["records"][1].id
    db_session.expunge_all()

    record = record_repo.get_by_id(record_id)
    db_session.expunge(record)
    assert record.book.title == "Book 3"
    assert record.user.name == "Alice"
    assert record.book_title == "Book 3"

def test_get_by_id_nonexistent(record_repo):
    """Test fetching a record that does not exist."""
    assert record_repo.get_by_id(999) is None
    assert record_repo.get_by_id(999, for_update=True) is None

def test_find_outstanding_by_book(record_repo, ledger):
    """Test that only the unreturned record of a book is found."""
    book1 = ledger["books"][0]
    outstanding = record_repo.find_outstanding_by_book(book1.id)
    assert outstanding.id == ledger["records"][3].id
    assert outstanding.user_id == ledger["bob"].id

def test_find_outstanding_by_book_none(record_repo, db_session):
    """Test a book that was never lent out."""
    book = Book(title="Shelf Book", author="Writer")
    db_session.add(book)
    db_session.commit()
    assert record_repo.find_outstanding_by_book(book.id) is None

def test_list_outstanding_for_user_ordering(record_repo, ledger):
    """Test that outstanding records are ordered by borrow date."""
    alice = ledger["alice"]
    ascending = record_repo.list_outstanding_for_user(alice.id)
    assert [r.book_title for r in ascending] == ["Book 2", "Book 3"]

    descending = record_repo.list_outstanding_for_user(alice.id, descending=True)
    assert [r.book_title for r in descending] == ["Book 3", "Book 2"]

def test_list_for_book(record_repo, ledger):
    """Test a book's full history, returned records included."""
    history = record_repo.list_for_book(ledger["books"][0].id)
    assert [r.user.name for r in history] == ["Alice", "Bob"]
    assert [r.returned for r in history] == [True, False]

def test_list_all_filters_and_pages(record_repo, ledger):
    """Test listing the whole ledger."""
    everything = record_repo.list_all()
    assert len(everything) == 4
    assert everything[0].id == ledger["records"][0].id

    assert len(record_repo.list_all(returned=False)) == 3
    assert [r.id for r in record_repo.list_all(returned=True)] == [ledger["records"][0].id]

    page = record_repo.list_all(descending=True, limit=2, offset=1)
    assert [r.id for r in page] == [ledger["records"][1].id, ledger["records"][2].id]

def test_counts(record_repo, ledger):
    """Test ledger counts."""
    assert record_repo.count() == 4
    assert record_repo.count(returned=False) == 3
    assert record_repo.count_outstanding_for_user(ledger["alice"].id) == 2
    assert record_repo.count_outstanding_for_user(ledger["bob"].id) == 1

def test_delete_returned_for_book(record_repo, ledger, db_session):
    """Test that only returned history is removed for a book."""
    removed = record_repo.delete_returned_for_book(ledger["books"][0].id)
    db_session.commit()
    assert removed == 1
    assert [r.user.name for r in record_repo.list_for_book(ledger["books"][0].id)] == ["Bob"]

def test_delete_returned_for_user(record_repo, ledger, db_session):
    """Test that only returned history is removed for a user."""
    assert record_repo.delete_returned_for_user(ledger["bob"].id) == 0
    assert record_repo.delete_returned_for_user(ledger["alice"].id) == 1
    db_session.commit()
    assert record_repo.count() == 3
