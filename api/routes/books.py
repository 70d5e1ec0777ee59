# api/routes/books.py

from typing import List, Literal, Optional
from fastapi import APIRouter, Depends, Query, Response, status

from api.dependencies import get_catalog_service, get_lending_service
from api.schemas.book import Book, BookCreate, BookList, BookUpdate
from api.schemas.borrow_record import BorrowRecord
from core.services.catalog_service import CatalogService
from core.services.lending_service import LendingService

router = APIRouter(prefix="/books", tags=["books"])

@router.post("", response_model=Book, status_code=status.HTTP_201_CREATED)
def create_book(book: BookCreate, catalog: CatalogService = Depends(get_catalog_service)):
    """Add a book to the catalog. New books are always available."""
    return catalog.add_book(**book.model_dump())

@router.get("", response_model=BookList)
def get_books(
    q: Optional[str] = Query(None, description="Search books by title or author"),
    available: Optional[bool] = Query(None, description="Filter by availability"),
    isbn: Optional[str] = Query(None, description="Exact ISBN-10 or ISBN-13, hyphens allowed"),
    page: int = Query(1, ge=1, description="Page number"),
    size: int = Query(20, ge=1, le=100, description="Items per page"),
    catalog: CatalogService = Depends(get_catalog_service)
):
    """
    Get a paginated list of books.

    Args:
        q: Optional search string matched against title and author
        available: Only books that are (or are not) currently lendable
        isbn: Only books with this ISBN
        page: Page number (1-based)
        size: Number of items per page
    """
    offset = (page - 1) * size
    books = catalog.list_books(query=q, available=available, isbn=isbn, limit=size, offset=offset)
    total = catalog.count_books(query=q, available=available, isbn=isbn)
    return BookList(items=books, total=total, page=page, size=size)

@router.get("/{book_id}", response_model=Book)
def get_book(book_id: int, catalog: CatalogService = Depends(get_catalog_service)):
    return catalog.get_book(book_id)

@router.put("/{book_id}", response_model=Book)
def update_book(book_id: int, update: BookUpdate, catalog: CatalogService = Depends(get_catalog_service)):
    """Update catalog fields. Fields left out of the body are unchanged."""
    return catalog.update_book(book_id, **update.model_dump(exclude_unset=True))

@router.delete("/{book_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_book(book_id: int, catalog: CatalogService = Depends(get_catalog_service)):
    """Delete a book. Refused with 409 while the book is lent out."""
    catalog.delete_book(book_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.get("/{book_id}/borrow-records", response_model=List[BorrowRecord])
def get_book_borrow_records(
    book_id: int,
    order: Literal["asc", "desc"] = Query("asc", description="Order by borrow date"),
    lending: LendingService = Depends(get_lending_service)
):
    """Lending history of a single book."""
    return lending.list_for_book(book_id, descending=order == "desc")
