# api/routes/borrow_records.py

from typing import Literal, Optional
from fastapi import APIRouter, Depends, Query, status

from api.dependencies import get_lending_service
from api.schemas.borrow_record import BorrowRecord, BorrowRecordList, BorrowRequest
from core.services.lending_service import LendingService

router = APIRouter(prefix="/borrow-records", tags=["borrow-records"])

@router.post("", response_model=BorrowRecord, status_code=status.HTTP_201_CREATED)
def borrow_book(request: BorrowRequest, lending: LendingService = Depends(get_lending_service)):
    """
    Lend a book to a user.

    Returns 404 if the user or book does not exist and 409 if the book is
    already lent out.
    """
    return lending.borrow_book(request.user_id, request.book_id)

@router.put("/{record_id}/return", response_model=BorrowRecord)
def return_book(record_id: int, lending: LendingService = Depends(get_lending_service)):
    """
    Return a borrowed book.

    Returns 404 for an unknown record and 409 if it was already returned.
    """
    return lending.return_book(record_id)

@router.get("", response_model=BorrowRecordList)
def get_borrow_records(
    returned: Optional[bool] = Query(None, description="Filter by returned flag"),
    order: Literal["asc", "desc"] = Query("asc", description="Order by borrow date"),
    page: int = Query(1, ge=1, description="Page number"),
    size: int = Query(20, ge=1, le=100, description="Items per page"),
    lending: LendingService = Depends(get_lending_service)
):
    offset = (page - 1) * size
    records = lending.list_all(returned=returned, descending=order == "desc", limit=size, offset=offset)
    total = lending.count_records(returned)
    return BorrowRecordList(items=records, total=total, page=page, size=size)

@router.get("/{record_id}", response_model=BorrowRecord)
def get_borrow_record(record_id: int, lending: LendingService = Depends(get_lending_service)):
    return lending.get_record(record_id)
