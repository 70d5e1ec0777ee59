# api/schemas/borrow_record.py
from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, ConfigDict

from .book import BookSummary
from .user import UserSummary

class BorrowRequest(BaseModel):
    user_id: int
    book_id: int

class BorrowRecord(BaseModel):
    id: int
    book_id: int
    user_id: int
    book_title: Optional[str] = None
    borrow_date: datetime
    return_date: Optional[datetime] = None
    returned: bool
    book: Optional[BookSummary] = None
    user: Optional[UserSummary] = None

    model_config = ConfigDict(from_attributes=True)

class BorrowRecordList(BaseModel):
    items: List[BorrowRecord]
    total: int
    page: int
    size: int

    model_config = ConfigDict(from_attributes=True)
