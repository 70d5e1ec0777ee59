# api/schemas/book.py
from datetime import date, datetime
from typing import Optional, List
from pydantic import BaseModel, ConfigDict, field_validator

from core.utils.validators import normalize_isbn, require_text

class BookBase(BaseModel):
    title: str
    author: str
    isbn: Optional[str] = None
    published_date: Optional[date] = None
    genre: Optional[str] = None

class BookCreate(BookBase):
    @field_validator('title', 'author')
    @classmethod
    def validate_required(cls, value, info):
        return require_text(value, info.field_name.capitalize())

    @field_validator('isbn')
    @classmethod
    def validate_isbn(cls, value):
        return normalize_isbn(value)

class BookUpdate(BaseModel):
    # Omitted fields are left unchanged; availability is not editable
    title: Optional[str] = None
    author: Optional[str] = None
    isbn: Optional[str] = None
    published_date: Optional[date] = None
    genre: Optional[str] = None

    @field_validator('title', 'author')
    @classmethod
    def validate_required(cls, value, info):
        if value is None:
            return value
        return require_text(value, info.field_name.capitalize())

    @field_validator('isbn')
    @classmethod
    def validate_isbn(cls, value):
        return normalize_isbn(value)

class Book(BookBase):
    id: int
    available: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

class BookSummary(BaseModel):
    id: int
    title: str
    author: str

    model_config = ConfigDict(from_attributes=True)

class BookList(BaseModel):
    items: List[Book]
    total: int
    page: int
    size: int

    model_config = ConfigDict(from_attributes=True)
