# api/schemas/user.py
from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, ConfigDict, field_validator

from core.utils.validators import require_text

class UserBase(BaseModel):
    name: str
    email: str

class UserCreate(UserBase):
    @field_validator('name', 'email')
    @classmethod
    def validate_required(cls, value, info):
        return require_text(value, info.field_name.capitalize())

class UserUpdate(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None

    @field_validator('name', 'email')
    @classmethod
    def validate_required(cls, value, info):
        if value is None:
            return value
        return require_text(value, info.field_name.capitalize())

class User(UserBase):
    id: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

class UserSummary(BaseModel):
    id: int
    name: str
    email: str

    model_config = ConfigDict(from_attributes=True)

class UserList(BaseModel):
    items: List[User]
    total: int
    page: int
    size: int

    model_config = ConfigDict(from_attributes=True)
