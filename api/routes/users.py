# api/routes/users.py

from typing import List, Literal, Optional
from fastapi import APIRouter, Depends, Query, Response, status

from api.dependencies import get_catalog_service, get_lending_service
from api.schemas.borrow_record import BorrowRecord
from api.schemas.user import User, UserCreate, UserList, UserUpdate
from core.services.catalog_service import CatalogService
from core.services.lending_service import LendingService

router = APIRouter(prefix="/users", tags=["users"])

@router.post("", response_model=User, status_code=status.HTTP_201_CREATED)
def create_user(user: UserCreate, catalog: CatalogService = Depends(get_catalog_service)):
    return catalog.add_user(user.name, user.email)

@router.get("", response_model=UserList)
def get_users(
    q: Optional[str] = Query(None, description="Search users by name or email"),
    page: int = Query(1, ge=1, description="Page number"),
    size: int = Query(20, ge=1, le=100, description="Items per page"),
    catalog: CatalogService = Depends(get_catalog_service)
):
    """
    Get a paginated list of users with optional search.

    Args:
        q: Optional search string to filter users by name or email
        page: Page number (1-based)
        size: Number of items per page

    Returns:
        UserList containing the page of users and the total match count
    """
    offset = (page - 1) * size
    users = catalog.list_users(query=q, limit=size, offset=offset)
    total = catalog.count_users(q)
    return UserList(items=users, total=total, page=page, size=size)

@router.get("/{user_id}", response_model=User)
def get_user(user_id: int, catalog: CatalogService = Depends(get_catalog_service)):
    return catalog.get_user(user_id)

@router.put("/{user_id}", response_model=User)
def update_user(user_id: int, update: UserUpdate, catalog: CatalogService = Depends(get_catalog_service)):
    return catalog.update_user(user_id, **update.model_dump(exclude_unset=True))

@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(user_id: int, catalog: CatalogService = Depends(get_catalog_service)):
    """Delete a user. Refused with 409 while the user has books to return."""
    catalog.delete_user(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.get("/{user_id}/borrow-records", response_model=List[BorrowRecord])
def get_user_outstanding_records(
    user_id: int,
    order: Literal["asc", "desc"] = Query("asc", description="Order by borrow date"),
    lending: LendingService = Depends(get_lending_service)
):
    """Books the user currently has out, oldest borrow first by default."""
    return lending.list_outstanding_for_user(user_id, descending=order == "desc")
