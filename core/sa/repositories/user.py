# core/sa/repositories/user.py
from typing import List, Optional
from sqlalchemy.orm import Session
from core.sa.models import User

class UserRepository:
    """Repository for managing User entities."""

    def __init__(self, session: Session):
        """Initialize the repository with a database session.

        Args:
            session: SQLAlchemy session for database operations
        """
        self.session = session

    def get_by_id(self, user_id: int, for_update: bool = False) -> Optional[User]:
        """Get a user by their ID.

        Args:
            user_id: The ID of the user to retrieve
            for_update: Lock the row for the rest of the transaction

        Returns:
            The User object if found, None otherwise
        """
        query = self.session.query(User).filter(User.id == user_id)
        if for_update:
            query = query.with_for_update()
        return query.one_or_none()

    def get_by_email(self, email: str) -> Optional[User]:
        """Get a user by email address (exact match)"""
        return self.session.query(User).filter(User.email == email).one_or_none()

    def count_users(self, query: Optional[str] = None) -> int:
        """Get the number of users, optionally only those matching a search.

        Returns:
            Total number of matching users in the database
        """
        return self._filtered(query).count()

    def _filtered(self, query: Optional[str] = None):
        base_query = self.session.query(User)
        if query:
            pattern = f"%{query}%"
            base_query = base_query.filter(User.name.ilike(pattern) | User.email.ilike(pattern))
        return base_query

    def search_users(self, query: Optional[str] = None, limit: int = 20, offset: int = 0) -> List[User]:
        """Search for users by name or email.

        Args:
            query: The search query string
            limit: Maximum number of results to return (default: 20)
            offset: Number of records to skip (default: 0)

        Returns:
            List of matching User objects ordered by ID
        """
        return self._filtered(query).order_by(User.id).offset(offset).limit(limit).all()

    def add(self, user: User) -> User:
        self.session.add(user)
        self.session.flush()
        return user

    def delete(self, user: User) -> None:
        self.session.delete(user)
        self.session.flush()
