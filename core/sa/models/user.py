# core/sa/models/user.py
from sqlalchemy import Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship, Mapped, mapped_column
from .base import Base, TimestampMixin

class User(Base, TimestampMixin):
    __tablename__ = 'user'

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)

    # Relationships
    borrow_records = relationship(
        'BorrowRecord',
        back_populates='user',
        order_by='BorrowRecord.borrow_date',
        passive_deletes='all',
    )

    __table_args__ = (
        UniqueConstraint('email', name='uix_user_email'),
    )

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email!r}>"
