"""
User Entity

Represents a person who can hold assignments in several hospital centers.
"""

from datetime import datetime
from typing import Optional

from sqlmodel import Column, DateTime, Field, Index, SQLModel


def utcnow() -> datetime:
    return datetime.utcnow()


class User(SQLModel, table=True):
    """
    User entity - a person who can work in several hospital centers.

    Business Rules:
    - Email is unique, stored lower-case and matched case-insensitively
    - Password stored as bcrypt hash
    - Never hard-deleted: is_active=False deactivates the account
    - must_change_password is set whenever a temporary password is issued
    - No global role: roles live on CenterAssignment
    """

    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    first_name: str = Field(default="", max_length=100)
    last_name: str = Field(default="", max_length=100)
    email: str = Field(unique=True, index=True, max_length=255)
    password_hash: str = Field(max_length=60)  # Bcrypt output is 60 chars

    is_active: bool = Field(default=True)
    must_change_password: bool = Field(default=False)

    # Timestamps
    last_login_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    created_by: Optional[int] = Field(default=None)
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    modified_by: Optional[int] = Field(default=None)
    modified_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_user_is_active", "is_active"),)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip() or self.email
