"""
UserLastSelectedCenter Entity

One-per-user memo of the most recently used center.
"""

from datetime import datetime

from sqlmodel import Column, DateTime, Field, SQLModel

from .user import utcnow


class UserLastSelectedCenter(SQLModel, table=True):
    """
    UserLastSelectedCenter entity - default center offered at next login.

    Business Rules:
    - Exactly one row per user (user_id is the primary key)
    - Overwritten on every login and successful center switch
    """

    __tablename__ = "user_last_selected_centers"

    user_id: int = Field(foreign_key="users.id", primary_key=True)
    last_selected_hospital_center_id: int = Field(foreign_key="hospital_centers.id")
    last_selection_date: datetime = Field(
        default_factory=utcnow, sa_column=Column(DateTime)
    )
