"""
Session Use Case DTOs (Data Transfer Objects)
"""

from typing import List

from pydantic import BaseModel

from src.app.services.center_directory import CenterAccess
from src.app.services.session_store import SessionInfo
from src.app.use_cases.auth.dtos import UserInfo


class SessionDetails(BaseModel):
    """A validated session with its owner and center context"""

    session: SessionInfo
    user: UserInfo
    current_center: CenterAccess
    accessible_centers: List[CenterAccess]
