from datetime import datetime
from typing import Optional

from sqlalchemy.dialects import postgresql, sqlite
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.last_selected_center_repository import (
    ILastSelectedCenterRepository,
)
from src.domain.entities import UserLastSelectedCenter

_INSERTS = {"sqlite": sqlite.insert, "postgresql": postgresql.insert}


class LastSelectedCenterRepository(ILastSelectedCenterRepository):
    """UserLastSelectedCenter repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, user_id: int) -> Optional[UserLastSelectedCenter]:
        stmt = (
            select(UserLastSelectedCenter)
            .where(UserLastSelectedCenter.user_id == user_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def upsert(self, user_id: int, center_id: int, selected_at: datetime) -> None:
        dialect = self.session.bind.dialect.name
        if dialect not in _INSERTS:
            raise NotImplementedError(f"Upsert not supported for dialect {dialect}")

        insert = _INSERTS[dialect]
        stmt = insert(UserLastSelectedCenter).values(
            user_id=user_id,
            last_selected_hospital_center_id=center_id,
            last_selection_date=selected_at,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["user_id"],
            set_={
                "last_selected_hospital_center_id": center_id,
                "last_selection_date": selected_at,
            },
        )
        await self.session.execute(stmt)
