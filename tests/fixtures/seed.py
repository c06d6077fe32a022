from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.services.password_policy import PasswordPolicy
from src.domain.entities import CenterAssignment, CenterRole, HospitalCenter, User


async def create_user(
    session: AsyncSession,
    policy: PasswordPolicy,
    email: str,
    password: str,
    first_name: str = "Test",
    last_name: str = "User",
    is_active: bool = True,
    must_change_password: bool = False,
) -> User:
    user = User(
        email=email,
        first_name=first_name,
        last_name=last_name,
        password_hash=policy.hash(password),
        is_active=is_active,
        must_change_password=must_change_password,
    )
    session.add(user)
    await session.commit()
    await session.refresh(user)
    return user


async def create_center(
    session: AsyncSession, name: str, is_active: bool = True
) -> HospitalCenter:
    center = HospitalCenter(name=name, address=f"{name} street", is_active=is_active)
    session.add(center)
    await session.commit()
    await session.refresh(center)
    return center


async def assign(
    session: AsyncSession,
    user_id: int,
    center_id: int,
    role: CenterRole,
    is_active: bool = True,
) -> CenterAssignment:
    assignment = CenterAssignment(
        user_id=user_id, hospital_center_id=center_id, role=role, is_active=is_active
    )
    session.add(assignment)
    await session.commit()
    await session.refresh(assignment)
    return assignment
