from typing import List

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from src.api.error import raise_for_error
from src.app.services.auth_services import AuthServices
from src.app.services.center_directory import CenterAccess
from src.app.services.session_store import SessionInfo
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.centers import (
    GetAccessibleCentersUseCase,
    SwitchCenterResponse,
    SwitchCenterUseCase,
)
from src.depends import (
    get_auth_services,
    get_client_info,
    get_live_session,
    get_session_token,
    get_unit_of_work,
)

router = APIRouter(prefix="/centers", tags=["Centers"])


class SwitchCenterRequest(BaseModel):
    """Switch center HTTP request payload"""

    center_id: int = Field(..., description="Center to switch the session to")


@router.post(
    "/switch", status_code=status.HTTP_200_OK, response_model=SwitchCenterResponse
)
async def switch_center(
    request: SwitchCenterRequest,
    token: str = Depends(get_session_token),
    client: dict = Depends(get_client_info),
    uow: UnitOfWork = Depends(get_unit_of_work),
    services: AuthServices = Depends(get_auth_services),
):
    """
    Switch Center

    Moves the caller's session to another center where they hold an
    active assignment, without logging in again.

    Raises:
        - 401 Unauthorized: Unknown, closed or expired session; inactive account
        - 403 Forbidden: User is not assigned to the target center
        - 409 Conflict: Session changed concurrently
    """
    use_case = SwitchCenterUseCase(uow, services)
    result = await use_case.execute(
        token,
        request.center_id,
        ip_address=client["ip_address"],
        user_agent=client["user_agent"],
    )
    if result.is_err():
        raise_for_error(result.error, {"CONFLICT": status.HTTP_409_CONFLICT})
    return result.value


@router.get(
    "/accessible", status_code=status.HTTP_200_OK, response_model=List[CenterAccess]
)
async def accessible_centers(
    session: SessionInfo = Depends(get_live_session),
    uow: UnitOfWork = Depends(get_unit_of_work),
    services: AuthServices = Depends(get_auth_services),
):
    """
    Accessible Centers

    Centers the caller can switch to, ordered by name.
    """
    result = await GetAccessibleCentersUseCase(uow, services).execute(session.user_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value
