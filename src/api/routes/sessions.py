from datetime import timedelta
from typing import List, Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from src.api.error import raise_for_error
from src.app.services.auth_services import AuthServices
from src.app.services.session_store import SessionInfo, SessionValidation
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.sessions import (
    ExtendSessionUseCase,
    GetSessionDetailsUseCase,
    ListActiveSessionsUseCase,
    SessionDetails,
    ValidateSessionUseCase,
)
from src.depends import (
    get_auth_services,
    get_current_session,
    get_session_token,
    get_unit_of_work,
)

router = APIRouter(prefix="/sessions", tags=["Sessions"])


@router.get("/current", status_code=status.HTTP_200_OK, response_model=SessionInfo)
async def current_session(session: SessionInfo = Depends(get_current_session)):
    """
    Current Session

    Returns the validated session of the caller with its current role.

    Raises:
        - 401 Unauthorized: Unknown, closed or expired session; inactive account
        - 403 Forbidden: Current center no longer granted
    """
    return session


@router.get(
    "/validate", status_code=status.HTTP_200_OK, response_model=SessionValidation
)
async def validate_session(
    token: str = Depends(get_session_token),
    uow: UnitOfWork = Depends(get_unit_of_work),
    services: AuthServices = Depends(get_auth_services),
):
    """
    Validate Session

    For backends delegating authentication: always answers 200 with
    valid/expired flags and the failure code, if any.
    """
    result = await ValidateSessionUseCase(uow, services).execute(token)
    if result.is_err():
        return SessionValidation.failure(
            result.error.code,
            result.error.message,
            expired=result.error.code == "SESSION_EXPIRED",
        )
    return SessionValidation(valid=True, session=result.value)


@router.get("/details", status_code=status.HTTP_200_OK, response_model=SessionDetails)
async def session_details(
    token: str = Depends(get_session_token),
    uow: UnitOfWork = Depends(get_unit_of_work),
    services: AuthServices = Depends(get_auth_services),
):
    """
    Session Details

    The caller's session with its user, current center and the centers
    it can switch to.

    Raises:
        - 401 Unauthorized: Unknown, closed or expired session; inactive account
        - 403 Forbidden: Current center no longer granted
    """
    result = await GetSessionDetailsUseCase(uow, services).execute(token)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


class ExtendSessionRequest(BaseModel):
    """Extend session HTTP request payload"""

    additional_minutes: Optional[int] = Field(
        None,
        gt=0,
        le=24 * 60,
        description="Minutes from now until expiry (default: full session lifetime)",
    )


@router.post("/extend", status_code=status.HTTP_200_OK, response_model=SessionInfo)
async def extend_session(
    request: ExtendSessionRequest,
    token: str = Depends(get_session_token),
    uow: UnitOfWork = Depends(get_unit_of_work),
    services: AuthServices = Depends(get_auth_services),
):
    """
    Extend Session

    Moves the expiry of the caller's session to now + the requested time.
    """
    additional = (
        timedelta(minutes=request.additional_minutes)
        if request.additional_minutes is not None
        else None
    )
    result = await ExtendSessionUseCase(uow, services).execute(token, additional)
    if result.is_err():
        raise_for_error(
            result.error, {"VALIDATION_FAILED": status.HTTP_422_UNPROCESSABLE_ENTITY}
        )
    return result.value


@router.get("", status_code=status.HTTP_200_OK, response_model=List[SessionInfo])
async def list_sessions(
    session: SessionInfo = Depends(get_current_session),
    uow: UnitOfWork = Depends(get_unit_of_work),
    services: AuthServices = Depends(get_auth_services),
):
    """
    List Sessions

    Active, unexpired sessions of the calling user, newest first.
    """
    result = await ListActiveSessionsUseCase(uow, services).execute(session.user_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value
