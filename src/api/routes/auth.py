import logging
from typing import Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, EmailStr, Field

from libs.result import Error
from src.api.error import ClientError, raise_for_error
from src.app.services.auth_services import AuthServices
from src.app.services.password_policy import PasswordStrength
from src.app.services.session_store import SessionInfo
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import (
    ChangePasswordResponse,
    ChangePasswordUseCase,
    LoginResponse,
    LoginUseCase,
    LogoutResponse,
    LogoutUseCase,
    ValidatePasswordUseCase,
)
from src.app.use_cases.auth.login_use_case import INVALID_CREDENTIALS_MESSAGE
from src.depends import (
    get_auth_services,
    get_client_info,
    get_current_session,
    get_live_session,
    get_session_token,
    get_unit_of_work,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


class LoginRequest(BaseModel):
    """
    Login HTTP request payload

    Validates incoming login request.
    """

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., description="User password")
    center_id: Optional[int] = Field(
        None, description="Center to open the session on (default: last selected)"
    )


@router.post("/login", status_code=status.HTTP_200_OK, response_model=LoginResponse)
async def login(
    request: LoginRequest,
    client: dict = Depends(get_client_info),
    uow: UnitOfWork = Depends(get_unit_of_work),
    services: AuthServices = Depends(get_auth_services),
):
    """
    User Login

    Authenticates the user and opens a session in one of their centers.
    The session token is returned once and must be sent as a bearer token.

    Raises:
        - 401 Unauthorized: Invalid credentials (also for inactive accounts)
        - 403 Forbidden: No active assignment, or requested center not granted
        - 500 Internal Server Error: Server error
    """
    use_case = LoginUseCase(uow, services)
    result = await use_case.execute(
        request.email,
        request.password,
        ip_address=client["ip_address"],
        user_agent=client["user_agent"],
        center_id=request.center_id,
    )

    if result.is_err():
        error = result.error
        if error.code == "ACCOUNT_INACTIVE":
            # Rendered like a bad password so the response cannot reveal the account
            logger.warning("Login refused: ACCOUNT_INACTIVE")
            raise ClientError(
                Error("INVALID_CREDENTIALS", INVALID_CREDENTIALS_MESSAGE),
                status_code=status.HTTP_401_UNAUTHORIZED,
            )
        raise_for_error(
            error,
            {
                "INVALID_CREDENTIALS": status.HTTP_401_UNAUTHORIZED,
                "NO_ASSIGNMENTS": status.HTTP_403_FORBIDDEN,
                "UNAUTHORIZED": status.HTTP_403_FORBIDDEN,
            },
        )

    return result.value


@router.post("/logout", status_code=status.HTTP_200_OK, response_model=LogoutResponse)
async def logout(
    session: SessionInfo = Depends(get_live_session),
    client: dict = Depends(get_client_info),
    uow: UnitOfWork = Depends(get_unit_of_work),
    services: AuthServices = Depends(get_auth_services),
):
    """
    Logout Everywhere

    Terminates every active session of the calling user.
    """
    use_case = LogoutUseCase(uow, services)
    result = await use_case.logout(
        session.user_id,
        center_id=session.current_center_id,
        ip_address=client["ip_address"],
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post(
    "/logout-session", status_code=status.HTTP_200_OK, response_model=LogoutResponse
)
async def logout_session(
    token: str = Depends(get_session_token),
    client: dict = Depends(get_client_info),
    uow: UnitOfWork = Depends(get_unit_of_work),
    services: AuthServices = Depends(get_auth_services),
):
    """
    Logout This Session

    Terminates only the session behind the bearer token.

    Raises:
        - 401 Unauthorized: No active session for this token
    """
    use_case = LogoutUseCase(uow, services)
    result = await use_case.logout_session(token, ip_address=client["ip_address"])
    if result.is_err():
        raise_for_error(result.error)
    return result.value


class ChangePasswordRequest(BaseModel):
    """Change password HTTP request payload"""

    current_password: str = Field(
        "", description="Current password (may be empty only for a forced change)"
    )
    new_password: str = Field(..., description="New password")


@router.post(
    "/change-password",
    status_code=status.HTTP_200_OK,
    response_model=ChangePasswordResponse,
)
async def change_password(
    request: ChangePasswordRequest,
    session: SessionInfo = Depends(get_current_session),
    uow: UnitOfWork = Depends(get_unit_of_work),
    services: AuthServices = Depends(get_auth_services),
):
    """
    Change Password

    Accounts flagged must_change_password may omit the current password.

    Raises:
        - 400 Bad Request: Current password is incorrect
        - 422 Unprocessable Entity: New password violates the policy
    """
    use_case = ChangePasswordUseCase(uow, services)
    result = await use_case.execute(
        session.user_id,
        request.current_password,
        request.new_password,
        forced=session.must_change_password,
    )
    if result.is_err():
        raise_for_error(
            result.error,
            {
                "INVALID_CREDENTIALS": status.HTTP_400_BAD_REQUEST,
                "VALIDATION_FAILED": status.HTTP_422_UNPROCESSABLE_ENTITY,
                "USER_NOT_FOUND": status.HTTP_404_NOT_FOUND,
            },
        )
    return result.value


class PasswordStrengthRequest(BaseModel):
    """Password strength HTTP request payload"""

    password: str = Field(..., description="Candidate password")


@router.post(
    "/password-strength",
    status_code=status.HTTP_200_OK,
    response_model=PasswordStrength,
)
async def password_strength(
    request: PasswordStrengthRequest,
    session: SessionInfo = Depends(get_current_session),
    uow: UnitOfWork = Depends(get_unit_of_work),
    services: AuthServices = Depends(get_auth_services),
):
    """
    Password Strength

    Scores a candidate password for the calling user, including the rule
    against passwords containing their own name or email.
    """
    use_case = ValidatePasswordUseCase(uow, services)
    result = await use_case.execute(request.password, session.user_id)
    if result.is_err():
        raise_for_error(result.error, {"USER_NOT_FOUND": status.HTTP_404_NOT_FOUND})
    return result.value
