from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, EmailStr, Field

from src.api.error import raise_for_error
from src.app.services.auth_services import AuthServices
from src.app.services.session_store import SessionInfo
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import ResetPasswordResponse, ResetPasswordUseCase
from src.app.use_cases.centers import (
    AssignmentInfo,
    ChangeAssignmentRoleUseCase,
    GrantAssignmentUseCase,
    RevokeAssignmentResponse,
    RevokeAssignmentUseCase,
)
from src.app.use_cases.users import (
    CreateUserCommand,
    CreateUserResponse,
    CreateUserUseCase,
    ForcePasswordChangeResponse,
    ForcePasswordChangeUseCase,
    CheckUserStatusUseCase,
    SetUserActiveStatusUseCase,
    UserStatusCheck,
    UserStatusResponse,
)
from src.depends import get_auth_services, get_unit_of_work, require_super_admin

router = APIRouter(prefix="/admin", tags=["Admin"])

NOT_FOUND = {
    "USER_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "CENTER_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "ASSIGNMENT_NOT_FOUND": status.HTTP_404_NOT_FOUND,
}


class CreateUserRequest(BaseModel):
    """Create user HTTP request payload"""

    email: EmailStr = Field(..., description="User email address")
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)


@router.post(
    "/users", status_code=status.HTTP_201_CREATED, response_model=CreateUserResponse
)
async def create_user(
    request: CreateUserRequest,
    admin: SessionInfo = Depends(require_super_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
    services: AuthServices = Depends(get_auth_services),
):
    """
    Create User

    Creates an account with a one-time temporary password. The user must
    choose a new password at first login.

    Raises:
        - 403 Forbidden: Caller is not SuperAdmin in the current center
        - 409 Conflict: Email already exists
    """
    command = CreateUserCommand(
        email=request.email, first_name=request.first_name, last_name=request.last_name
    )
    result = await CreateUserUseCase(uow, services).execute(command, admin.user_id)
    if result.is_err():
        raise_for_error(
            result.error, {"EMAIL_ALREADY_EXISTS": status.HTTP_409_CONFLICT}
        )
    return result.value


@router.post(
    "/users/{user_id}/reset-password",
    status_code=status.HTTP_200_OK,
    response_model=ResetPasswordResponse,
)
async def reset_password(
    user_id: int,
    admin: SessionInfo = Depends(require_super_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
    services: AuthServices = Depends(get_auth_services),
):
    """
    Reset Password

    Issues a temporary password and closes every session of the user.
    """
    result = await ResetPasswordUseCase(uow, services).execute(
        user_id, reset_by=admin.user_id, center_id=admin.current_center_id
    )
    if result.is_err():
        raise_for_error(result.error, NOT_FOUND)
    return result.value


@router.post(
    "/users/{user_id}/force-password-change",
    status_code=status.HTTP_200_OK,
    response_model=ForcePasswordChangeResponse,
)
async def force_password_change(
    user_id: int,
    admin: SessionInfo = Depends(require_super_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
    services: AuthServices = Depends(get_auth_services),
):
    """Flags the account so the next login must choose a new password."""
    result = await ForcePasswordChangeUseCase(uow, services).execute(
        user_id, forced_by=admin.user_id
    )
    if result.is_err():
        raise_for_error(result.error, NOT_FOUND)
    return result.value


@router.get(
    "/users/{user_id}/status",
    status_code=status.HTTP_200_OK,
    response_model=UserStatusCheck,
)
async def get_user_status(
    user_id: int,
    admin: SessionInfo = Depends(require_super_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
    services: AuthServices = Depends(get_auth_services),
):
    """
    Check User Status

    Active flag, pending password change and days since the last login.
    """
    result = await CheckUserStatusUseCase(uow, services).execute(user_id)
    if result.is_err():
        raise_for_error(result.error, NOT_FOUND)
    return result.value


class UserStatusRequest(BaseModel):
    """Activate/deactivate HTTP request payload"""

    is_active: bool


@router.put(
    "/users/{user_id}/status",
    status_code=status.HTTP_200_OK,
    response_model=UserStatusResponse,
)
async def set_user_status(
    user_id: int,
    request: UserStatusRequest,
    admin: SessionInfo = Depends(require_super_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
    services: AuthServices = Depends(get_auth_services),
):
    """
    Set User Status

    Deactivation also terminates every active session of the user.
    """
    result = await SetUserActiveStatusUseCase(uow, services).execute(
        user_id, request.is_active, changed_by=admin.user_id
    )
    if result.is_err():
        raise_for_error(result.error, NOT_FOUND)
    return result.value


class GrantAssignmentRequest(BaseModel):
    """Grant assignment HTTP request payload"""

    user_id: int
    center_id: int
    role: str = Field(..., description="SuperAdmin or MedicalStaff")


@router.post(
    "/assignments", status_code=status.HTTP_201_CREATED, response_model=AssignmentInfo
)
async def grant_assignment(
    request: GrantAssignmentRequest,
    admin: SessionInfo = Depends(require_super_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
    services: AuthServices = Depends(get_auth_services),
):
    """
    Grant Assignment

    Raises:
        - 404 Not Found: User or center not found
        - 409 Conflict: Active assignment already exists
        - 422 Unprocessable Entity: Unknown role
    """
    result = await GrantAssignmentUseCase(uow, services).execute(
        request.user_id, request.center_id, request.role, granted_by=admin.user_id
    )
    if result.is_err():
        raise_for_error(
            result.error,
            {
                **NOT_FOUND,
                "CONFLICT": status.HTTP_409_CONFLICT,
                "VALIDATION_FAILED": status.HTTP_422_UNPROCESSABLE_ENTITY,
            },
        )
    return result.value


@router.delete(
    "/assignments/{user_id}/{center_id}",
    status_code=status.HTTP_200_OK,
    response_model=RevokeAssignmentResponse,
)
async def revoke_assignment(
    user_id: int,
    center_id: int,
    admin: SessionInfo = Depends(require_super_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
    services: AuthServices = Depends(get_auth_services),
):
    """
    Revoke Assignment

    Idempotent: revoked=false when there was no active assignment.
    """
    result = await RevokeAssignmentUseCase(uow, services).execute(
        user_id, center_id, revoked_by=admin.user_id
    )
    if result.is_err():
        raise_for_error(result.error, NOT_FOUND)
    return result.value


class ChangeRoleRequest(BaseModel):
    """Change assignment role HTTP request payload"""

    role: str = Field(..., description="SuperAdmin or MedicalStaff")


@router.put(
    "/assignments/{user_id}/{center_id}",
    status_code=status.HTTP_200_OK,
    response_model=AssignmentInfo,
)
async def change_assignment_role(
    user_id: int,
    center_id: int,
    request: ChangeRoleRequest,
    admin: SessionInfo = Depends(require_super_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
    services: AuthServices = Depends(get_auth_services),
):
    """Changes the role of an active assignment."""
    result = await ChangeAssignmentRoleUseCase(uow, services).execute(
        user_id, center_id, request.role, changed_by=admin.user_id
    )
    if result.is_err():
        raise_for_error(
            result.error,
            {**NOT_FOUND, "VALIDATION_FAILED": status.HTTP_422_UNPROCESSABLE_ENTITY},
        )
    return result.value
