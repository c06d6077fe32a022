from datetime import timedelta

from fastapi import Depends, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from libs.result import Error
from src.adapter.services.audit_sink import SqlSecurityAuditSink
from src.adapter.services.password_hasher import BcryptPasswordHasher
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.error import ClientError, raise_for_error
from src.app.services.audit_sink import AuditTrail, ISecurityAuditSink
from src.app.services.auth_services import AuthServices
from src.app.services.clock import Clock, SystemClock
from src.app.services.password_policy import PasswordPolicy
from src.app.services.session_reaper import SessionReaper
from src.app.services.session_store import SessionInfo
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.sessions import ValidateSessionUseCase
from src.domain.entities import CenterRole

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

security = HTTPBearer(auto_error=False)

_clock = SystemClock()
_password_policy = PasswordPolicy(BcryptPasswordHasher(ApplicationConfig.BCRYPT_ROUNDS))
_audit_sink = SqlSecurityAuditSink(AsyncSessionLocal, _clock)


def new_unit_of_work() -> SqlAlchemyUnitOfWork:
    return SqlAlchemyUnitOfWork(AsyncSessionLocal())


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_clock() -> Clock:
    return _clock


def get_password_policy() -> PasswordPolicy:
    return _password_policy


def get_audit_sink() -> ISecurityAuditSink:
    return _audit_sink


def get_auth_services(
    clock: Clock = Depends(get_clock),
    password_policy: PasswordPolicy = Depends(get_password_policy),
    audit_sink: ISecurityAuditSink = Depends(get_audit_sink),
) -> AuthServices:
    return AuthServices(
        password_policy=password_policy,
        audit=AuditTrail(audit_sink),
        clock=clock,
        session_lifetime=timedelta(hours=ApplicationConfig.SESSION_LIFETIME_HOURS),
    )


def build_session_reaper() -> SessionReaper:
    return SessionReaper(
        new_unit_of_work,
        _clock,
        AuditTrail(_audit_sink),
        interval=ApplicationConfig.SESSION_REAPER_INTERVAL_SECONDS,
    )


def get_client_info(request: Request) -> dict:
    return {
        "ip_address": request.client.host if request.client else None,
        "user_agent": request.headers.get("user-agent"),
    }


async def get_session_token(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> str:
    """
    Dependency to extract the session token from the Authorization header.

    Raises:
        ClientError: 401 if the header is missing or not a bearer token
    """
    if credentials is None or not credentials.credentials:
        raise ClientError(
            Error("SESSION_NOT_FOUND", "Missing bearer session token"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )
    return credentials.credentials


async def get_live_session(
    token: str = Depends(get_session_token),
    uow: UnitOfWork = Depends(get_unit_of_work),
    services: AuthServices = Depends(get_auth_services),
) -> SessionInfo:
    """
    Session that exists, is active and has not expired.

    Skips the owner and current center checks, so a user who lost access
    to their current center can still log out or look for another one.
    """
    result = await ValidateSessionUseCase(uow, services).execute(token, check_access=False)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


async def get_current_session(
    token: str = Depends(get_session_token),
    uow: UnitOfWork = Depends(get_unit_of_work),
    services: AuthServices = Depends(get_auth_services),
) -> SessionInfo:
    """
    Fully validated session of the caller.

    Raises:
        ClientError: 401 for unknown, closed or expired sessions and inactive
            accounts, 403 when the current center is no longer granted
    """
    result = await ValidateSessionUseCase(uow, services).execute(token)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


async def require_super_admin(
    session: SessionInfo = Depends(get_current_session),
) -> SessionInfo:
    if session.current_role != CenterRole.super_admin.value:
        raise ClientError(
            Error("FORBIDDEN", "SuperAdmin role required in the current center"),
            status_code=status.HTTP_403_FORBIDDEN,
        )
    return session
