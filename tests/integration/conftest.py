from datetime import timedelta

import pytest_asyncio
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from src.adapter.services.audit_sink import SqlSecurityAuditSink
from src.adapter.services.password_hasher import BcryptPasswordHasher
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.audit_sink import AuditTrail
from src.app.services.auth_services import AuthServices
from src.app.services.password_policy import PasswordPolicy
from src.depends import get_audit_sink, get_clock, get_password_policy, get_unit_of_work
from tests.fixtures.clock import ManualClock


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///./test.db")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def uow(db_session):
    return SqlAlchemyUnitOfWork(db_session)


@pytest_asyncio.fixture
def clock():
    return ManualClock()


@pytest_asyncio.fixture
def password_policy():
    # Minimum bcrypt cost keeps the suite fast
    return PasswordPolicy(BcryptPasswordHasher(rounds=4))


@pytest_asyncio.fixture
def audit_sink(session_factory, clock):
    return SqlSecurityAuditSink(session_factory, clock)


@pytest_asyncio.fixture
def services(password_policy, audit_sink, clock):
    return AuthServices(
        password_policy=password_policy,
        audit=AuditTrail(audit_sink),
        clock=clock,
        session_lifetime=timedelta(hours=12),
    )


@pytest_asyncio.fixture
async def client(db_session, clock, password_policy, audit_sink):
    from httpx import ASGITransport
    from src.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_clock] = lambda: clock
    app.dependency_overrides[get_password_policy] = lambda: password_policy
    app.dependency_overrides[get_audit_sink] = lambda: audit_sink

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
