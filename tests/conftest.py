"""
Shared test fixtures for the Order Tracker test suite.

Async throughout (aiosqlite + AsyncSession), one in-memory database
created and dropped around every test.
"""

import os
import sys
from collections.abc import AsyncGenerator, Awaitable, Callable

import pytest

# Ensure project root is importable
ROOT_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

# Override environment BEFORE importing application modules
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["AUTH_SECRET"] = "test-auth-secret"
os.environ["JWT_SECRET"] = "test-jwt-secret"
os.environ["CORS_ORIGINS"] = '["*"]'

from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from ordertrack.api.deps import SESSION_COOKIE, get_db
from ordertrack.api.endpoints.auth import limiter
from ordertrack.core.security import create_session_token, get_password_hash
from ordertrack.db.base import Base
from ordertrack.main import app
from ordertrack.models.order import Order
from ordertrack.models.user import Role, User
from ordertrack.schemas.token import Identity

# Separate engine for the test run; the app's own engine is never used
test_engine = create_async_engine(
    "sqlite+aiosqlite:///:memory:",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = async_sessionmaker(
    test_engine,
    class_=AsyncSession,
    expire_on_commit=False,
)

limiter.enabled = False

TEST_PASSWORD = "test123"


@pytest.fixture(autouse=True)
async def setup_db():
    """Create all tables before usage and drop after."""
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
    async with TestingSessionLocal() as session:
        yield session


app.dependency_overrides[get_db] = _override_get_db


@pytest.fixture
async def async_client() -> AsyncGenerator[AsyncClient, None]:
    """Return a httpx AsyncClient wired to the app."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Return a raw database session for direct queries in tests."""
    async with TestingSessionLocal() as session:
        yield session


# ── Factories ───────────────────────────────────────────────────────
@pytest.fixture
def make_user(db_session: AsyncSession) -> Callable[..., Awaitable[User]]:
    async def _make(role: Role = Role.PLANNER, email: str | None = None, name: str | None = None) -> User:
        user = User(
            email=email or f"{role.value.lower()}@test.com",
            hashed_password=get_password_hash(TEST_PASSWORD),
            name=name or f"Test {role.value.title()}",
            role=role,
        )
        db_session.add(user)
        await db_session.commit()
        await db_session.refresh(user)
        return user

    return _make


@pytest.fixture
def make_order(db_session: AsyncSession) -> Callable[..., Awaitable[Order]]:
    async def _make(verkoop_order: str = "SO-1001", **fields) -> Order:
        defaults = {
            "project": "Kitchen Block A",
            "debiteur_klant": "Acme Interiors",
            "type_artikel": "Cabinet",
            "material": "Oak veneer",
        }
        order = Order(verkoop_order=verkoop_order, **{**defaults, **fields})
        db_session.add(order)
        await db_session.commit()
        await db_session.refresh(order)
        return order

    return _make


def session_headers(user: User | Identity) -> dict[str, str]:
    """Cookie header carrying a valid session for *user*."""
    if isinstance(user, User):
        user = Identity(user_id=user.id, email=user.email, role=user.role)
    return {"Cookie": f"{SESSION_COOKIE}={create_session_token(user)}"}


@pytest.fixture
def auth_headers() -> Callable[[User | Identity], dict[str, str]]:
    return session_headers
