"""
Centralized Test Configuration.

Every test gets a fresh in-memory store: tables are created before and
dropped after each test function.
"""

import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.pool import StaticPool

from backend.app.main import app
from backend.app.db.session import get_db, Base

# Setup In-Memory Test Database
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

engine = create_async_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = async_sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False
)


@pytest.fixture(scope="session", autouse=True)
def apply_overrides():
    """Point the app's get_db dependency at the test engine for the whole session."""

    async def override_get_db():
        async with TestingSessionLocal() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    yield
    app.dependency_overrides = {}


@pytest.fixture(autouse=True)
async def setup_database():
    """Create tables before each test function and drop after."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
async def client():
    """Async client for testing."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


# Shared session for fixture data creation
@pytest.fixture
async def db_session():
    async with TestingSessionLocal() as session:
        yield session


@pytest.fixture
def salary():
    """Income entry from the July scenario."""
    return {
        "nama": "Gaji",
        "keperluan": "Juli",
        "kategori": "salary",
        "amount": 5000000,
        "tipe": "pemasukan",
        "tanggal": "2025-07-01"
    }


@pytest.fixture
def electricity():
    """Expense entry from the July scenario."""
    return {
        "nama": "PLN",
        "keperluan": "Token listrik",
        "kategori": "utilities",
        "amount": 200000,
        "tipe": "pengeluaran",
        "tanggal": "2025-07-15"
    }
