"""
Test infrastructure for the content API.

Strategy
--------
- SQLite in-memory via aiosqlite, so the suite needs no running Postgres.
- StaticPool makes every session share the one in-memory connection;
  a second connection would see an empty database.
- The app's get_db dependency is overridden with the test session factory
  (same commit/rollback behaviour as production).
- Tables are created before and dropped after every test.
- Redis is disabled (cache._redis = None); the CacheManager treats that as
  a permanent miss, so every read goes to the database.
- Write endpoints need a bearer token; ``auth_headers`` signs one with the
  configured secret for any set of roles.
"""
import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.pool import StaticPool

from content_api.cache import cache
from content_api.database import Base, get_db
from content_api.main import app
from content_api.middleware import install_query_counter
from content_api.security import Role, create_access_token

# ---------------------------------------------------------------------------
# Test database engine — SQLite in-memory with aiosqlite
# ---------------------------------------------------------------------------

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

engine_test = create_async_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

install_query_counter(engine_test)

async_session_test = async_sessionmaker(
    engine_test,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def override_get_db():
    async with async_session_test() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


app.dependency_overrides[get_db] = override_get_db


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture(autouse=True)
async def setup_db():
    """Create all tables before each test, drop after to guarantee isolation."""
    cache._redis = None
    async with engine_test.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with engine_test.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest_asyncio.fixture
async def db_session() -> AsyncSession:
    """A live session for seeding data or calling services directly."""
    async with async_session_test() as session:
        yield session


@pytest_asyncio.fixture
async def async_client() -> AsyncClient:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def auth_headers():
    """
    Factory for Authorization headers.

    ``auth_headers(Role.NEWS_AUTHOR)`` returns headers for Ada Lovelace
    (user id ``u-ada``) holding that role.
    """

    def _headers(*roles: str, user_id: str = "u-ada", first_name: str = "Ada",
                 last_name: str = "Lovelace") -> dict:
        token = create_access_token(user_id, first_name, last_name, roles)
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
def news_author(auth_headers) -> dict:
    return auth_headers(Role.NEWS_AUTHOR)


@pytest.fixture
def news_editor(auth_headers) -> dict:
    return auth_headers(Role.NEWS_EDITOR)


@pytest.fixture
def product_editor(auth_headers) -> dict:
    return auth_headers(Role.PRODUCT_EDITOR)


@pytest.fixture
def manager(auth_headers) -> dict:
    return auth_headers(Role.MANAGER)
