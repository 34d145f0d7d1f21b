"""
Pytest configuration and fixtures for the access engine tests
"""

import os
import sys
from collections.abc import AsyncGenerator

# Point the app at SQLite before any freelancer_access module builds its engine
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))  # noqa: PTH100, PTH118, PTH119, PTH120

from freelancer_access.auth import create_access_token  # noqa: E402
from freelancer_access.database import Base, get_db  # noqa: E402
from freelancer_access.models import Content, ContentStatus, Role, TaxonomyObjectType, Term, User  # noqa: E402
from main import app  # noqa: E402

# Single in-memory database shared by every connection of the test engine
test_engine = create_async_engine(
    "sqlite+aiosqlite:///:memory:",
    echo=False,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestSessionLocal = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture(scope="function")
async def setup_test_database():
    """Fresh schema for each test function."""
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    yield

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture(scope="function")
async def test_db(setup_test_database) -> AsyncGenerator[AsyncSession, None]:
    async with TestSessionLocal() as session:
        yield session


@pytest.fixture
async def client(test_db: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client bound to the app, sharing the test session."""

    async def override_get_db():
        yield test_db

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(test_db: AsyncSession):
    """Factory creating a user holding the given role names."""

    async def _make_user(username: str, *role_names: str) -> User:
        roles = []
        for name in role_names:
            result = await test_db.execute(select(Role).where(Role.name == name))
            role = result.scalar_one_or_none()
            if role is None:
                role = Role(name=name)
                test_db.add(role)
            roles.append(role)

        user = User(username=username, email=f"{username}@example.com", roles=roles)
        test_db.add(user)
        await test_db.commit()
        await test_db.refresh(user)
        return user

    return _make_user


@pytest.fixture
def make_content(test_db: AsyncSession):
    """Factory creating a content item (post by default)."""

    async def _make_content(
        content_type: str = "post",
        title: str = "Item",
        body: str = "",
        author_id: int | None = None,
        parent_id: int | None = None,
        featured_image_id: int | None = None,
        terms: list[Term] | None = None,
        status: ContentStatus = ContentStatus.PUBLISHED,
    ) -> Content:
        content = Content(
            content_type=content_type,
            title=title,
            body=body,
            author_id=author_id,
            parent_id=parent_id,
            featured_image_id=featured_image_id,
            status=status,
            terms=terms or [],
        )
        test_db.add(content)
        await test_db.commit()
        await test_db.refresh(content)
        return content

    return _make_content


@pytest.fixture
def make_term(test_db: AsyncSession):
    """Factory creating a term and registering its taxonomy for a content type."""

    async def _make_term(taxonomy: str, name: str, content_type: str = "post") -> Term:
        if await test_db.get(TaxonomyObjectType, (taxonomy, content_type)) is None:
            test_db.add(TaxonomyObjectType(taxonomy=taxonomy, content_type=content_type))
        term = Term(taxonomy=taxonomy, name=name)
        test_db.add(term)
        await test_db.commit()
        await test_db.refresh(term)
        return term

    return _make_term


@pytest.fixture
async def admin_user(make_user) -> User:
    return await make_user("admin", "administrator")


@pytest.fixture
async def editor_user(make_user) -> User:
    return await make_user("freelancer", "editor")


def auth_headers(user: User) -> dict[str, str]:
    token = create_access_token({"sub": user.id})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(admin_user: User) -> dict[str, str]:
    return auth_headers(admin_user)


@pytest.fixture
def editor_headers(editor_user: User) -> dict[str, str]:
    return auth_headers(editor_user)


@pytest.fixture
def headers_for():
    return auth_headers
