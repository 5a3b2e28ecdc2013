"""
Shared fixtures.

Every test gets its own SQLite file so that separate sessions see each
other's commits the way concurrent requests do against PostgreSQL. The
extraction service is replaced by FakeExtractor; nothing leaves the process.
"""

from typing import Awaitable, Callable, Optional

import httpx
import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from slyp.api.dependencies.database import get_db
from slyp.api.dependencies.services import get_extraction_adapter
from slyp.api.main import create_application
from slyp.config.settings import settings
from slyp.shared.adapters.extraction_adapter import ContentDescriptor
from slyp.shared.models import Base, Slyp, User, UserSlyp
from slyp.shared.models.enums import SlypType, UserStatus
from slyp.shared.repositories import SlypRepository, UserRepository, UserSlypRepository
from slyp.shared.services.url_service import URLService
from slyp.shared.utils.security import SecurityUtils


class FakeExtractor:
    """
    Stands in for ExtractionAdapter.

    Attributes:
        calls: URLs passed to extract(), in order
        error: Raised from extract() when set
        before_return: Awaited with the URL just before a descriptor is returned
    """

    def __init__(self) -> None:
        self.calls: list[str] = []
        self.descriptors: dict[str, ContentDescriptor] = {}
        self.error: Optional[Exception] = None
        self.before_return: Optional[Callable[[str], Awaitable[None]]] = None

    async def extract(self, url: str) -> ContentDescriptor:
        self.calls.append(url)
        if self.error is not None:
            raise self.error
        if self.before_return is not None:
            await self.before_return(url)
        return self.descriptors.get(url) or ContentDescriptor(
            title=f"Page at {url}",
            author="Ada",
            site_name="Example",
            slyp_type=SlypType.ARTICLE,
        )

    async def close(self) -> None:
        pass


# ═══════════════════════════════════════════════════════════════════════════════
# DATABASE
# ═══════════════════════════════════════════════════════════════════════════════


@pytest.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'slyp.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def extractor() -> FakeExtractor:
    return FakeExtractor()


# ═══════════════════════════════════════════════════════════════════════════════
# FACTORIES
# ═══════════════════════════════════════════════════════════════════════════════


@pytest.fixture
def make_user(db_session):
    """Create and commit a user."""

    async def _make_user(
        email: str,
        display_name: Optional[str] = None,
        status: UserStatus = UserStatus.ACTIVE,
    ) -> User:
        user = await UserRepository(db_session).create(
            email=email.lower(),
            display_name=display_name,
            status=status,
        )
        await db_session.commit()
        return user

    return _make_user


@pytest.fixture
def make_slyp(db_session):
    """Create and commit a canonical slyp without going through extraction."""

    async def _make_slyp(url: str = "https://example.com/post", title: str = "A post") -> Slyp:
        submitted, normalized, url_hash = URLService.validate_and_process(url)
        slyp = await SlypRepository(db_session).create(
            url=submitted,
            normalized_url=normalized,
            url_hash=url_hash,
            title=title,
            slyp_type=SlypType.ARTICLE,
        )
        await db_session.commit()
        return slyp

    return _make_slyp


@pytest.fixture
def make_user_slyp(db_session):
    """Create and commit a membership."""

    async def _make_user_slyp(user: User, slyp: Slyp, **flags: bool) -> UserSlyp:
        user_slyp = await UserSlypRepository(db_session).create(
            user_id=user.id,
            slyp_id=slyp.id,
            **flags,
        )
        await db_session.commit()
        return user_slyp

    return _make_user_slyp


# ═══════════════════════════════════════════════════════════════════════════════
# HTTP
# ═══════════════════════════════════════════════════════════════════════════════


@pytest.fixture
def app(session_factory, extractor):
    """Application wired to the per-test database and the fake extractor."""
    application = create_application()

    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def override_get_extraction_adapter():
        return extractor

    application.dependency_overrides[get_db] = override_get_db
    application.dependency_overrides[get_extraction_adapter] = override_get_extraction_adapter
    return application


@pytest.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as http_client:
        yield http_client


def _bearer(user: User) -> dict[str, str]:
    token = SecurityUtils.create_access_token(
        {"user_id": str(user.id), "email": user.email},
        settings.SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM,
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers():
    """Bearer header for a user, signed with the application secret."""
    return _bearer
