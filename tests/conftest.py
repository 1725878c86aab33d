# tests/conftest.py

import os

# --- 테스트용 환경 변수 ---
# forum 패키지를 임포트하기 전에 설정해야 Settings()가 이 값을 읽습니다.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test_forum.db"
os.environ["JWT_SECRET"] = "test-secret-key"
os.environ["JWT_EXPIRATION_VALUE"] = "1"
os.environ["JWT_EXPIRATION_UNIT"] = "hours"
os.environ["TZ_EAST_OFFSET_IN_HOURS"] = "9"
os.environ["DB_AUTO_CREATE"] = "false"

from typing import AsyncGenerator, Awaitable, Callable  # noqa: E402
from contextlib import asynccontextmanager  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import AsyncClient, ASGITransport  # noqa: E402

from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import NullPool  # noqa: E402
from sqlmodel import SQLModel  # noqa: E402
from sqlmodel.ext.asyncio.session import AsyncSession  # noqa: E402

from forum.main import app as main_app  # noqa: E402
from forum.core.database import get_session  # noqa: E402
from forum.core.security import get_password_hash  # noqa: E402

# 모든 모델을 임포트해야 create_all()이 모든 테이블을 인식합니다.
from forum.domains.models import *  # noqa: F401, F403, E402
from forum.domains.usr import models as usr_models  # noqa: E402
from forum.domains.board import models as board_models  # noqa: E402

DEFAULT_PASSWORD = "password123"


# --- 데이터베이스 픽스처 ---
# 테스트마다 임시 디렉토리에 새 SQLite 파일을 만들어 완전히 격리합니다.
@pytest_asyncio.fixture(scope="function")
async def test_engine(tmp_path) -> AsyncGenerator[AsyncEngine, None]:
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'test_forum.db'}",
        echo=False,
        poolclass=NullPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(test_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """
    테스트 함수와 API 요청이 함께 사용하는 비동기 데이터베이스 세션입니다.
    """
    TestingSessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    async with TestingSessionLocal() as session:
        yield session


# --- 데이터 팩토리 픽스처 ---
@pytest_asyncio.fixture(scope="function")
def user_factory(db_session: AsyncSession) -> Callable[..., Awaitable[usr_models.User]]:
    """
    사용자명을 받아 테스트 사용자를 생성하는 팩토리 함수를 반환합니다.
    이메일은 '<username>@example.com', 비밀번호는 기본값 DEFAULT_PASSWORD 입니다.
    """
    async def _create_user(username: str, password: str = DEFAULT_PASSWORD, **kwargs) -> usr_models.User:
        user = usr_models.User(
            username=username,
            email=f"{username}@example.com",
            password_hash=get_password_hash(password),
            **kwargs,
        )
        db_session.add(user)
        await db_session.commit()
        await db_session.refresh(user)
        return user
    return _create_user


@pytest_asyncio.fixture(scope="function")
def post_factory(db_session: AsyncSession) -> Callable[..., Awaitable[board_models.Post]]:
    """작성자를 받아 테스트 게시글을 생성하는 팩토리 함수를 반환합니다."""
    async def _create_post(author: usr_models.User, title: str = "Hello", **kwargs) -> board_models.Post:
        post = board_models.Post(
            title=title,
            description=kwargs.pop("description", f"{title} description"),
            content=kwargs.pop("content", f"{title} content"),
            author_id=author.id,
            **kwargs,
        )
        db_session.add(post)
        await db_session.commit()
        await db_session.refresh(post)
        return post
    return _create_post


@pytest_asyncio.fixture(scope="function")
async def alice(user_factory) -> usr_models.User:
    return await user_factory("alice", intro="Hi, I am Alice")


@pytest_asyncio.fixture(scope="function")
async def bob(user_factory) -> usr_models.User:
    return await user_factory("bob")


# --- 클라이언트 픽스처 ---
@pytest_asyncio.fixture(scope="function")
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """인증되지 않은 AsyncClient. get_session을 테스트 세션으로 교체합니다."""
    async def override_get_session():
        yield db_session

    original_overrides = main_app.dependency_overrides.copy()
    main_app.dependency_overrides[get_session] = override_get_session
    try:
        transport = ASGITransport(app=main_app)
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac
    finally:
        main_app.dependency_overrides.clear()
        main_app.dependency_overrides.update(original_overrides)


# 역할: 실제 로그인 API(POST /api/users)를 호출해 받은 토큰을 Authorization 헤더에 넣은 클라이언트를 만듭니다.
# 인증 의존성은 오버라이드하지 않으므로 JWT 검증과 권한 검사가 그대로 실행됩니다.
@pytest_asyncio.fixture(scope="function")
def authorized_client_factory(db_session: AsyncSession):
    """
    특정 사용자로 로그인된 AsyncClient를 생성하는 비동기 컨텍스트 매니저 팩토리를 반환합니다.
    """
    @asynccontextmanager
    async def _create_client_context(
        user: usr_models.User, password: str = DEFAULT_PASSWORD
    ) -> AsyncGenerator[AsyncClient, None]:
        async def override_get_session():
            yield db_session

        original_overrides = main_app.dependency_overrides.copy()
        try:
            main_app.dependency_overrides[get_session] = override_get_session

            transport = ASGITransport(app=main_app)
            async with AsyncClient(transport=transport, base_url="http://test") as ac:
                login_data = {"user": {"email": user.email, "password": password}}
                res = await ac.post("/api/users", json=login_data)
                if res.status_code != 200:
                    pytest.fail(f"Login failed for {user.username}: {res.text}")

                token = res.json()["user"]["token"]
                ac.headers["Authorization"] = f"Bearer {token}"
                yield ac
        finally:
            main_app.dependency_overrides.clear()
            main_app.dependency_overrides.update(original_overrides)

    return _create_client_context


@pytest_asyncio.fixture(scope="function")
async def alice_client(authorized_client_factory, alice) -> AsyncGenerator[AsyncClient, None]:
    """alice로 인증된 클라이언트를 반환합니다."""
    async with authorized_client_factory(alice) as ac:
        yield ac


@pytest_asyncio.fixture(scope="function")
async def bob_client(authorized_client_factory, bob) -> AsyncGenerator[AsyncClient, None]:
    """bob으로 인증된 클라이언트를 반환합니다."""
    async with authorized_client_factory(bob) as ac:
        yield ac
