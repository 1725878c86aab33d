# tests/test_main.py

"""
애플리케이션 메인 엔드포인트에 대한 통합 테스트 모듈입니다.

- 루트 경로 (`/`) 응답
- 데이터베이스 연결 헬스 체크 (`/health-check`)
- CORS 응답 헤더
- 요청 시간 제한(408)과 IntegrityError(409) 처리
"""

import asyncio

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import AsyncClient, ASGITransport
from sqlalchemy.exc import IntegrityError

from forum.core.config import settings
from forum.main import integrity_error_handler, request_timeout_middleware


@pytest.mark.asyncio
async def test_read_root(client: AsyncClient):
    """
    루트 엔드포인트 (`GET /`)가 환영 메시지를 반환하는지 테스트합니다.
    """
    response = await client.get("/")

    assert response.status_code == 200
    assert response.json() == {
        "message": "Welcome to Trapziu Forum API. Visit /docs for interactive API documentation."
    }


@pytest.mark.asyncio
async def test_health_check(client: AsyncClient):
    """
    헬스 체크 엔드포인트 (`GET /health-check`)가 DB 연결 성공을 보고하는지 테스트합니다.
    """
    response = await client.get("/health-check")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "database_connection": "successful"}


@pytest.mark.asyncio
async def test_cors_allows_any_origin(client: AsyncClient):
    """단순 요청에 Access-Control-Allow-Origin 헤더가 붙는지 확인합니다."""
    response = await client.get("/", headers={"Origin": "http://frontend.example"})

    assert response.status_code == 200
    assert "access-control-allow-origin" in response.headers


@pytest.mark.asyncio
async def test_unknown_route_returns_404(client: AsyncClient):
    response = await client.get("/api/nothing-here")
    assert response.status_code == 404


# =============================================================================
# 요청 시간 제한 미들웨어 / IntegrityError 처리기
# =============================================================================
# 메인 앱과 같은 미들웨어와 예외 처리기를 붙인 작은 앱으로 검증합니다.
def _build_handler_app() -> FastAPI:
    test_app = FastAPI()
    test_app.middleware("http")(request_timeout_middleware)
    test_app.add_exception_handler(IntegrityError, integrity_error_handler)

    @test_app.get("/slow")
    async def slow():
        await asyncio.sleep(0.5)
        return {"done": True}

    @test_app.get("/fast")
    async def fast():
        return {"done": True}

    @test_app.post("/conflict")
    async def conflict():
        raise IntegrityError("INSERT INTO users ...", {}, Exception("UNIQUE constraint failed: users.email"))

    return test_app


@pytest_asyncio.fixture
async def handler_client(monkeypatch) -> AsyncClient:
    monkeypatch.setattr(settings, "REQUEST_TIMEOUT_SECONDS", 0.05)
    transport = ASGITransport(app=_build_handler_app())
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.mark.asyncio
async def test_slow_request_times_out(handler_client: AsyncClient):
    """REQUEST_TIMEOUT_SECONDS를 넘긴 요청은 408과 error 메시지를 받습니다."""
    response = await handler_client.get("/slow")

    assert response.status_code == 408
    assert response.json() == {"error": "request took longer than the configured 0.05 second timeout"}


@pytest.mark.asyncio
async def test_fast_request_passes_timeout_middleware(handler_client: AsyncClient):
    response = await handler_client.get("/fast")

    assert response.status_code == 200
    assert response.json() == {"done": True}


@pytest.mark.asyncio
async def test_integrity_error_maps_to_409(handler_client: AsyncClient):
    response = await handler_client.post("/conflict")

    assert response.status_code == 409
    assert response.json() == {"detail": "Resource conflicts with an existing record"}
