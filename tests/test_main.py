# tests/test_main.py

"""
FastAPI 애플리케이션의 메인 엔드포인트에 대한 통합 테스트를 정의하는 모듈입니다.

- 애플리케이션의 루트 경로 (`/`) 응답을 테스트합니다.
- 데이터베이스 연결 헬스 체크 엔드포인트 (`/health-check`)를 테스트합니다.
- 요청 본문 자체가 잘못된 경우의 응답을 테스트합니다.
"""

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_read_root(client: AsyncClient):
    """
    루트 엔드포인트 (`GET /`)가 올바르게 응답하는지 테스트합니다.
    """
    response = await client.get("/")

    assert response.status_code == 200
    assert response.json() == {"message": "Welcome to API Perfiles. Visit /docs for interactive API documentation."}


@pytest.mark.asyncio
async def test_health_check(client: AsyncClient):
    """
    헬스 체크 엔드포인트 (`GET /health-check`)가 데이터베이스 연결 상태를 올바르게 반환하는지 테스트합니다.
    """
    response = await client.get("/health-check")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "database_connection": "successful"}


@pytest.mark.asyncio
async def test_malformed_body_is_rejected_by_framework(client: AsyncClient):
    # JSON 이 아닌 본문은 서비스 검증에 도달하기 전에 거부됩니다.
    response = await client.post(
        "/api-administrador/v1/tipos-usuario",
        content="no es json",
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_non_numeric_id_is_rejected(client: AsyncClient):
    response = await client.get("/api-perfiles/v1/equipos/abc")
    assert response.status_code == 422
