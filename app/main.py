# app/main.py

"""
API Perfiles FastAPI 애플리케이션의 진입점입니다.

- lifespan: 로깅 설정, (개발용) 테이블 생성, 공유 httpx 클라이언트 생성/종료, (선택) seed 실행
- 도메인 라우터 등록 (관리자 API / 프로필 API 두 접두사)
- 도메인 오류 처리기 등록 (text/plain 응답)
- 루트 및 헬스 체크 엔드포인트
"""

import logging
from typing import AsyncGenerator
from contextlib import asynccontextmanager

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from fastapi import FastAPI, Depends, HTTPException, status
from fastapi.middleware.cors import CORSMiddleware

from app import ADMIN_API_PREFIX, PERFILES_API_PREFIX
from app.core.config import settings
from app.core.database import create_db_and_tables, engine, get_async_session_context, get_session
from app.core.exceptions import register_exception_handlers
from app.services.external_services import build_compania_client, build_estado_client, build_http_client
from app.services.seed_service import SeedService

from app.domains.perfiles.routers import admin_router as perfiles_admin_router
from app.domains.perfiles.routers import router as perfiles_router
from app.domains.equipos.routers import admin_router as equipos_admin_router
from app.domains.equipos.routers import router as equipos_router


logger = logging.getLogger(__name__)


def configure_logging() -> None:
    """루트 로거를 설정합니다. DEBUG_MODE 이면 DEBUG 레벨을 사용합니다."""
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


# -- 애플리케이션 수명 주기 이벤트 핸들러 --
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI 애플리케이션의 수명 주기(데이터베이스, 외부 HTTP 클라이언트)를 함께 처리합니다.
    """
    configure_logging()
    logger.info("Starting %s %s (%s)", settings.APP_NAME, settings.APP_VERSION, settings.APP_ENV)

    if settings.CREATE_TABLES_ON_STARTUP:
        await create_db_and_tables()

    app.state.http_client = build_http_client()
    logger.info("Shared HTTP client created.")

    if settings.SEED_ON_STARTUP:
        async with get_async_session_context() as session:
            await SeedService(
                session,
                build_estado_client(app.state.http_client),
                build_compania_client(app.state.http_client),
            ).run()

    yield  # 애플리케이션 실행

    logger.info("Shutting down %s", settings.APP_NAME)
    await app.state.http_client.aclose()
    await engine.dispose()
    logger.info("HTTP client and database pool closed.")


# -- FastAPI 애플리케이션 인스턴스 생성 --
app = FastAPI(
    title=settings.APP_NAME,
    description=settings.APP_DESCRIPTION,
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# -- CORS 미들웨어 설정 --
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# -- 도메인 라우터 포함 --
app.include_router(perfiles_admin_router, prefix=ADMIN_API_PREFIX)
app.include_router(equipos_admin_router, prefix=ADMIN_API_PREFIX)
app.include_router(equipos_router, prefix=PERFILES_API_PREFIX)
app.include_router(perfiles_router, prefix=PERFILES_API_PREFIX)


# -- 루트 엔드포인트 --
@app.get("/", summary="API Root", response_description="Welcome message and documentation link.")
async def read_root():
    return {"message": f"Welcome to {settings.APP_NAME}. Visit /docs for interactive API documentation."}


# -- 헬스 체크 엔드포인트 --
@app.get("/health-check", summary="Health Check", response_description="Status of the application and database connection.")
async def health_check(session: AsyncSession = Depends(get_session)):
    """
    데이터베이스에 `SELECT 1`을 실행하여 서비스의 정상 작동 여부를 확인합니다.
    """
    try:
        result = await session.exec(select(1))
        if result.first():
            return {"status": "ok", "database_connection": "successful"}
    except Exception as e:
        logger.error("Database health check failed: %s", e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Database connection error during health check: {e}"
        ) from e
    raise HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Database health check failed: No result from test query"
    )


# -- Uvicorn 서버 직접 실행 (개발용) --
if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.main:app", host="0.0.0.0", port=8000, reload=settings.DEBUG_MODE)
