# tests/conftest.py

import os
import sys
from typing import Any, AsyncGenerator, Callable, Dict, Optional

# 앱 설정이 로드되기 전에 테스트용 환경 변수를 지정합니다.
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("CREATE_TABLES_ON_STARTUP", "false")
os.environ.setdefault("SEED_ON_STARTUP", "false")

# --- 경로 설정 ---
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from sqlalchemy import event
from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

# app.main을 임포트하여 FastAPI 앱 인스턴스에 접근합니다.
from app.main import app as main_app
from app.core.database import get_session
from app.core.security import get_password_hash
from app.services import external_services
from tests.fakes import FakeFotoClient, FakeVerifier, fake_compania_verifier, fake_estado_verifier

# --- 모든 모델 임포트 ---
#  SQLModel.metadata.create_all()이 모든 테이블을 인식하려면 모든 모델 클래스가 한 번 이상 임포트되어야 합니다.
from app.domains.models import *    # noqa: F401, F403
from app.domains.perfiles import models as perfiles_models
from app.domains.equipos import models as equipos_models


TEST_DATABASE_URL = "sqlite+aiosqlite://"


# --- 데이터베이스 픽스처 ---
@pytest_asyncio.fixture(scope="function")
async def test_engine() -> AsyncGenerator[AsyncEngine, None]:
    """
    테스트마다 새 인메모리 SQLite 데이터베이스를 만들고 모든 테이블을 생성합니다.
    StaticPool 을 사용해 같은 연결(같은 메모리 DB)을 공유합니다.
    """
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(test_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """각 테스트 함수마다 독립된 비동기 데이터베이스 세션을 제공합니다."""
    TestingSessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    async with TestingSessionLocal() as session:
        yield session


# --- 외부 서비스 픽스처 ---
@pytest_asyncio.fixture(scope="function")
def estado_verifier() -> FakeVerifier:
    return fake_estado_verifier(missing={404})


@pytest_asyncio.fixture(scope="function")
def compania_verifier() -> FakeVerifier:
    return fake_compania_verifier(missing={404})


@pytest_asyncio.fixture(scope="function")
def foto_client() -> FakeFotoClient:
    return FakeFotoClient()


# --- HTTP 클라이언트 픽스처 ---
@pytest_asyncio.fixture(scope="function")
async def client(
    db_session: AsyncSession,
    estado_verifier: FakeVerifier,
    compania_verifier: FakeVerifier,
    foto_client: FakeFotoClient,
) -> AsyncGenerator[AsyncClient, None]:
    """
    DB 세션과 외부 서비스 공급자를 테스트용으로 교체한 AsyncClient 를 반환합니다.
    """
    async def override_get_session():
        yield db_session

    original_overrides = main_app.dependency_overrides.copy()
    try:
        main_app.dependency_overrides.update({
            get_session: override_get_session,
            external_services.get_estado_verifier: lambda: estado_verifier,
            external_services.get_compania_verifier: lambda: compania_verifier,
            external_services.get_foto_client: lambda: foto_client,
        })
        # 예상치 못한 예외도 500 응답으로 확인할 수 있도록 앱 예외를 다시 발생시키지 않습니다.
        transport = ASGITransport(app=main_app, raise_app_exceptions=False)
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac
    finally:
        main_app.dependency_overrides.clear()
        main_app.dependency_overrides.update(original_overrides)


# --- 데이터 픽스처 ---
@pytest_asyncio.fixture(scope="function")
async def tipo_usuario(db_session: AsyncSession) -> perfiles_models.TipoUsuario:
    tipo = perfiles_models.TipoUsuario(nombre="Administrador")
    db_session.add(tipo)
    await db_session.commit()
    await db_session.refresh(tipo)
    return tipo


@pytest_asyncio.fixture(scope="function")
async def tipo_equipo(db_session: AsyncSession) -> equipos_models.TipoEquipo:
    tipo = equipos_models.TipoEquipo(nombre="Rescate Urbano")
    db_session.add(tipo)
    await db_session.commit()
    await db_session.refresh(tipo)
    return tipo


@pytest_asyncio.fixture(scope="function")
async def equipo(db_session: AsyncSession, tipo_equipo: equipos_models.TipoEquipo) -> equipos_models.Equipo:
    obj = equipos_models.Equipo(nombre="Equipo Halcón", tipo_equipo_id=tipo_equipo.id, compania_id=1, estado_id=1)
    db_session.add(obj)
    await db_session.commit()
    await db_session.refresh(obj)
    return obj


@pytest_asyncio.fixture(scope="function")
def usuario_payload(tipo_usuario: perfiles_models.TipoUsuario) -> Callable[..., Dict[str, Any]]:
    """
    유효한 사용자 생성 요청 본문(JSON)을 만드는 팩토리를 반환합니다.
    키워드 인자로 개별 필드를 덮어쓸 수 있습니다.
    """
    def _payload(**kwargs: Any) -> Dict[str, Any]:
        data = {
            "run": "12345678",
            "dv": "5",
            "nombre": "Camila",
            "apellido_paterno": "González",
            "apellido_materno": "Rojas",
            "fecha_registro": "2024-05-01T10:00:00+00:00",
            "telefono": "912345678",
            "correo": "camila.gonzalez@correo.cl",
            "contrasenia": "secreta123",
            "intentos_fallidos": 0,
            "estado_id": 1,
            "tipo_usuario_id": tipo_usuario.id,
        }
        data.update(kwargs)
        return data
    return _payload


@pytest_asyncio.fixture(scope="function")
def usuario_factory(
    db_session: AsyncSession, tipo_usuario: perfiles_models.TipoUsuario
) -> Callable[..., Any]:
    """
    사용자(또는 equipo_id 가 주어지면 소방대원)를 DB에 직접 생성하는 팩토리를 반환합니다.
    """
    async def _create(run: str, telefono: str, correo: str, equipo_id: Optional[int] = None, **kwargs: Any):
        data = {
            "run": run,
            "dv": "K",
            "nombre": "Matías",
            "apellido_paterno": "Soto",
            "apellido_materno": "Silva",
            "telefono": telefono,
            "correo": correo,
            "contrasenia": get_password_hash("password123"),
            "estado_id": 1,
            "tipo_usuario_id": tipo_usuario.id,
            **kwargs,
        }
        usuario = perfiles_models.Usuario(**data)
        if equipo_id is not None:
            usuario.bombero = perfiles_models.Bombero(equipo_id=equipo_id)
        db_session.add(usuario)
        await db_session.commit()
        await db_session.refresh(usuario)
        return usuario
    return _create

