# app/core/dependencies.py

"""
FastAPI 애플리케이션의 의존성 주입(Dependency Injection)을 정의하는 모듈입니다.

- 데이터베이스 세션 관리 (get_db_session).
- 요청마다 서비스 객체를 명시적인 의존성(세션, 외부 클라이언트)으로 조립하는 공급자.

테스트에서는 get_session 과 외부 클라이언트 공급자(get_estado_verifier 등)를
`app.dependency_overrides`로 교체하면 서비스 전체가 가짜 구현을 사용하게 됩니다.
"""

from typing import AsyncGenerator

from fastapi import Depends
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.database import get_session
from app.services.external_services import (
    ExistenceVerifier,
    FotoClient,
    get_compania_verifier,
    get_estado_verifier,
    get_foto_client,
)
from app.domains.perfiles.services import BomberoService, TipoUsuarioService, UsuarioService
from app.domains.equipos.services import EquipoService, TipoEquipoService


# --- 데이터베이스 세션 의존성 주입 ---
async def get_db_session(
    session: AsyncSession = Depends(get_session),
) -> AsyncGenerator[AsyncSession, None]:
    """
    라우터에서 사용하는 DB 세션 의존성입니다.
    get_session 을 감싸므로 테스트에서는 get_session 하나만 override 하면 됩니다.
    """
    yield session


# --- 서비스 공급자 ---
def get_tipo_usuario_service(db: AsyncSession = Depends(get_db_session)) -> TipoUsuarioService:
    return TipoUsuarioService(db)


def get_tipo_equipo_service(db: AsyncSession = Depends(get_db_session)) -> TipoEquipoService:
    return TipoEquipoService(db)


def get_equipo_service(
    db: AsyncSession = Depends(get_db_session),
    compania_verifier: ExistenceVerifier = Depends(get_compania_verifier),
) -> EquipoService:
    return EquipoService(db, compania_verifier)


def get_usuario_service(
    db: AsyncSession = Depends(get_db_session),
    estado_verifier: ExistenceVerifier = Depends(get_estado_verifier),
    foto_client: FotoClient = Depends(get_foto_client),
) -> UsuarioService:
    return UsuarioService(db, estado_verifier, foto_client)


def get_bombero_service(
    db: AsyncSession = Depends(get_db_session),
    estado_verifier: ExistenceVerifier = Depends(get_estado_verifier),
) -> BomberoService:
    return BomberoService(db, estado_verifier)
