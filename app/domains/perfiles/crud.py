# app/domains/perfiles/crud.py

"""
'perfiles' 도메인 (사용자 유형, 사용자, 소방대원)의 영속성 게이트웨이 모듈입니다.

비동기 세션에서는 관계의 지연 로딩(lazy loading)이 허용되지 않으므로,
응답 직렬화에 필요한 관계(foto, bombero)는 selectinload로 미리 불러옵니다.
"""

from typing import List, Optional
import logging

from sqlalchemy.orm import selectinload
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.crud_base import CRUDBase
from . import models as perfiles_models
from . import schemas as perfiles_schemas
from app.domains.equipos.models import Equipo


logger = logging.getLogger(__name__)


# =============================================================================
# 1. 사용자 유형 (TipoUsuario) CRUD
# =============================================================================
class CRUDTipoUsuario(
    CRUDBase[
        perfiles_models.TipoUsuario,
        perfiles_schemas.TipoUsuarioCreate,
        perfiles_schemas.TipoUsuarioUpdate
    ]
):
    def __init__(self):
        super().__init__(model=perfiles_models.TipoUsuario)

    async def get_by_nombre(self, db: AsyncSession, *, nombre: str) -> Optional[perfiles_models.TipoUsuario]:
        """사용자 유형 이름으로 조회합니다."""
        return await self.get_by_attribute(db, attribute="nombre", value=nombre)

    async def tiene_usuarios(self, db: AsyncSession, *, id: int) -> bool:
        """해당 유형을 참조하는 사용자가 있는지 확인합니다."""
        statement = select(perfiles_models.Usuario.id).where(
            perfiles_models.Usuario.tipo_usuario_id == id
        ).limit(1)
        return (await db.execute(statement)).first() is not None


tipo_usuario = CRUDTipoUsuario()


# =============================================================================
# 2. 사용자 (Usuario) CRUD
# =============================================================================
class CRUDUsuario(
    CRUDBase[
        perfiles_models.Usuario,
        perfiles_schemas.UsuarioCreate,
        perfiles_schemas.UsuarioUpdate
    ]
):
    def __init__(self):
        super().__init__(model=perfiles_models.Usuario)

    def _select_con_relaciones(self):
        return (
            select(self.model)
            .options(selectinload(self.model.foto), selectinload(self.model.bombero))
            .execution_options(populate_existing=True)
        )

    async def get_con_relaciones(self, db: AsyncSession, *, id: int) -> Optional[perfiles_models.Usuario]:
        """foto, bombero 관계를 함께 불러와 단일 사용자를 조회합니다."""
        statement = self._select_con_relaciones().where(self.model.id == id)
        result = await db.execute(statement)
        return result.scalars().first()

    async def get_multi_con_relaciones(self, db: AsyncSession) -> List[perfiles_models.Usuario]:
        """모든 사용자(소방대원 포함)를 id 오름차순으로 조회합니다."""
        statement = self._select_con_relaciones().order_by(self.model.id)
        result = await db.execute(statement)
        return list(result.scalars().all())

    async def es_lider(self, db: AsyncSession, *, id: int) -> bool:
        """해당 사용자가 어떤 팀의 팀장인지 확인합니다."""
        statement = select(Equipo.id).where(Equipo.lider_id == id).limit(1)
        return (await db.execute(statement)).first() is not None

    async def valores_existentes(self, db: AsyncSession, *, attribute: str) -> set:
        """지정된 컬럼(run, telefono, correo)의 저장된 값 전체를 반환합니다."""
        statement = select(getattr(self.model, attribute))
        result = await db.execute(statement)
        return set(result.scalars().all())


usuario = CRUDUsuario()


# =============================================================================
# 3. 소방대원 (Bombero) CRUD
# =============================================================================
class CRUDBombero(
    CRUDBase[
        perfiles_models.Bombero,
        perfiles_schemas.BomberoCreate,
        perfiles_schemas.BomberoUpdate
    ]
):
    """
    소방대원 확장 행에 대한 게이트웨이입니다.
    조회 결과는 확장 행이 있는 Usuario 객체(bombero 관계 로드됨)로 반환합니다.
    """
    def __init__(self):
        super().__init__(model=perfiles_models.Bombero)

    def _select_usuarios(self):
        Usuario = perfiles_models.Usuario
        return (
            select(Usuario)
            .join(perfiles_models.Bombero, perfiles_models.Bombero.usuario_id == Usuario.id)
            .options(selectinload(Usuario.foto), selectinload(Usuario.bombero))
            .execution_options(populate_existing=True)
        )

    async def get_usuario(self, db: AsyncSession, *, id: int) -> Optional[perfiles_models.Usuario]:
        """소방대원인 사용자를 조회합니다. 확장 행이 없으면 None을 반환합니다."""
        statement = self._select_usuarios().where(perfiles_models.Usuario.id == id)
        result = await db.execute(statement)
        return result.scalars().first()

    async def get_multi_usuarios(self, db: AsyncSession) -> List[perfiles_models.Usuario]:
        statement = self._select_usuarios().order_by(perfiles_models.Usuario.id)
        result = await db.execute(statement)
        return list(result.scalars().all())


bombero = CRUDBombero()
