# app/domains/equipos/crud.py

"""
'equipos' 도메인 (팀 유형, 팀)의 영속성 게이트웨이 모듈입니다.
"""

from typing import Optional
import logging

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.crud_base import CRUDBase
from . import models as equipos_models
from . import schemas as equipos_schemas
from app.domains.perfiles.models import Bombero


logger = logging.getLogger(__name__)


# =============================================================================
# 1. 팀 유형 (TipoEquipo) CRUD
# =============================================================================
class CRUDTipoEquipo(
    CRUDBase[
        equipos_models.TipoEquipo,
        equipos_schemas.TipoEquipoCreate,
        equipos_schemas.TipoEquipoUpdate
    ]
):
    def __init__(self):
        super().__init__(model=equipos_models.TipoEquipo)

    async def get_by_nombre(self, db: AsyncSession, *, nombre: str) -> Optional[equipos_models.TipoEquipo]:
        """팀 유형 이름으로 조회합니다."""
        return await self.get_by_attribute(db, attribute="nombre", value=nombre)

    async def tiene_equipos(self, db: AsyncSession, *, id: int) -> bool:
        """해당 유형을 참조하는 팀이 있는지 확인합니다."""
        statement = select(equipos_models.Equipo.id).where(
            equipos_models.Equipo.tipo_equipo_id == id
        ).limit(1)
        return (await db.execute(statement)).first() is not None


tipo_equipo = CRUDTipoEquipo()


# =============================================================================
# 2. 팀 (Equipo) CRUD
# =============================================================================
class CRUDEquipo(
    CRUDBase[
        equipos_models.Equipo,
        equipos_schemas.EquipoCreate,
        equipos_schemas.EquipoUpdate
    ]
):
    def __init__(self):
        super().__init__(model=equipos_models.Equipo)

    async def tiene_bomberos(self, db: AsyncSession, *, id: int) -> bool:
        """해당 팀에 소속된 소방대원이 있는지 확인합니다."""
        statement = select(Bombero.usuario_id).where(Bombero.equipo_id == id).limit(1)
        return (await db.execute(statement)).first() is not None


equipo = CRUDEquipo()
