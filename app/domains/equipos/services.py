# app/domains/equipos/services.py

"""
'equipos' 도메인의 검증 및 영속화 서비스 모듈입니다.

서비스는 요청마다 명시적인 의존성(DB 세션, 외부 compania 검증기)을 받아 생성됩니다.
- 속성 검증 -> 로컬 관계 검증 -> 외부 관계 검증 -> 저장 순서로 진행하므로,
  잘못된 입력은 외부 서비스 호출이나 저장 단계에 도달하지 않습니다.
- 저장 계층의 IntegrityError는 InvalidArgumentError로 변환됩니다.
"""

import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.exceptions import InvalidArgumentError, NotFoundError
from app.core.validation import MAX_NOMBRE, es_vacio, requerir, validar_largo, validar_nombre_catalogo
from app.services.external_services import ExistenceVerifier
from app.domains.perfiles import crud as perfiles_crud
from . import crud as equipos_crud
from . import models as equipos_models
from . import schemas as equipos_schemas


logger = logging.getLogger(__name__)


# =============================================================================
# 1. 팀 유형 (TipoEquipo) 서비스
# =============================================================================
class TipoEquipoService:
    """팀 유형 카탈로그의 CRUD 및 이름 검증을 담당합니다."""

    ENTIDAD = "tipo de equipo"

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_all(self) -> List[equipos_models.TipoEquipo]:
        return await equipos_crud.tipo_equipo.get_multi(self.db)

    async def find_by_id(self, id: int) -> equipos_models.TipoEquipo:
        db_obj = await equipos_crud.tipo_equipo.get(self.db, id)
        if db_obj is None:
            raise NotFoundError(f"No se encontró el tipo de equipo con ID: {id}")
        return db_obj

    async def save(self, obj_in: Optional[equipos_schemas.TipoEquipoCreate]) -> equipos_models.TipoEquipo:
        requerir(obj_in, "El tipo de equipo no puede ser nulo")
        nombre = validar_nombre_catalogo(obj_in.nombre, self.ENTIDAD)

        db_obj = equipos_models.TipoEquipo(nombre=nombre)
        try:
            db_obj = await equipos_crud.tipo_equipo.save(self.db, db_obj)
        except IntegrityError as e:
            logger.warning("Duplicate tipo de equipo '%s': %s", nombre, e.orig)
            raise InvalidArgumentError("Error de integridad de datos. El nombre del tipo de equipo ya existe.") from e
        logger.info("Tipo de equipo created: id=%s nombre=%s", db_obj.id, db_obj.nombre)
        return db_obj

    async def update(
        self, obj_in: Optional[equipos_schemas.TipoEquipoUpdate], id: int
    ) -> equipos_models.TipoEquipo:
        requerir(obj_in, "El tipo de equipo no puede ser nulo")
        db_obj = await self.find_by_id(id)
        db_obj.nombre = validar_nombre_catalogo(obj_in.nombre, self.ENTIDAD)
        try:
            db_obj = await equipos_crud.tipo_equipo.save(self.db, db_obj)
        except IntegrityError as e:
            logger.warning("Integrity error updating tipo de equipo id=%s: %s", id, e.orig)
            raise InvalidArgumentError(
                "Error de integridad de datos. El tipo de equipo ya existe o tiene valores inválidos."
            ) from e
        logger.info("Tipo de equipo updated: id=%s", id)
        return db_obj

    async def delete(self, id: int) -> None:
        await self.find_by_id(id)
        if await equipos_crud.tipo_equipo.tiene_equipos(self.db, id=id):
            raise InvalidArgumentError(
                "No se puede eliminar el tipo de equipo porque tiene equipos asociados."
            )
        try:
            await equipos_crud.tipo_equipo.delete(self.db, id=id)
        except IntegrityError as e:
            logger.warning("Tipo de equipo id=%s is still referenced: %s", id, e.orig)
            raise InvalidArgumentError(
                "No se puede eliminar el tipo de equipo porque tiene registros asociados."
            ) from e
        logger.info("Tipo de equipo deleted: id=%s", id)


# =============================================================================
# 2. 팀 (Equipo) 서비스
# =============================================================================
class EquipoService:
    """
    팀의 CRUD를 담당합니다.

    팀 유형과 팀장은 로컬에서, 소속 중대(compania)는 외부 카탈로그에서 존재를 확인합니다.
    중대 확인이 실패하면(존재하지 않거나 통신 오류) 저장하지 않으며 재시도하지 않습니다.
    조회 전용으로 사용할 때는 compania_verifier 없이 생성할 수 있습니다.
    """

    def __init__(self, db: AsyncSession, compania_verifier: Optional[ExistenceVerifier] = None):
        self.db = db
        self.compania_verifier = compania_verifier
        self.tipo_equipo_service = TipoEquipoService(db)

    async def find_all(self) -> List[equipos_models.Equipo]:
        return await equipos_crud.equipo.get_multi(self.db)

    async def find_by_id(self, id: int) -> equipos_models.Equipo:
        db_obj = await equipos_crud.equipo.get(self.db, id)
        if db_obj is None:
            raise NotFoundError(f"Equipo no encontrado con ID: {id}")
        return db_obj

    async def validate(self, obj_in: equipos_schemas.EquipoBase) -> str:
        """
        팀 속성과 관계를 검증하고 정리된 이름을 반환합니다.
        """
        if es_vacio(obj_in.nombre):
            raise InvalidArgumentError("El nombre del equipo es requerido.")
        nombre = obj_in.nombre.strip()
        validar_largo(nombre, MAX_NOMBRE, "El nombre del equipo no puede exceder los 50 caracteres.")

        if obj_in.tipo_equipo_id is not None:
            try:
                await self.tipo_equipo_service.find_by_id(obj_in.tipo_equipo_id)
            except NotFoundError as e:
                raise InvalidArgumentError("El tipo de equipo asociado no existe.") from e

        if obj_in.lider_id is not None:
            if not await perfiles_crud.usuario.exists(self.db, obj_in.lider_id):
                raise InvalidArgumentError("El líder asociado no existe.")

        if obj_in.compania_id is not None:
            if self.compania_verifier is None:
                raise RuntimeError("EquipoService was built without a compania verifier.")
            await self.compania_verifier.verify(obj_in.compania_id)

        return nombre

    async def save(self, obj_in: Optional[equipos_schemas.EquipoCreate]) -> equipos_models.Equipo:
        requerir(obj_in, "El equipo no puede ser nulo.")
        nombre = await self.validate(obj_in)

        db_obj = equipos_models.Equipo(
            nombre=nombre,
            tipo_equipo_id=obj_in.tipo_equipo_id,
            compania_id=obj_in.compania_id,
            estado_id=obj_in.estado_id,
            lider_id=obj_in.lider_id,
        )
        try:
            db_obj = await equipos_crud.equipo.save(self.db, db_obj)
        except IntegrityError as e:
            logger.warning("Integrity error creating equipo '%s': %s", nombre, e.orig)
            raise InvalidArgumentError(
                "Error de integridad de datos. El equipo no cumple con las restricciones de la base de datos."
            ) from e
        logger.info("Equipo created: id=%s nombre=%s", db_obj.id, db_obj.nombre)
        return db_obj

    async def update(self, obj_in: Optional[equipos_schemas.EquipoUpdate], id: int) -> equipos_models.Equipo:
        requerir(obj_in, "El equipo a actualizar no puede ser nulo.")
        nombre = await self.validate(obj_in)
        db_obj = await self.find_by_id(id)

        # estado_id는 생성 시에만 설정되며 업데이트로 덮어쓰지 않습니다.
        db_obj.nombre = nombre
        db_obj.compania_id = obj_in.compania_id
        db_obj.tipo_equipo_id = obj_in.tipo_equipo_id
        db_obj.lider_id = obj_in.lider_id
        try:
            db_obj = await equipos_crud.equipo.save(self.db, db_obj)
        except IntegrityError as e:
            logger.warning("Integrity error updating equipo id=%s: %s", id, e.orig)
            raise InvalidArgumentError(
                "Error de integridad de datos. No se puede actualizar el equipo, puede que ya exista."
            ) from e
        logger.info("Equipo updated: id=%s", id)
        return db_obj

    async def delete(self, id: int) -> None:
        await self.find_by_id(id)
        if await equipos_crud.equipo.tiene_bomberos(self.db, id=id):
            raise InvalidArgumentError("No se puede eliminar el equipo porque tiene bomberos asociados.")
        try:
            await equipos_crud.equipo.delete(self.db, id=id)
        except IntegrityError as e:
            logger.warning("Equipo id=%s is still referenced: %s", id, e.orig)
            raise InvalidArgumentError("No se puede eliminar el equipo porque tiene registros asociados.") from e
        logger.info("Equipo deleted: id=%s", id)
