# app/domains/perfiles/services.py

"""
'perfiles' 도메인의 검증 및 영속화 서비스 모듈입니다.

- TipoUsuarioService: 사용자 유형 카탈로그
- UsuarioService: 사용자 (소방대원 포함) 및 사진 업로드
- BomberoService: 소방대원 (사용자 + 소속 팀 확장 행)

사용자 저장 전 검증 순서:
1. 필수 속성 및 형식 (RUN, dv, 전화번호, 이메일, 길이 제한)
2. 사용자 유형 (로컬 조회)
3. 상태 estado (외부 카탈로그 조회, 재시도 없음)
run/telefono/correo 유일성 위반은 저장 시점의 IntegrityError를 InvalidArgumentError로 변환해 보고합니다.
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.exceptions import ExternalServiceError, InvalidArgumentError, NotFoundError, PerfilesError
from app.core.security import get_password_hash
from app.core.validation import (
    MAX_NOMBRE,
    es_correo_valido,
    es_telefono_valido,
    es_vacio,
    requerir,
    validar_largo,
    validar_nombre_catalogo,
)
from app.services.external_services import ExistenceVerifier, FotoClient
from app.utils.run import es_dv_valido, es_run_valido
from app.domains.equipos.services import EquipoService
from . import crud as perfiles_crud
from . import models as perfiles_models
from . import schemas as perfiles_schemas


logger = logging.getLogger(__name__)

MENSAJE_DUPLICADO = "Error de integridad de datos. El RUN, teléfono o correo ya existen."
CAMPOS_OBLIGATORIOS = (
    "run", "dv", "nombre", "apellido_paterno", "apellido_materno", "telefono", "correo", "contrasenia",
)


# =============================================================================
# 1. 사용자 유형 (TipoUsuario) 서비스
# =============================================================================
class TipoUsuarioService:
    """사용자 유형 카탈로그의 CRUD 및 이름 검증을 담당합니다."""

    ENTIDAD = "tipo de usuario"

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_all(self) -> List[perfiles_models.TipoUsuario]:
        return await perfiles_crud.tipo_usuario.get_multi(self.db)

    async def find_by_id(self, id: int) -> perfiles_models.TipoUsuario:
        db_obj = await perfiles_crud.tipo_usuario.get(self.db, id)
        if db_obj is None:
            raise NotFoundError(f"No se encontró el tipo de usuario con ID: {id}")
        return db_obj

    async def save(self, obj_in: Optional[perfiles_schemas.TipoUsuarioCreate]) -> perfiles_models.TipoUsuario:
        requerir(obj_in, "El tipo de usuario no puede ser nulo")
        nombre = validar_nombre_catalogo(obj_in.nombre, self.ENTIDAD)

        db_obj = perfiles_models.TipoUsuario(nombre=nombre)
        try:
            db_obj = await perfiles_crud.tipo_usuario.save(self.db, db_obj)
        except IntegrityError as e:
            logger.warning("Duplicate tipo de usuario '%s': %s", nombre, e.orig)
            raise InvalidArgumentError("Error de integridad de datos. El nombre del tipo de usuario ya existe.") from e
        logger.info("Tipo de usuario created: id=%s nombre=%s", db_obj.id, db_obj.nombre)
        return db_obj

    async def update(
        self, obj_in: Optional[perfiles_schemas.TipoUsuarioUpdate], id: int
    ) -> perfiles_models.TipoUsuario:
        requerir(obj_in, "El tipo de usuario no puede ser nulo")
        db_obj = await self.find_by_id(id)
        db_obj.nombre = validar_nombre_catalogo(obj_in.nombre, self.ENTIDAD)
        try:
            db_obj = await perfiles_crud.tipo_usuario.save(self.db, db_obj)
        except IntegrityError as e:
            logger.warning("Integrity error updating tipo de usuario id=%s: %s", id, e.orig)
            raise InvalidArgumentError(
                "Error de integridad de datos. El tipo de usuario ya existe o tiene valores inválidos."
            ) from e
        logger.info("Tipo de usuario updated: id=%s", id)
        return db_obj

    async def delete(self, id: int) -> None:
        await self.find_by_id(id)
        if await perfiles_crud.tipo_usuario.tiene_usuarios(self.db, id=id):
            raise InvalidArgumentError(
                "No se puede eliminar el tipo de usuario porque tiene usuarios asociados."
            )
        try:
            await perfiles_crud.tipo_usuario.delete(self.db, id=id)
        except IntegrityError as e:
            logger.warning("Tipo de usuario id=%s is still referenced: %s", id, e.orig)
            raise InvalidArgumentError(
                "No se puede eliminar el tipo de usuario porque tiene registros asociados."
            ) from e
        logger.info("Tipo de usuario deleted: id=%s", id)


# =============================================================================
# 2. 사용자 (Usuario) 서비스
# =============================================================================
class UsuarioService:
    """
    사용자의 CRUD와 사진 업로드를 담당합니다.

    find_all/find_by_id는 일반 사용자와 소방대원을 모두 반환합니다 (소방대원도 사용자입니다).
    """

    def __init__(
        self,
        db: AsyncSession,
        estado_verifier: ExistenceVerifier,
        foto_client: Optional[FotoClient] = None,
    ):
        self.db = db
        self.estado_verifier = estado_verifier
        self.foto_client = foto_client
        self.tipo_usuario_service = TipoUsuarioService(db)

    async def find_all(self) -> List[perfiles_models.Usuario]:
        return await perfiles_crud.usuario.get_multi_con_relaciones(self.db)

    async def find_by_id(self, id: int) -> perfiles_models.Usuario:
        db_obj = await perfiles_crud.usuario.get_con_relaciones(self.db, id=id)
        if db_obj is None:
            raise NotFoundError(f"Usuario no encontrado con ID: {id}")
        return db_obj

    async def validate(self, obj_in: perfiles_schemas.UsuarioCreate) -> Dict[str, Any]:
        """
        사용자 요청을 검증하고 usuarios 테이블에 그대로 쓸 수 있는 값 사전을 반환합니다.
        비밀번호는 해싱되고 dv는 대문자로 정규화됩니다.
        dv와 run의 일치 여부는 검사하지 않습니다.

        Raises:
            InvalidArgumentError: 속성 또는 관계 검증 실패
                (외부 estado 확인 실패는 ReferenceNotFoundError / ReferenceUnverifiableError)
        """
        if any(es_vacio(getattr(obj_in, campo)) for campo in CAMPOS_OBLIGATORIOS) or obj_in.fecha_registro is None:
            raise InvalidArgumentError("Todos los campos obligatorios del usuario deben ser proporcionados.")

        run = obj_in.run.strip()
        dv = obj_in.dv.strip().upper()
        telefono = obj_in.telefono.strip()
        correo = obj_in.correo.strip()

        if not es_run_valido(run):
            raise InvalidArgumentError("El RUN debe tener entre 7 y 8 dígitos.")
        if not es_dv_valido(dv):
            raise InvalidArgumentError("El dígito verificador debe ser un número o K.")
        if not es_telefono_valido(telefono):
            raise InvalidArgumentError("El teléfono debe tener 9 dígitos.")
        validar_largo(correo, 80, "El correo no puede exceder los 80 caracteres.")
        if not es_correo_valido(correo):
            raise InvalidArgumentError("El correo no tiene un formato válido.")

        nombres = {}
        for campo in ("nombre", "apellido_paterno", "apellido_materno"):
            nombres[campo] = getattr(obj_in, campo).strip()
            validar_largo(
                nombres[campo], MAX_NOMBRE, f"El campo {campo} no puede exceder los {MAX_NOMBRE} caracteres."
            )

        intentos_fallidos = obj_in.intentos_fallidos if obj_in.intentos_fallidos is not None else 0
        if intentos_fallidos < 0:
            raise InvalidArgumentError("Los intentos fallidos no pueden ser negativos.")
        if obj_in.dias_baneo is not None and obj_in.dias_baneo < 0:
            raise InvalidArgumentError("Los días de baneo no pueden ser negativos.")
        validar_largo(obj_in.razon_baneo, 100, "La razón de baneo no puede exceder los 100 caracteres.")

        if obj_in.tipo_usuario_id is None:
            raise InvalidArgumentError("El tipo de usuario es un campo obligatorio.")
        try:
            await self.tipo_usuario_service.find_by_id(obj_in.tipo_usuario_id)
        except NotFoundError as e:
            raise InvalidArgumentError("El tipo de usuario asociado no existe.") from e

        if obj_in.estado_id is None:
            raise InvalidArgumentError("El estado es un campo obligatorio.")
        await self.estado_verifier.verify(obj_in.estado_id)

        return {
            "run": run,
            "dv": dv,
            **nombres,
            "fecha_registro": obj_in.fecha_registro,
            "telefono": telefono,
            "correo": correo,
            "contrasenia": get_password_hash(obj_in.contrasenia),
            "intentos_fallidos": intentos_fallidos,
            "razon_baneo": obj_in.razon_baneo,
            "dias_baneo": obj_in.dias_baneo,
            "estado_id": obj_in.estado_id,
            "tipo_usuario_id": obj_in.tipo_usuario_id,
        }

    async def _persist(self, db_obj: perfiles_models.Usuario) -> perfiles_models.Usuario:
        # 롤백 후에는 객체 속성이 만료되므로 로그에 쓸 값은 미리 읽어 둡니다.
        run = db_obj.run
        try:
            return await perfiles_crud.usuario.save(self.db, db_obj)
        except IntegrityError as e:
            logger.warning("Integrity error saving usuario run=%s: %s", run, e.orig)
            raise InvalidArgumentError(MENSAJE_DUPLICADO) from e

    async def save(self, obj_in: Optional[perfiles_schemas.UsuarioCreate]) -> perfiles_models.Usuario:
        requerir(obj_in, "El usuario no puede ser nulo.")
        datos = await self.validate(obj_in)

        db_obj = await self._persist(perfiles_models.Usuario(**datos))
        logger.info("Usuario created: id=%s run=%s", db_obj.id, db_obj.run)
        return db_obj

    async def update(self, obj_in: Optional[perfiles_schemas.UsuarioUpdate], id: int) -> perfiles_models.Usuario:
        requerir(obj_in, "El usuario a actualizar no puede ser nulo.")
        datos = await self.validate(obj_in)
        db_obj = await self.find_by_id(id)

        for key, value in datos.items():
            setattr(db_obj, key, value)
        db_obj = await self._persist(db_obj)
        logger.info("Usuario updated: id=%s", id)
        return db_obj

    async def delete(self, id: int) -> None:
        """사용자를 삭제합니다. 소방대원 확장 행과 사진 행이 있으면 함께 삭제됩니다."""
        await self.find_by_id(id)
        if await perfiles_crud.usuario.es_lider(self.db, id=id):
            raise InvalidArgumentError("No se puede eliminar el usuario porque es líder de un equipo.")
        try:
            await perfiles_crud.usuario.delete(self.db, id=id)
        except IntegrityError as e:
            logger.warning("Usuario id=%s is still referenced: %s", id, e.orig)
            raise InvalidArgumentError("No se puede eliminar el usuario porque tiene registros asociados.") from e
        logger.info("Usuario deleted: id=%s", id)

    async def subir_foto(
        self, id: int, filename: str, content: bytes, content_type: Optional[str] = None
    ) -> str:
        """
        사진을 외부 저장소에 업로드하고, 반환된 URL을 사용자의 사진 레코드에 저장합니다.

        업로드 전에 사용자 존재를 먼저 확인합니다.
        로컬 저장이 실패해도 이미 업로드된 원격 파일은 되돌리지 않습니다.

        Raises:
            ExternalServiceError: 사용자 없음, 빈 파일, 업로드 실패 등 모든 실패
                (메시지: "Error al subir la foto: ...")
        """
        if self.foto_client is None:
            raise RuntimeError("UsuarioService was built without a foto client.")
        try:
            usuario = await self.find_by_id(id)
            url = await self.foto_client.upload(filename, content, content_type)
        except PerfilesError as e:
            raise ExternalServiceError(f"Error al subir la foto: {e.message}") from e

        if usuario.foto is None:
            usuario.foto = perfiles_models.Foto(url=url)
        else:
            usuario.foto.url = url
        await perfiles_crud.usuario.save(self.db, usuario)
        logger.info("Foto uploaded for usuario id=%s: %s", id, url)
        return url


# =============================================================================
# 3. 소방대원 (Bombero) 서비스
# =============================================================================
class BomberoService:
    """
    소방대원의 CRUD를 담당합니다.

    사용자 검증을 그대로 재사용하고, 소속 팀(equipo_id)이 주어지면 팀 존재를 추가로 확인합니다.
    find_all/find_by_id는 확장 행이 있는 사용자만 반환합니다.
    """

    def __init__(self, db: AsyncSession, estado_verifier: ExistenceVerifier):
        self.db = db
        self.usuario_service = UsuarioService(db, estado_verifier)
        self.equipo_service = EquipoService(db)

    async def find_all(self) -> List[perfiles_models.Usuario]:
        return await perfiles_crud.bombero.get_multi_usuarios(self.db)

    async def find_by_id(self, id: int) -> perfiles_models.Usuario:
        db_obj = await perfiles_crud.bombero.get_usuario(self.db, id=id)
        if db_obj is None:
            raise NotFoundError(f"Bombero no encontrado con ID: {id}")
        return db_obj

    async def validate(self, obj_in: perfiles_schemas.BomberoCreate) -> Dict[str, Any]:
        datos = await self.usuario_service.validate(obj_in)
        if obj_in.equipo_id is not None:
            try:
                await self.equipo_service.find_by_id(obj_in.equipo_id)
            except NotFoundError as e:
                raise InvalidArgumentError("El equipo asociado no existe.") from e
        return datos

    async def save(self, obj_in: Optional[perfiles_schemas.BomberoCreate]) -> perfiles_models.Usuario:
        requerir(obj_in, "El objeto Bombero no puede ser nulo.")
        datos = await self.validate(obj_in)

        db_obj = perfiles_models.Usuario(**datos)
        db_obj.bombero = perfiles_models.Bombero(equipo_id=obj_in.equipo_id)
        db_obj = await self.usuario_service._persist(db_obj)
        logger.info("Bombero created: id=%s equipo_id=%s", db_obj.id, obj_in.equipo_id)
        return db_obj

    async def update(self, obj_in: Optional[perfiles_schemas.BomberoUpdate], id: int) -> perfiles_models.Usuario:
        requerir(obj_in, "El objeto Bombero a actualizar no puede ser nulo.")
        datos = await self.validate(obj_in)
        db_obj = await self.find_by_id(id)

        for key, value in datos.items():
            setattr(db_obj, key, value)
        db_obj.bombero.equipo_id = obj_in.equipo_id
        db_obj = await self.usuario_service._persist(db_obj)
        logger.info("Bombero updated: id=%s", id)
        return db_obj

    async def delete(self, id: int) -> None:
        """소방대원을 삭제합니다. 사용자 행과 확장 행이 모두 삭제됩니다."""
        await self.find_by_id(id)
        await self.usuario_service.delete(id)
