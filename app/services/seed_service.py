# app/services/seed_service.py

"""
개발 환경용 초기 데이터(seed) 생성 서비스 모듈입니다.

순서:
1. 사용자 유형 / 팀 유형 카탈로그 생성 (이미 있는 이름은 건너뜀)
2. 외부 estado / compania 목록 조회 (둘 중 하나라도 비어 있으면 중단)
3. 팀(Equipo) 생성
4. 사용자 유형별 사용자 생성. "Bombero en Terreno" / "Operador de Sala" 유형은 소방대원으로 생성

run / telefono / correo 는 저장된 값으로 초기화한 메모리 집합과 비교해 중복을 피하며,
최대 시도 횟수(SEED_MAX_INTENTOS)를 넘으면 SeedError 를 발생시킵니다.
난수는 주입된 `random.Random` 에서만 가져오므로 테스트에서 결과를 고정할 수 있습니다.
"""

import logging
import random
import unicodedata
from datetime import datetime, timedelta, UTC
from typing import Any, Callable, Dict, Iterable, List, Optional, Set

from pydantic import BaseModel
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.config import settings
from app.core.security import get_password_hash
from app.services.external_services import HttpCatalogClient
from app.utils.run import calcular_dv, generar_run
from app.domains.perfiles import crud as perfiles_crud
from app.domains.perfiles import models as perfiles_models
from app.domains.equipos import crud as equipos_crud
from app.domains.equipos import models as equipos_models


logger = logging.getLogger(__name__)


TIPOS_USUARIO = ["Jefe de Compañía", "Administrador", "Bombero en Terreno", "Operador de Sala", "Ciudadano"]
TIPOS_EQUIPO = [
    "Médico", "Administrativo", "Forestales", "Rescate Urbano",
    "Materiales Peligrosos", "Alturas", "Subacuático", "Logístico",
]
TIPOS_BOMBERO = {"bombero en terreno", "operador de sala"}

NOMBRES = [
    "Camila", "Valentina", "Francisca", "Javiera", "Catalina", "Fernanda", "Constanza", "Ignacia",
    "Matías", "Benjamín", "Vicente", "Martín", "Sebastián", "Joaquín", "Tomás", "Cristóbal",
]
APELLIDOS = [
    "González", "Muñoz", "Rojas", "Díaz", "Pérez", "Soto", "Contreras", "Silva",
    "Martínez", "Sepúlveda", "Morales", "Rodríguez", "López", "Fuentes", "Hernández", "Torres",
]
DOMINIOS = ["correo.cl", "bomberos.cl", "mail.com", "rescate.cl"]
NOMBRES_EQUIPO = ["Halcón", "Cóndor", "Puma", "Huemul", "Zorro", "Águila", "Lobo", "Toro"]

CONTRASENIA_SEED = "password123"


class SeedError(Exception):
    """seed 루틴이 유일한 값을 제한된 시도 안에 만들지 못한 경우."""


class SeedResumen(BaseModel):
    tipos_usuario: int = 0
    tipos_equipo: int = 0
    equipos: int = 0
    usuarios: int = 0
    bomberos: int = 0
    aborted: bool = False


def _extraer_ids(items: Iterable[Dict[str, Any]], *claves: str) -> List[int]:
    """외부 목록의 각 항목에서 id 를 꺼냅니다 (예: "id", "idEstado")."""
    ids = []
    for item in items:
        for clave in claves:
            if isinstance(item, dict) and item.get(clave) is not None:
                ids.append(int(item[clave]))
                break
    return ids


def _ascii(texto: str) -> str:
    normalizado = unicodedata.normalize("NFKD", texto)
    return normalizado.encode("ascii", "ignore").decode("ascii").lower()


class SeedService:
    def __init__(
        self,
        db: AsyncSession,
        estado_client: HttpCatalogClient,
        compania_client: HttpCatalogClient,
        rng: Optional[random.Random] = None,
        *,
        num_equipos: Optional[int] = None,
        usuarios_por_tipo: Optional[int] = None,
        max_intentos: Optional[int] = None,
    ):
        self.db = db
        self.estado_client = estado_client
        self.compania_client = compania_client
        self.rng = rng or random.Random()
        self.num_equipos = settings.SEED_EQUIPOS if num_equipos is None else num_equipos
        self.usuarios_por_tipo = settings.SEED_USUARIOS_POR_TIPO if usuarios_por_tipo is None else usuarios_por_tipo
        self.max_intentos = settings.SEED_MAX_INTENTOS if max_intentos is None else max_intentos

        self.runs: Set[str] = set()
        self.telefonos: Set[str] = set()
        self.correos: Set[str] = set()
        # 비밀번호 해시는 비용이 크므로 한 번만 계산합니다.
        self._contrasenia_hash: Optional[str] = None

    async def run(self) -> SeedResumen:
        resumen = SeedResumen()
        logger.info("Cargando datos de prueba...")

        tipos_usuario = await self._crear_tipos_usuario()
        tipos_equipo = await self._crear_tipos_equipo()
        resumen.tipos_usuario = len(tipos_usuario)
        resumen.tipos_equipo = len(tipos_equipo)

        estados = _extraer_ids(await self.estado_client.list_all(), "id", "idEstado", "id_estado")
        companias = _extraer_ids(await self.compania_client.list_all(), "id", "idCompania", "id_compania")
        if not estados or not companias:
            logger.error("No se pudieron obtener estados o compañías de las APIs externas. Deteniendo carga.")
            resumen.aborted = True
            return resumen

        await self._cargar_valores_existentes()

        equipos = await self._crear_equipos(tipos_equipo, companias, estados)
        resumen.equipos = len(equipos)

        for tipo in tipos_usuario:
            es_bombero = tipo.nombre.strip().lower() in TIPOS_BOMBERO
            for _ in range(self.usuarios_por_tipo):
                usuario = self._nuevo_usuario(tipo, estados)
                if es_bombero and equipos:
                    usuario.bombero = perfiles_models.Bombero(equipo_id=self.rng.choice(equipos).id)
                    resumen.bomberos += 1
                else:
                    resumen.usuarios += 1
                await perfiles_crud.usuario.save(self.db, usuario)

        logger.info("Carga de datos finalizada: %s", resumen.model_dump())
        return resumen

    # -------------------------------------------------------------------------
    # 카탈로그
    # -------------------------------------------------------------------------
    async def _crear_tipos_usuario(self) -> List[perfiles_models.TipoUsuario]:
        tipos = []
        for nombre in TIPOS_USUARIO:
            tipo = await perfiles_crud.tipo_usuario.get_by_nombre(self.db, nombre=nombre)
            if tipo is None:
                tipo = await perfiles_crud.tipo_usuario.save(self.db, perfiles_models.TipoUsuario(nombre=nombre))
            tipos.append(tipo)
        return tipos

    async def _crear_tipos_equipo(self) -> List[equipos_models.TipoEquipo]:
        tipos = []
        for nombre in TIPOS_EQUIPO:
            tipo = await equipos_crud.tipo_equipo.get_by_nombre(self.db, nombre=nombre)
            if tipo is None:
                tipo = await equipos_crud.tipo_equipo.save(self.db, equipos_models.TipoEquipo(nombre=nombre))
            tipos.append(tipo)
        return tipos

    async def _crear_equipos(
        self, tipos_equipo: List[equipos_models.TipoEquipo], companias: List[int], estados: List[int]
    ) -> List[equipos_models.Equipo]:
        equipos = []
        for i in range(self.num_equipos):
            equipo = equipos_models.Equipo(
                nombre=f"Equipo {self.rng.choice(NOMBRES_EQUIPO)} {i + 1}",
                tipo_equipo_id=self.rng.choice(tipos_equipo).id,
                compania_id=self.rng.choice(companias),
                estado_id=self.rng.choice(estados),
            )
            equipos.append(await equipos_crud.equipo.save(self.db, equipo))
        return equipos

    # -------------------------------------------------------------------------
    # 사용자 생성
    # -------------------------------------------------------------------------
    async def _cargar_valores_existentes(self) -> None:
        self.runs = await perfiles_crud.usuario.valores_existentes(self.db, attribute="run")
        self.telefonos = await perfiles_crud.usuario.valores_existentes(self.db, attribute="telefono")
        self.correos = await perfiles_crud.usuario.valores_existentes(self.db, attribute="correo")

    def _unico(self, generar: Callable[[], str], usados: Set[str], campo: str) -> str:
        for _ in range(self.max_intentos):
            valor = generar()
            if valor not in usados:
                usados.add(valor)
                return valor
        raise SeedError(f"No se pudo generar un valor único para {campo} tras {self.max_intentos} intentos.")

    def _digitos(self, n: int) -> str:
        return "".join(str(self.rng.randint(0, 9)) for _ in range(n))

    def _nuevo_usuario(self, tipo: perfiles_models.TipoUsuario, estados: List[int]) -> perfiles_models.Usuario:
        nombre = self.rng.choice(NOMBRES)
        apellido_paterno = self.rng.choice(APELLIDOS)
        apellido_materno = self.rng.choice(APELLIDOS)

        run = self._unico(lambda: generar_run(self.rng), self.runs, "run")
        telefono = self._unico(lambda: "9" + self._digitos(8), self.telefonos, "telefono")
        correo = self._unico(
            lambda: (
                f"{_ascii(nombre)}.{_ascii(apellido_paterno)}{self.rng.randint(1, 9999)}"
                f"@{self.rng.choice(DOMINIOS)}"
            ),
            self.correos,
            "correo",
        )

        if self._contrasenia_hash is None:
            self._contrasenia_hash = get_password_hash(CONTRASENIA_SEED)

        return perfiles_models.Usuario(
            run=run,
            dv=calcular_dv(run),
            nombre=nombre,
            apellido_paterno=apellido_paterno,
            apellido_materno=apellido_materno,
            fecha_registro=datetime.now(UTC) - timedelta(seconds=self.rng.randint(0, 5 * 24 * 3600)),
            telefono=telefono,
            correo=correo,
            contrasenia=self._contrasenia_hash,
            intentos_fallidos=0,
            estado_id=self.rng.choice(estados),
            tipo_usuario_id=tipo.id,
        )
