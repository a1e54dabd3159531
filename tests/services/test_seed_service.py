# tests/services/test_seed_service.py

"""
개발용 seed 루틴(SeedService) 테스트 모듈입니다.
외부 estado / compania 목록은 FakeCatalogClient 로 대체하고, 난수는 고정 시드를 사용합니다.
"""

import random

import pytest
from sqlmodel import func, select
from sqlmodel.ext.asyncio.session import AsyncSession

from app.domains.equipos import models as equipos_models
from app.domains.perfiles import models as perfiles_models
from app.services.seed_service import TIPOS_EQUIPO, TIPOS_USUARIO, SeedError, SeedService
from app.utils.run import calcular_dv
from tests.fakes import FakeCatalogClient

ESTADOS = [{"id": 1, "nombre": "Activo"}, {"idEstado": 2, "nombre": "Inactivo"}]
COMPANIAS = [{"id": 10, "nombre": "Primera Compañía"}, {"id": 20, "nombre": "Segunda Compañía"}]


class ConstantRandom(random.Random):
    """randint 가 항상 하한값을 반환하는 난수 생성기 (유일값 생성 실패 재현용)."""

    def randint(self, a, b):
        return a


async def _count(db: AsyncSession, model) -> int:
    result = await db.execute(select(func.count()).select_from(model))
    return result.scalar_one()


def _seed(db: AsyncSession, estados=ESTADOS, companias=COMPANIAS, rng=None, **kwargs) -> SeedService:
    return SeedService(
        db,
        FakeCatalogClient(estados),
        FakeCatalogClient(companias),
        rng or random.Random(1234),
        **kwargs,
    )


@pytest.mark.asyncio
async def test_seed_populates_catalogs_and_profiles(db_session: AsyncSession):
    resumen = await _seed(db_session, num_equipos=3, usuarios_por_tipo=2).run()

    assert not resumen.aborted
    assert resumen.tipos_usuario == len(TIPOS_USUARIO)
    assert resumen.tipos_equipo == len(TIPOS_EQUIPO)
    assert resumen.equipos == 3
    # "Bombero en Terreno" 과 "Operador de Sala" 유형은 소방대원으로 생성됩니다.
    assert resumen.bomberos == 4
    assert resumen.usuarios == 6

    assert await _count(db_session, equipos_models.Equipo) == 3
    assert await _count(db_session, perfiles_models.Usuario) == 10
    assert await _count(db_session, perfiles_models.Bombero) == 4


@pytest.mark.asyncio
async def test_seed_generates_consistent_usuarios(db_session: AsyncSession):
    await _seed(db_session, num_equipos=2, usuarios_por_tipo=3).run()

    usuarios = (await db_session.execute(select(perfiles_models.Usuario))).scalars().all()
    assert len({u.run for u in usuarios}) == len(usuarios)
    assert len({u.telefono for u in usuarios}) == len(usuarios)
    assert len({u.correo for u in usuarios}) == len(usuarios)
    for usuario in usuarios:
        assert usuario.dv == calcular_dv(usuario.run)
        assert usuario.telefono.startswith("9") and len(usuario.telefono) == 9
        assert usuario.estado_id in {1, 2}

    equipos = (await db_session.execute(select(equipos_models.Equipo))).scalars().all()
    assert {e.compania_id for e in equipos} <= {10, 20}


@pytest.mark.asyncio
async def test_seed_reuses_existing_catalog_names(
    db_session: AsyncSession, tipo_usuario: perfiles_models.TipoUsuario, tipo_equipo: equipos_models.TipoEquipo
):
    await _seed(db_session, num_equipos=1, usuarios_por_tipo=0).run()

    assert await _count(db_session, perfiles_models.TipoUsuario) == len(TIPOS_USUARIO)
    assert await _count(db_session, equipos_models.TipoEquipo) == len(TIPOS_EQUIPO)


@pytest.mark.asyncio
async def test_seed_avoids_values_already_stored(db_session: AsyncSession, usuario_factory):
    await usuario_factory("11111111", "911111111", "uno@correo.cl")
    await _seed(db_session, num_equipos=1, usuarios_por_tipo=1).run()

    assert await _count(db_session, perfiles_models.Usuario) == len(TIPOS_USUARIO) + 1


@pytest.mark.asyncio
@pytest.mark.parametrize("estados, companias", [([], COMPANIAS), (ESTADOS, [])])
async def test_seed_aborts_without_external_catalogs(db_session: AsyncSession, estados, companias):
    resumen = await _seed(db_session, estados, companias).run()

    assert resumen.aborted
    assert resumen.equipos == 0
    assert resumen.usuarios == 0
    # 카탈로그 생성은 외부 목록 조회보다 먼저 수행됩니다.
    assert await _count(db_session, perfiles_models.TipoUsuario) == len(TIPOS_USUARIO)
    assert await _count(db_session, equipos_models.Equipo) == 0
    assert await _count(db_session, perfiles_models.Usuario) == 0


@pytest.mark.asyncio
async def test_seed_gives_up_after_max_attempts(db_session: AsyncSession):
    service = _seed(db_session, rng=ConstantRandom(), num_equipos=1, usuarios_por_tipo=2, max_intentos=5)
    with pytest.raises(SeedError, match="run"):
        await service.run()
