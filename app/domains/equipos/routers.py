# app/domains/equipos/routers.py

"""
'equipos' 도메인의 API 엔드포인트를 정의하는 모듈입니다.

- admin_router: 팀 유형 카탈로그 (관리자 API 접두사 아래에 등록)
- router: 팀 (프로필 API 접두사 아래에 등록)

목록 조회는 비어 있으면 204, 생성/수정/삭제는 text/plain 확인 메시지를 반환합니다.
오류 응답은 app.core.exceptions 의 처리기가 담당합니다.
"""

from typing import List
from fastapi import APIRouter, Depends, Request, Response, status

from app.core import dependencies as deps
from app.core import responses
from app.domains.equipos import schemas as equipos_schemas
from app.domains.equipos.services import EquipoService, TipoEquipoService

admin_router = APIRouter(
    tags=["Tipos de Equipo (팀 유형 관리)"],
    responses={404: {"description": "Not found"}},
)

router = APIRouter(
    tags=["Equipos (팀 관리)"],
    responses={404: {"description": "Not found"}},
)


# =============================================================================
# 1. tipos-equipo 엔드포인트
# =============================================================================
@admin_router.get("/tipos-equipo", response_model=List[equipos_schemas.TipoEquipoRead], summary="모든 팀 유형 조회")
async def listar_tipos_equipo(service: TipoEquipoService = Depends(deps.get_tipo_equipo_service)):
    tipos = await service.find_all()
    if not tipos:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return tipos


@admin_router.get("/tipos-equipo/{id}", response_model=equipos_schemas.TipoEquipoRead, summary="특정 팀 유형 조회")
async def buscar_tipo_equipo(id: int, service: TipoEquipoService = Depends(deps.get_tipo_equipo_service)):
    return await service.find_by_id(id)


@admin_router.post("/tipos-equipo", status_code=status.HTTP_201_CREATED, summary="새 팀 유형 생성")
async def agregar_tipo_equipo(
    request: Request,
    tipo_equipo: equipos_schemas.TipoEquipoCreate,
    service: TipoEquipoService = Depends(deps.get_tipo_equipo_service),
):
    """
    새로운 팀 유형을 생성합니다.
    - `nombre`: 팀 유형 이름 (필수, 고유, 최대 50자)
    """
    db_obj = await service.save(tipo_equipo)
    return responses.creado(request, "Tipo de equipo", db_obj.id)


@admin_router.put("/tipos-equipo/{id}", summary="팀 유형 수정")
async def actualizar_tipo_equipo(
    id: int,
    tipo_equipo: equipos_schemas.TipoEquipoUpdate,
    service: TipoEquipoService = Depends(deps.get_tipo_equipo_service),
):
    await service.update(tipo_equipo, id)
    return responses.actualizado()


@admin_router.delete("/tipos-equipo/{id}", summary="팀 유형 삭제")
async def eliminar_tipo_equipo(id: int, service: TipoEquipoService = Depends(deps.get_tipo_equipo_service)):
    """팀 유형을 삭제합니다. 이 유형을 사용하는 팀이 있으면 400을 반환합니다."""
    await service.delete(id)
    return responses.eliminado("Tipo de equipo")


# =============================================================================
# 2. equipos 엔드포인트
# =============================================================================
@router.get("/equipos", response_model=List[equipos_schemas.EquipoRead], summary="모든 팀 조회")
async def listar_equipos(service: EquipoService = Depends(deps.get_equipo_service)):
    equipos = await service.find_all()
    if not equipos:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return equipos


@router.get("/equipos/{id}", response_model=equipos_schemas.EquipoRead, summary="특정 팀 조회")
async def buscar_equipo(id: int, service: EquipoService = Depends(deps.get_equipo_service)):
    return await service.find_by_id(id)


@router.post("/equipos", status_code=status.HTTP_201_CREATED, summary="새 팀 생성")
async def agregar_equipo(
    request: Request,
    equipo: equipos_schemas.EquipoCreate,
    service: EquipoService = Depends(deps.get_equipo_service),
):
    """
    새로운 팀을 생성합니다.
    - `nombre`: 팀 이름 (필수, 최대 50자)
    - `tipo_equipo_id`: 팀 유형 (선택, 로컬에서 존재 확인)
    - `compania_id`: 소속 중대 (선택, 외부 API에서 존재 확인)
    - `lider_id`: 팀장 사용자 (선택, 로컬에서 존재 확인)
    """
    db_obj = await service.save(equipo)
    return responses.creado(request, "Equipo", db_obj.id)


@router.put("/equipos/{id}", summary="팀 수정")
async def actualizar_equipo(
    id: int,
    equipo: equipos_schemas.EquipoUpdate,
    service: EquipoService = Depends(deps.get_equipo_service),
):
    await service.update(equipo, id)
    return responses.actualizado()


@router.delete("/equipos/{id}", summary="팀 삭제")
async def eliminar_equipo(id: int, service: EquipoService = Depends(deps.get_equipo_service)):
    await service.delete(id)
    return responses.eliminado("Equipo")
