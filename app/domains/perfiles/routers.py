# app/domains/perfiles/routers.py

"""
'perfiles' 도메인의 API 엔드포인트를 정의하는 모듈입니다.

- admin_router: 사용자 유형, 사용자, 사진 업로드 (관리자 API 접두사 아래에 등록)
- router: 소방대원 (프로필 API 접두사 아래에 등록)
"""

from typing import List
from fastapi import APIRouter, Depends, File, Request, Response, UploadFile, status
from fastapi.responses import PlainTextResponse

from app.core import dependencies as deps
from app.core import responses
from app.domains.perfiles import schemas as perfiles_schemas
from app.domains.perfiles.services import BomberoService, TipoUsuarioService, UsuarioService

admin_router = APIRouter(
    tags=["Usuarios (사용자 관리)"],
    responses={404: {"description": "Not found"}},
)

router = APIRouter(
    tags=["Bomberos (소방대원 관리)"],
    responses={404: {"description": "Not found"}},
)


# =============================================================================
# 1. tipos-usuario 엔드포인트
# =============================================================================
@admin_router.get("/tipos-usuario", response_model=List[perfiles_schemas.TipoUsuarioRead], summary="모든 사용자 유형 조회")
async def listar_tipos_usuario(service: TipoUsuarioService = Depends(deps.get_tipo_usuario_service)):
    tipos = await service.find_all()
    if not tipos:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return tipos


@admin_router.get("/tipos-usuario/{id}", response_model=perfiles_schemas.TipoUsuarioRead, summary="특정 사용자 유형 조회")
async def buscar_tipo_usuario(id: int, service: TipoUsuarioService = Depends(deps.get_tipo_usuario_service)):
    return await service.find_by_id(id)


@admin_router.post("/tipos-usuario", status_code=status.HTTP_201_CREATED, summary="새 사용자 유형 생성")
async def agregar_tipo_usuario(
    request: Request,
    tipo_usuario: perfiles_schemas.TipoUsuarioCreate,
    service: TipoUsuarioService = Depends(deps.get_tipo_usuario_service),
):
    db_obj = await service.save(tipo_usuario)
    return responses.creado(request, "Tipo de usuario", db_obj.id)


@admin_router.put("/tipos-usuario/{id}", summary="사용자 유형 수정")
async def actualizar_tipo_usuario(
    id: int,
    tipo_usuario: perfiles_schemas.TipoUsuarioUpdate,
    service: TipoUsuarioService = Depends(deps.get_tipo_usuario_service),
):
    await service.update(tipo_usuario, id)
    return responses.actualizado()


@admin_router.delete("/tipos-usuario/{id}", summary="사용자 유형 삭제")
async def eliminar_tipo_usuario(id: int, service: TipoUsuarioService = Depends(deps.get_tipo_usuario_service)):
    await service.delete(id)
    return responses.eliminado("Tipo de usuario")


# =============================================================================
# 2. usuarios 엔드포인트
# =============================================================================
@admin_router.get("/usuarios", response_model=List[perfiles_schemas.UsuarioRead], summary="모든 사용자 조회")
async def listar_usuarios(service: UsuarioService = Depends(deps.get_usuario_service)):
    """소방대원을 포함한 모든 사용자를 조회합니다. 비밀번호는 응답에 포함되지 않습니다."""
    usuarios = await service.find_all()
    if not usuarios:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return [perfiles_schemas.UsuarioRead.from_usuario(u) for u in usuarios]


@admin_router.get("/usuarios/{id}", response_model=perfiles_schemas.UsuarioRead, summary="특정 사용자 조회")
async def buscar_usuario(id: int, service: UsuarioService = Depends(deps.get_usuario_service)):
    return perfiles_schemas.UsuarioRead.from_usuario(await service.find_by_id(id))


@admin_router.post("/usuarios", status_code=status.HTTP_201_CREATED, summary="새 사용자 생성")
async def agregar_usuario(
    request: Request,
    usuario: perfiles_schemas.UsuarioCreate,
    service: UsuarioService = Depends(deps.get_usuario_service),
):
    """
    새로운 사용자를 생성합니다.
    - `run`, `dv`, `nombre`, `apellido_paterno`, `apellido_materno`, `fecha_registro`,
      `telefono`, `correo`, `contrasenia`: 필수
    - `tipo_usuario_id`: 필수, 로컬에서 존재 확인
    - `estado_id`: 필수, 외부 estado API에서 존재 확인
    """
    db_obj = await service.save(usuario)
    return responses.creado(request, "Usuario", db_obj.id)


@admin_router.put("/usuarios/{id}", summary="사용자 수정")
async def actualizar_usuario(
    id: int,
    usuario: perfiles_schemas.UsuarioUpdate,
    service: UsuarioService = Depends(deps.get_usuario_service),
):
    await service.update(usuario, id)
    return responses.actualizado()


@admin_router.delete("/usuarios/{id}", summary="사용자 삭제")
async def eliminar_usuario(id: int, service: UsuarioService = Depends(deps.get_usuario_service)):
    await service.delete(id)
    return responses.eliminado("Usuario")


@admin_router.post("/usuarios/{id}/subir-foto", summary="사용자 사진 업로드")
async def subir_foto(
    id: int,
    foto: UploadFile = File(...),
    service: UsuarioService = Depends(deps.get_usuario_service),
):
    """
    사진 파일을 외부 사진 저장소에 업로드하고 반환된 URL을 사용자 정보에 저장합니다.
    실패 시 500과 함께 "Error al subir la foto: ..." 메시지를 반환합니다.
    """
    content = await foto.read()
    url = await service.subir_foto(id, foto.filename, content, foto.content_type)
    return PlainTextResponse(f"Foto subida y URL guardada con éxito: {url}")


# =============================================================================
# 3. bomberos 엔드포인트
# =============================================================================
@router.get("/bomberos", response_model=List[perfiles_schemas.BomberoRead], summary="모든 소방대원 조회")
async def listar_bomberos(service: BomberoService = Depends(deps.get_bombero_service)):
    bomberos = await service.find_all()
    if not bomberos:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return [perfiles_schemas.BomberoRead.from_usuario(b) for b in bomberos]


@router.get("/bomberos/{id}", response_model=perfiles_schemas.BomberoRead, summary="특정 소방대원 조회")
async def buscar_bombero(id: int, service: BomberoService = Depends(deps.get_bombero_service)):
    return perfiles_schemas.BomberoRead.from_usuario(await service.find_by_id(id))


@router.post("/bomberos", status_code=status.HTTP_201_CREATED, summary="새 소방대원 생성")
async def agregar_bombero(
    request: Request,
    bombero: perfiles_schemas.BomberoCreate,
    service: BomberoService = Depends(deps.get_bombero_service),
):
    """
    새로운 소방대원을 생성합니다. 사용자 필수 항목에 더해
    - `equipo_id`: 소속 팀 (선택, 로컬에서 존재 확인)
    """
    db_obj = await service.save(bombero)
    return responses.creado(request, "Bombero", db_obj.id)


@router.put("/bomberos/{id}", summary="소방대원 수정")
async def actualizar_bombero(
    id: int,
    bombero: perfiles_schemas.BomberoUpdate,
    service: BomberoService = Depends(deps.get_bombero_service),
):
    await service.update(bombero, id)
    return responses.actualizado()


@router.delete("/bomberos/{id}", summary="소방대원 삭제")
async def eliminar_bombero(id: int, service: BomberoService = Depends(deps.get_bombero_service)):
    """소방대원을 삭제합니다. 사용자 행과 소방대원 확장 행이 함께 삭제됩니다."""
    await service.delete(id)
    return responses.eliminado("Bombero")
