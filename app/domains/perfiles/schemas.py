# app/domains/perfiles/schemas.py

"""
'perfiles' 도메인의 Pydantic 스키마를 정의하는 모듈입니다.

요청 스키마의 필드는 모두 선택 사항(Optional)으로 두고, 필수 여부 및 형식 검증은
서비스 계층에서 수행합니다. 이렇게 해야 잘못된 값이 FastAPI의 422 응답이 아닌
서비스의 InvalidArgumentError(400, text/plain)로 보고됩니다.

비밀번호(contrasenia)는 쓰기 전용이며 응답 스키마에는 포함되지 않습니다.
"""

from typing import Optional, TYPE_CHECKING
from datetime import datetime
from pydantic import Field
from sqlmodel import SQLModel

if TYPE_CHECKING:
    from app.domains.perfiles.models import Usuario


# =============================================================================
# 1. tipos_usuario 스키마
# =============================================================================
class TipoUsuarioBase(SQLModel):
    nombre: Optional[str] = Field(None, description="사용자 유형 이름 (필수, 최대 50자)")


class TipoUsuarioCreate(TipoUsuarioBase):
    pass


class TipoUsuarioUpdate(TipoUsuarioBase):
    pass


class TipoUsuarioRead(TipoUsuarioBase):
    id: int = Field(..., description="사용자 유형 고유 ID")
    nombre: str = Field(..., description="사용자 유형 이름")

    class Config:
        from_attributes = True


# =============================================================================
# 2. usuarios 스키마
# =============================================================================
class UsuarioBase(SQLModel):
    """
    사용자 요청의 공통 속성입니다. 관계는 모두 id로 참조합니다.
    """
    run: Optional[str] = Field(None, description="RUN (7~8자리 숫자)")
    dv: Optional[str] = Field(None, description="검증 숫자 (0-9 또는 K)")
    nombre: Optional[str] = Field(None, description="이름")
    apellido_paterno: Optional[str] = Field(None, description="부계 성")
    apellido_materno: Optional[str] = Field(None, description="모계 성")
    fecha_registro: Optional[datetime] = Field(None, description="등록 일시")
    telefono: Optional[str] = Field(None, description="전화번호 (9자리)")
    correo: Optional[str] = Field(None, description="이메일")
    intentos_fallidos: Optional[int] = Field(0, description="로그인 실패 횟수")
    razon_baneo: Optional[str] = Field(None, description="차단 사유")
    dias_baneo: Optional[int] = Field(None, description="차단 일수")
    estado_id: Optional[int] = Field(None, description="외부 estado 카탈로그 ID (필수)")
    tipo_usuario_id: Optional[int] = Field(None, description="사용자 유형 ID (필수)")


class UsuarioCreate(UsuarioBase):
    contrasenia: Optional[str] = Field(None, description="비밀번호 (저장 전 해싱됨)")


class UsuarioUpdate(UsuarioCreate):
    """전체 교체 방식의 업데이트 요청입니다. 생성과 같은 검증을 거칩니다."""
    pass


class UsuarioRead(UsuarioBase):
    """
    사용자 응답 스키마입니다. 비밀번호를 제외하고 사진 URL을 포함합니다.
    """
    id: int = Field(..., description="사용자 고유 ID")
    foto_url: Optional[str] = Field(None, description="사진 URL")

    @classmethod
    def from_usuario(cls, usuario: "Usuario", **extra) -> "UsuarioRead":
        # foto 관계는 호출 전에 eager-load 되어 있어야 합니다.
        data = usuario.model_dump(exclude={"contrasenia", "foto_id"})
        data["foto_url"] = usuario.foto.url if usuario.foto else None
        data.update(extra)
        return cls.model_validate(data)


# =============================================================================
# 3. bomberos 스키마 (소방대원 = 사용자 + 소속 팀)
# =============================================================================
class BomberoCreate(UsuarioCreate):
    equipo_id: Optional[int] = Field(None, description="소속 팀 ID")


class BomberoUpdate(BomberoCreate):
    pass


class BomberoRead(UsuarioRead):
    equipo_id: Optional[int] = Field(None, description="소속 팀 ID")

    @classmethod
    def from_usuario(cls, usuario: "Usuario", **extra) -> "BomberoRead":
        equipo_id = usuario.bombero.equipo_id if usuario.bombero else None
        return super().from_usuario(usuario, equipo_id=equipo_id, **extra)
