# app/domains/equipos/schemas.py

"""
'equipos' 도메인의 Pydantic 스키마를 정의하는 모듈입니다.

관계(팀 유형, 중대, 상태, 팀장)는 모두 id로 참조합니다.
"""

from typing import Optional
from pydantic import Field
from sqlmodel import SQLModel


# =============================================================================
# 1. tipos_equipo 스키마
# =============================================================================
class TipoEquipoBase(SQLModel):
    nombre: Optional[str] = Field(None, description="팀 유형 이름 (필수, 최대 50자)")


class TipoEquipoCreate(TipoEquipoBase):
    pass


class TipoEquipoUpdate(TipoEquipoBase):
    pass


class TipoEquipoRead(TipoEquipoBase):
    id: int = Field(..., description="팀 유형 고유 ID")
    nombre: str = Field(..., description="팀 유형 이름")

    class Config:
        from_attributes = True


# =============================================================================
# 2. equipos 스키마
# =============================================================================
class EquipoBase(SQLModel):
    nombre: Optional[str] = Field(None, description="팀 이름 (필수, 최대 50자)")
    tipo_equipo_id: Optional[int] = Field(None, description="팀 유형 ID")
    compania_id: Optional[int] = Field(None, description="외부 compania 카탈로그 ID")
    lider_id: Optional[int] = Field(None, description="팀장 사용자 ID")


class EquipoCreate(EquipoBase):
    estado_id: Optional[int] = Field(None, description="외부 estado 카탈로그 ID (생성 시에만 설정)")


class EquipoUpdate(EquipoBase):
    """업데이트는 nombre, tipo_equipo_id, compania_id, lider_id만 덮어씁니다."""
    pass


class EquipoRead(EquipoBase):
    id: int = Field(..., description="팀 고유 ID")
    estado_id: Optional[int] = Field(None, description="외부 estado 카탈로그 ID")

    class Config:
        from_attributes = True
