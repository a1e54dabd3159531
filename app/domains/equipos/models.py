# app/domains/equipos/models.py

"""
'equipos' 도메인의 데이터베이스 ORM 모델을 정의하는 모듈입니다.

이 모듈은 팀 유형(tipos_equipo)과 팀(equipos) 테이블에 대한 SQLModel 클래스를 포함합니다.
소속 중대(compania)와 상태(estado)는 외부 서비스가 소유하므로 id만 보관합니다.
"""

from typing import Optional, TYPE_CHECKING
from sqlmodel import Field, Relationship, SQLModel, Column
from sqlalchemy import ForeignKey, Integer


if TYPE_CHECKING:
    from app.domains.perfiles.models import Usuario


# =============================================================================
# 1. tipos_equipo 테이블 모델
# =============================================================================
class TipoEquipo(SQLModel, table=True):
    """
    팀 유형(전문 분야) 카탈로그 (예: 의료, 도시 구조, 산림).
    """
    __tablename__ = "tipos_equipo"

    id: Optional[int] = Field(default=None, primary_key=True, description="팀 유형 고유 ID")
    nombre: str = Field(max_length=50, sa_column_kwargs={"unique": True}, description="팀 유형 이름")


# =============================================================================
# 2. equipos 테이블 모델
# =============================================================================
class Equipo(SQLModel, table=True):
    """
    equipos 테이블에 매핑되는 SQLModel ORM 클래스입니다.
    """
    __tablename__ = "equipos"

    id: Optional[int] = Field(default=None, primary_key=True, description="팀 고유 ID")
    nombre: str = Field(max_length=50, description="팀 이름")
    tipo_equipo_id: Optional[int] = Field(
        default=None,
        sa_column=Column(Integer, ForeignKey("tipos_equipo.id", ondelete="RESTRICT")),
        description="팀 유형 ID (FK)"
    )
    compania_id: Optional[int] = Field(default=None, description="외부 compania 카탈로그 ID")
    estado_id: Optional[int] = Field(default=None, description="외부 estado 카탈로그 ID")
    lider_id: Optional[int] = Field(
        default=None,
        sa_column=Column(Integer, ForeignKey("usuarios.id", ondelete="RESTRICT")),
        description="팀장 사용자 ID (FK)"
    )

    tipo_equipo: Optional["TipoEquipo"] = Relationship()
    lider: Optional["Usuario"] = Relationship()
