# app/domains/perfiles/models.py

"""
'perfiles' 도메인의 데이터베이스 ORM 모델을 정의하는 모듈입니다.

이 모듈은 사용자 유형(tipos_usuario), 사진(fotos), 사용자(usuarios),
소방대원 확장(bomberos) 테이블에 대한 SQLModel 클래스를 포함합니다.

소방대원(Bombero)은 별도의 사용자 하위 클래스가 아니라,
사용자(Usuario) 행에 연결된 확장 행(bomberos)으로 표현합니다.
즉, bomberos 행이 있는 사용자가 곧 소방대원입니다.

상태(estado)는 외부 설정 서비스가 소유하는 카탈로그이므로
로컬에는 id만 저장하며 외래 키를 두지 않습니다.
"""

from typing import Optional, TYPE_CHECKING
from datetime import datetime, UTC
from sqlmodel import Field, Relationship, SQLModel, Column
from sqlalchemy import ForeignKey, Integer
from sqlalchemy.types import TIMESTAMP


# 다른 도메인의 모델을 참조해야 할 경우
# TYPE_CHECKING을 사용하여 순환 임포트 문제를 방지합니다.
if TYPE_CHECKING:
    from app.domains.equipos.models import Equipo


# =============================================================================
# 1. tipos_usuario 테이블 모델
# =============================================================================
class TipoUsuario(SQLModel, table=True):
    """
    사용자 유형 카탈로그 (예: 관리자, 현장 소방대원, 시민).
    """
    __tablename__ = "tipos_usuario"

    id: Optional[int] = Field(default=None, primary_key=True, description="사용자 유형 고유 ID")
    nombre: str = Field(max_length=50, sa_column_kwargs={"unique": True}, description="사용자 유형 이름")


# =============================================================================
# 2. fotos 테이블 모델
# =============================================================================
class Foto(SQLModel, table=True):
    """
    사용자 사진 하위 레코드. 실제 파일은 외부 사진 저장 서비스에 있고 URL만 보관합니다.
    """
    __tablename__ = "fotos"

    id: Optional[int] = Field(default=None, primary_key=True, description="사진 고유 ID")
    url: str = Field(max_length=255, description="외부 저장소의 사진 URL")


# =============================================================================
# 3. usuarios 테이블 모델
# =============================================================================
class UsuarioBase(SQLModel):
    """
    usuarios 테이블의 기본 속성을 정의하는 SQLModel Base 클래스입니다.
    """
    id: Optional[int] = Field(default=None, primary_key=True, description="사용자 고유 ID")
    run: str = Field(max_length=8, sa_column_kwargs={"unique": True}, description="RUN (신분 번호)")
    dv: str = Field(max_length=1, description="RUN 검증 숫자")
    nombre: str = Field(max_length=50, description="이름")
    apellido_paterno: str = Field(max_length=50, description="부계 성")
    apellido_materno: str = Field(max_length=50, description="모계 성")
    telefono: str = Field(max_length=9, sa_column_kwargs={"unique": True}, description="전화번호 (9자리)")
    correo: str = Field(max_length=80, sa_column_kwargs={"unique": True}, description="이메일")
    contrasenia: str = Field(max_length=70, description="해싱된 비밀번호")
    intentos_fallidos: int = Field(default=0, description="로그인 실패 횟수")
    razon_baneo: Optional[str] = Field(default=None, max_length=100, description="차단 사유")
    dias_baneo: Optional[int] = Field(default=None, description="차단 일수")
    estado_id: int = Field(description="외부 estado 카탈로그 ID")
    tipo_usuario_id: int = Field(
        sa_column=Column(
            Integer,
            ForeignKey("tipos_usuario.id", onupdate="CASCADE", ondelete="RESTRICT"),
            nullable=False,
        ),
        description="사용자 유형 ID (FK)"
    )
    foto_id: Optional[int] = Field(
        default=None,
        sa_column=Column(Integer, ForeignKey("fotos.id", ondelete="SET NULL")),
        description="사진 ID (FK)"
    )

    fecha_registro: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column=Column(TIMESTAMP(timezone=True), nullable=False),
        description="등록 일시"
    )


class Usuario(UsuarioBase, table=True):
    """
    usuarios 테이블에 매핑되는 SQLModel ORM 클래스입니다.
    """
    __tablename__ = "usuarios"

    # 관계 정의:
    tipo_usuario: Optional["TipoUsuario"] = Relationship()
    # 사진 행은 사용자에게만 속하므로 사용자 삭제 시 함께 삭제됩니다.
    foto: Optional["Foto"] = Relationship(
        sa_relationship_kwargs={"cascade": "all, delete-orphan", "single_parent": True}
    )
    # 소방대원 확장 행: 사용자 삭제 시 함께 삭제됩니다.
    bombero: Optional["Bombero"] = Relationship(
        back_populates="usuario",
        sa_relationship_kwargs={"uselist": False, "cascade": "all, delete-orphan"}
    )


# =============================================================================
# 4. bomberos 테이블 모델 (소방대원 확장)
# =============================================================================
class Bombero(SQLModel, table=True):
    """
    사용자에 대한 소방대원 확장 행입니다. 소속 팀(equipo)을 가집니다.
    """
    __tablename__ = "bomberos"

    usuario_id: Optional[int] = Field(
        default=None,
        sa_column=Column(
            Integer,
            ForeignKey("usuarios.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        description="사용자 ID (PK, FK)"
    )
    equipo_id: Optional[int] = Field(
        default=None,
        sa_column=Column(Integer, ForeignKey("equipos.id", ondelete="RESTRICT")),
        description="소속 팀 ID (FK)"
    )

    usuario: Optional["Usuario"] = Relationship(back_populates="bombero")
    equipo: Optional["Equipo"] = Relationship()
