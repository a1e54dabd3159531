# app/domains/models/__init__.py

"""
이 파일은 모든 도메인의 SQLModel 모델들을 한 곳에서 중앙 관리하여,
다른 모듈에서 쉽게 임포트할 수 있도록 하는 역할을 합니다.
SQLModel.metadata가 모든 테이블을 인식하도록 보장합니다.
"""

# perfiles (TipoUsuario, Foto, Usuario, Bombero)
from app.domains.perfiles.models import TipoUsuario, Foto, Usuario, Bombero

# equipos (TipoEquipo, Equipo)
from app.domains.equipos.models import TipoEquipo, Equipo

__all__ = ["TipoUsuario", "Foto", "Usuario", "Bombero", "TipoEquipo", "Equipo"]
