# app/domains/equipos/__init__.py

"""
FastAPI 애플리케이션의 'equipos' 도메인 패키지입니다.

'equipos' 도메인은 팀 유형(TipoEquipo)과 팀(Equipo)을 관리합니다.
팀의 소속 중대(compania)는 외부 서비스에서 존재를 확인합니다.

주요 서브모듈:
- `models.py`, `schemas.py`, `crud.py`, `services.py`, `routers.py`
"""

__title__ = "API Perfiles Teams Domain"
__description__ = "Manages team types and teams."
__version__ = "0.1.0"
__all__ = []
