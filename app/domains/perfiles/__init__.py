# app/domains/perfiles/__init__.py

"""
FastAPI 애플리케이션의 'perfiles' 도메인 패키지입니다.

'perfiles' 도메인은 사용자 유형(TipoUsuario), 사용자(Usuario),
소방대원(Bombero, 사용자 + 소속 팀 확장 행), 사용자 사진(Foto)을 관리합니다.

주요 서브모듈:
- `models.py`: 테이블에 매핑되는 SQLModel 정의.
- `schemas.py`: 요청 및 응답 Pydantic 모델.
- `crud.py`: 비동기 영속성 게이트웨이.
- `services.py`: 검증 및 영속화 서비스.
- `routers.py`: FastAPI API 엔드포인트.
"""

__title__ = "API Perfiles Profiles Domain"
__description__ = "Manages user types, users, firefighters and user photos."
__version__ = "0.1.0"
__all__ = []
