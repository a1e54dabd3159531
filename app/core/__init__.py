# app/core/__init__.py

"""
FastAPI 애플리케이션의 핵심 구성 요소 패키지입니다.

주요 서브모듈:
- `config.py`: 애플리케이션 설정 및 환경 변수 관리 (pydantic-settings).
- `database.py`: 비동기 엔진, 세션 관리 (SQLModel 및 AsyncSQLAlchemy).
- `crud_base.py`: 공통 영속성 게이트웨이.
- `exceptions.py`: 도메인 오류 분류 체계와 HTTP 예외 처리기.
- `validation.py`: 서비스 계층 공통 속성 검증 헬퍼.
- `responses.py`: text/plain 확인 응답 헬퍼.
- `security.py`: 비밀번호 해싱.
- `dependencies.py`: 서비스 객체를 조립하는 FastAPI 의존성 공급자.
"""

__title__ = "API Perfiles Core"
__description__ = "Core components for the API Perfiles FastAPI application."
__version__ = "0.1.0"
__all__ = []
