# tests/__init__.py

"""
API Perfiles FastAPI 애플리케이션의 테스트 스위트 패키지입니다.

- `domains/`: 도메인별(perfiles, equipos) API 및 서비스 통합 테스트
- `services/`: 외부 서비스 클라이언트와 seed 루틴 테스트
- `utils/`: RUN / 검증 숫자 유틸리티 테스트
- `conftest.py`: 인메모리 DB, 테스트 클라이언트, 가짜 외부 서비스 픽스처
- `fakes.py`: 외부 서비스 가짜 구현
"""

__title__ = "API Perfiles Tests"
__version__ = "0.1.0"
__all__ = []
