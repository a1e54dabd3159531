# app/services/__init__.py

"""
FastAPI 애플리케이션의 서비스 계층 패키지입니다.

도메인별 검증/영속화 서비스는 각 도메인의 `services.py`에 있으며,
이 패키지는 여러 도메인에 걸치거나 외부 시스템과 통합되는 모듈을 담습니다.

- `external_services.py`: 외부 estado / compania 카탈로그 존재 확인, 사진 업로드 클라이언트.
- `seed_service.py`: 개발용 초기 데이터 생성 루틴.
"""

__title__ = "API Perfiles Services"
__description__ = "External service clients and cross-domain services for API Perfiles."
__version__ = "0.1.0"
__all__ = []
