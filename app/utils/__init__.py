# app/utils/__init__.py

"""
FastAPI 애플리케이션의 'utils' 패키지입니다.

이 패키지는 특정 비즈니스 도메인에 속하지 않는,
프로젝트 전반에서 재사용될 수 있는 범용 유틸리티 함수들을 포함합니다.

주요 서브모듈:
- `run.py`: RUN(신분 번호) 검증 숫자(dv) 계산 및 생성 유틸리티.
"""

# flake8: noqa
from . import run

__title__ = "API Perfiles Utilities"
__description__ = "Provides common, reusable utility functions for the application."
__version__ = "0.1.0"
__all__ = ["run"]
