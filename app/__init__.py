# app/__init__.py

"""
API Perfiles FastAPI 애플리케이션의 메인 패키지입니다.

이 패키지는 사용자/소방대원/팀 프로필 관리 로직과 도메인별 모듈을 포함합니다.
FastAPI 애플리케이션의 진입점 (main.py)과
공통 설정, 데이터베이스 연결, 예외 처리, 보안 유틸리티를 담는 core 서브패키지,
외부 서비스(estado, compania, foto) 클라이언트를 담는 services 서브패키지,
그리고 각 비즈니스 도메인을 대표하는 domains 서브패키지로 구성됩니다.
"""

APP_NAME = "API Perfiles"
APP_VERSION = "0.1.0"

# 공개 경로 접두사 두 가지:
# - 관리자용 카탈로그/사용자 API
# - 프로필(팀, 소방대원) API
ADMIN_API_PREFIX = "/api-administrador/v1"
PERFILES_API_PREFIX = "/api-perfiles/v1"

__version__ = APP_VERSION
__title__ = APP_NAME
__description__ = "Personnel profile (users, firefighters, teams) management API backend."
__all__ = []
