# scripts/__init__.py
"""운영/개발용 명령줄 스크립트 패키지입니다."""
