# tests/services/__init__.py
"""외부 서비스 클라이언트 및 seed 루틴 테스트 패키지입니다."""
