# tests/domains/__init__.py

"""
도메인별 테스트 패키지입니다.

- `test_perfiles.py`: 사용자 유형, 사용자, 소방대원, 사진 업로드
- `test_equipos.py`: 팀 유형, 팀
"""

__all__ = []
