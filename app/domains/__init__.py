# app/domains/__init__.py

"""
비즈니스 도메인 패키지입니다.

- `perfiles`: 사용자 유형, 사용자, 소방대원, 사진
- `equipos`: 팀 유형, 팀
- `models`: 모든 도메인의 SQLModel 테이블을 한 곳에서 임포트
"""
