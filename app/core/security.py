# app/core/security.py

"""
애플리케이션의 보안 관련 유틸리티 함수를 정의하는 모듈입니다.

- 사용자 비밀번호(contrasenia) 해싱 및 검증.
"""

from passlib.context import CryptContext  # 비밀번호 해싱을 위한 라이브러리


# --- 비밀번호 해싱 설정 ---
# bcrypt 해싱 알고리즘을 사용합니다.
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    일반 텍스트 비밀번호와 해싱된 비밀번호를 비교하여 일치하는지 확인합니다.
    """
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """
    주어진 비밀번호를 해싱합니다.
    """
    return pwd_context.hash(password)

