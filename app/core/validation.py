# app/core/validation.py

"""
서비스 계층에서 공통으로 사용하는 속성 검증 헬퍼 모듈입니다.
검증 실패 시 InvalidArgumentError를 발생시킵니다.
"""

import re
from typing import Any, Optional

from app.core.exceptions import InvalidArgumentError

MAX_NOMBRE = 50

CORREO_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
TELEFONO_PATTERN = re.compile(r"^\d{9}$")


def requerir(payload: Any, mensaje: str) -> None:
    """요청 객체 자체가 None이면 InvalidArgumentError를 발생시킵니다."""
    if payload is None:
        raise InvalidArgumentError(mensaje)


def es_vacio(valor: Optional[str]) -> bool:
    return valor is None or not valor.strip()


def validar_largo(valor: Optional[str], maximo: int, mensaje: str) -> None:
    if valor is not None and len(valor) > maximo:
        raise InvalidArgumentError(mensaje)


def validar_nombre_catalogo(nombre: Optional[str], entidad: str) -> str:
    """
    카탈로그(사용자 유형, 팀 유형 등) 이름을 검증하고 앞뒤 공백을 제거한 값을 반환합니다.

    Args:
        nombre: 검증할 이름
        entidad: 오류 메시지에 사용될 엔티티 표시명 (예: "tipo de usuario")
    """
    if es_vacio(nombre):
        raise InvalidArgumentError(f"El nombre del {entidad} es requerido")
    nombre = nombre.strip()
    validar_largo(
        nombre, MAX_NOMBRE, f"El nombre del {entidad} excede el máximo de {MAX_NOMBRE} caracteres"
    )
    return nombre


def es_correo_valido(correo: str) -> bool:
    return bool(CORREO_PATTERN.match(correo))


def es_telefono_valido(telefono: str) -> bool:
    return bool(TELEFONO_PATTERN.match(telefono))
