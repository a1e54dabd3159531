# app/utils/run.py

"""
RUN(국가 신분 번호)과 검증 숫자(dv) 관련 유틸리티 모듈입니다.

dv는 모듈로 11 방식으로 계산합니다:
- 가장 낮은 자리부터 가중치 2,3,4,5,6,7,2,3,... 를 곱해 합산
- 11 - (합계 % 11) 을 구한 뒤 11 -> "0", 10 -> "K", 그 외는 숫자 문자열
"""

import random
import re

RUN_PATTERN = re.compile(r"^\d{7,8}$")
DV_PATTERN = re.compile(r"^[0-9Kk]$")


def calcular_dv(run: str) -> str:
    """
    주어진 RUN 문자열의 검증 숫자를 계산합니다. 같은 입력에 항상 같은 결과를 반환합니다.

    Raises:
        ValueError: run이 비어 있거나 숫자가 아닌 문자를 포함하는 경우.
    """
    if not run or not run.isdigit():
        raise ValueError(f"RUN inválido: {run!r}")

    suma = 0
    multiplicador = 2
    for digito in reversed(run):
        suma += int(digito) * multiplicador
        multiplicador = 2 if multiplicador == 7 else multiplicador + 1

    dv = 11 - (suma % 11)
    if dv == 11:
        return "0"
    if dv == 10:
        return "K"
    return str(dv)


def generar_run(rng: random.Random) -> str:
    """8자리 RUN을 무작위로 생성합니다 (첫 자리는 0이 아님)."""
    return str(rng.randint(10_000_000, 99_999_999))


def es_run_valido(run: str) -> bool:
    return bool(RUN_PATTERN.match(run))


def es_dv_valido(dv: str) -> bool:
    return bool(DV_PATTERN.match(dv))
