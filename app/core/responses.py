# app/core/responses.py

"""
라우터에서 공통으로 사용하는 text/plain 응답 헬퍼 모듈입니다.
"""

from fastapi import Request, status
from fastapi.responses import PlainTextResponse

ACTUALIZADO = "Actualizado con éxito"


def creado(request: Request, entidad: str, id: int) -> PlainTextResponse:
    """201 응답. Location 헤더는 새로 생성된 리소스를 가리킵니다."""
    location = f"{str(request.url).rstrip('/')}/{id}"
    return PlainTextResponse(
        f"{entidad} creado con éxito.",
        status_code=status.HTTP_201_CREATED,
        headers={"Location": location},
    )


def actualizado() -> PlainTextResponse:
    return PlainTextResponse(ACTUALIZADO, status_code=status.HTTP_200_OK)


def eliminado(entidad: str) -> PlainTextResponse:
    return PlainTextResponse(f"{entidad} eliminado con éxito.", status_code=status.HTTP_200_OK)
