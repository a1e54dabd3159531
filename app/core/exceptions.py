# app/core/exceptions.py

"""
서비스 계층의 오류 분류 체계와 이를 HTTP 응답으로 변환하는 FastAPI 예외 처리기를 정의하는 모듈입니다.

- InvalidArgumentError  -> 400 (잘못된 입력, 관계/유일성 검증 실패)
- NotFoundError         -> 404 (해당 id의 레코드 없음)
- ExternalServiceError  -> 500 (사진 저장 서비스 등 외부 서비스 실패)
- 그 외 모든 예외        -> 500

모든 오류 응답 본문은 text/plain 메시지입니다.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import PlainTextResponse


logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Error interno del servidor."


class PerfilesError(Exception):
    """모든 도메인 오류의 기본 클래스입니다. 사용자에게 노출되는 메시지를 담습니다."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidArgumentError(PerfilesError):
    """잘못된 입력 또는 관계/유일성 검증 실패."""


class ReferenceNotFoundError(InvalidArgumentError):
    """외부 카탈로그가 참조 id의 부재를 확인한 경우 (4xx 응답)."""


class ReferenceUnverifiableError(InvalidArgumentError):
    """외부 카탈로그에 확인할 수 없었던 경우 (네트워크 오류, 타임아웃, 5xx 등)."""


class NotFoundError(PerfilesError):
    """주어진 id에 해당하는 레코드가 없음."""


class ExternalServiceError(PerfilesError):
    """외부 서비스 호출 실패 (사진 업로드 등)."""


# =============================================================================
# FastAPI 예외 처리기
# =============================================================================
async def invalid_argument_handler(request: Request, exc: InvalidArgumentError) -> PlainTextResponse:
    return PlainTextResponse(exc.message, status_code=status.HTTP_400_BAD_REQUEST)


async def not_found_handler(request: Request, exc: NotFoundError) -> PlainTextResponse:
    return PlainTextResponse(exc.message, status_code=status.HTTP_404_NOT_FOUND)


async def external_service_handler(request: Request, exc: ExternalServiceError) -> PlainTextResponse:
    logger.error("External service failure on %s %s: %s", request.method, request.url.path, exc.message)
    return PlainTextResponse(exc.message, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


async def unexpected_error_handler(request: Request, exc: Exception) -> PlainTextResponse:
    logger.exception("Unexpected error on %s %s", request.method, request.url.path)
    return PlainTextResponse(INTERNAL_ERROR_MESSAGE, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


def register_exception_handlers(app: FastAPI) -> None:
    """애플리케이션에 도메인 오류 처리기를 등록합니다."""
    app.add_exception_handler(InvalidArgumentError, invalid_argument_handler)
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(ExternalServiceError, external_service_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)
