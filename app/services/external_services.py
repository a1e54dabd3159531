# app/services/external_services.py

"""
외부 서비스(estado 카탈로그, compania 카탈로그, 사진 저장소)와 통신하는 클라이언트 모듈입니다.

- `ExistenceVerifier`: 참조 id가 외부 카탈로그에 존재하는지 확인하는 인터페이스.
  - 부재를 뜻하는 4xx 응답: ReferenceNotFoundError (estado 는 404 만, compania 는 모든 4xx)
  - 네트워크 오류, 타임아웃, 5xx, 그 밖의 4xx: ReferenceUnverifiableError (확인할 수 없음)
- `HttpCatalogClient`: 위 인터페이스의 httpx 구현. seed 루틴을 위한 목록 조회도 제공합니다.
- `FotoClient`: 사진 파일을 외부 저장소에 업로드하고 URL을 돌려받습니다.

HTTP 클라이언트는 프로세스당 하나(`app.state.http_client`)를 공유하며,
FastAPI 의존성 공급자(get_*)가 요청마다 이를 감싼 클라이언트를 만들어 줍니다.
테스트에서는 이 공급자들을 가짜 구현으로 override 합니다.
"""

import logging
from typing import Any, Collection, Dict, List, Optional, Protocol

import httpx
from fastapi import Request

from app.core.config import settings
from app.core.exceptions import (
    ExternalServiceError,
    InvalidArgumentError,
    ReferenceNotFoundError,
    ReferenceUnverifiableError,
)


logger = logging.getLogger(__name__)


def build_http_client(timeout: Optional[float] = None) -> httpx.AsyncClient:
    """
    공유용 `httpx.AsyncClient`를 생성합니다. 모든 외부 호출이 같은 타임아웃/헤더를 사용합니다.
    """
    return httpx.AsyncClient(
        timeout=httpx.Timeout(timeout if timeout is not None else settings.HTTP_TIMEOUT_SECONDS),
        follow_redirects=True,
        headers={"Accept": "application/json"},
    )


# =============================================================================
# 1. 외부 카탈로그 존재 확인
# =============================================================================
class ExistenceVerifier(Protocol):
    async def verify(self, id: int) -> None:
        """id가 존재하면 반환하고, 아니면 InvalidArgumentError 하위 오류를 발생시킵니다."""
        ...


class HttpCatalogClient:
    """
    `GET {base_url}/{id}` 의 상태 코드로 존재 여부를 판단하는 카탈로그 클라이언트입니다.
    재시도는 하지 않습니다.

    not_found_statuses 가 None 이면 모든 4xx 를 부재로 보고, 집합이 주어지면 그 상태 코드만 부재로 봅니다.
    나머지 4xx 는 확인 불가로 처리합니다.
    """

    def __init__(
        self,
        http: httpx.AsyncClient,
        base_url: str,
        *,
        not_found_message: str,
        unreachable_message: str,
        not_found_statuses: Optional[Collection[int]] = None,
    ):
        self.http = http
        self.base_url = base_url.rstrip("/")
        self.not_found_message = not_found_message
        self.unreachable_message = unreachable_message
        self.not_found_statuses = not_found_statuses

    def _es_ausente(self, response: httpx.Response) -> bool:
        if self.not_found_statuses is None:
            return response.is_client_error
        return response.status_code in self.not_found_statuses

    async def verify(self, id: int) -> None:
        url = f"{self.base_url}/{id}"
        try:
            response = await self.http.get(url)
        except httpx.HTTPError as e:
            logger.warning("Could not reach catalog at %s: %s", url, e)
            raise ReferenceUnverifiableError(self.unreachable_message) from e

        if response.is_success:
            return
        if self._es_ausente(response):
            logger.warning("Catalog reference not found: GET %s -> %s", url, response.status_code)
            raise ReferenceNotFoundError(self.not_found_message)

        logger.warning("Catalog error: GET %s -> %s", url, response.status_code)
        raise ReferenceUnverifiableError(self.unreachable_message)

    async def list_all(self) -> List[Dict[str, Any]]:
        """
        `GET {base_url}` 로 전체 목록을 가져옵니다.
        실패하면 ERROR 로그를 남기고 빈 목록을 반환합니다.
        """
        try:
            response = await self.http.get(self.base_url)
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error("Error al obtener datos de la API %s: %s", self.base_url, e)
            return []

        if not isinstance(data, list):
            logger.error("Unexpected list payload from %s: %r", self.base_url, type(data))
            return []
        return data


def build_estado_client(http: httpx.AsyncClient) -> HttpCatalogClient:
    return HttpCatalogClient(
        http,
        settings.ESTADO_SERVICE_URL,
        not_found_message="El estado asociado al usuario no existe en la API externa.",
        unreachable_message="Error al comunicarse con la API de estados.",
        not_found_statuses={404},
    )


def build_compania_client(http: httpx.AsyncClient) -> HttpCatalogClient:
    return HttpCatalogClient(
        http,
        settings.COMPANIA_SERVICE_URL,
        not_found_message="La compañía asociada al equipo no existe en la API externa.",
        unreachable_message="Error al comunicarse con la API de compañías.",
    )


# =============================================================================
# 2. 사진 업로드
# =============================================================================
class FotoClient:
    """
    `POST {base_url}/upload` (multipart 필드 `file`)로 사진을 올리고 저장된 URL을 반환합니다.
    응답 본문은 `{"url": ...}` JSON 또는 URL 평문 둘 다 허용합니다.
    """

    def __init__(self, http: httpx.AsyncClient, base_url: str):
        self.http = http
        self.base_url = base_url.rstrip("/")

    async def upload(self, filename: str, content: bytes, content_type: Optional[str] = None) -> str:
        if not content:
            raise InvalidArgumentError("El archivo de la foto está vacío.")

        files = {"file": (filename or "foto", content, content_type or "application/octet-stream")}
        try:
            response = await self.http.post(f"{self.base_url}/upload", files=files)
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error("Photo upload to %s failed: %s", self.base_url, e)
            raise ExternalServiceError(f"Error al comunicarse con la API de fotos: {e}") from e

        url = self._extraer_url(response)
        if not url:
            raise ExternalServiceError("URL de foto no encontrada en la respuesta de la API.")
        return url

    @staticmethod
    def _extraer_url(response: httpx.Response) -> Optional[str]:
        if "application/json" in response.headers.get("content-type", ""):
            try:
                body = response.json()
            except ValueError:
                return None
            if isinstance(body, dict):
                return body.get("url")
            if isinstance(body, str):
                return body.strip() or None
            return None
        return response.text.strip() or None


# =============================================================================
# 3. FastAPI 의존성 공급자
# =============================================================================
def get_http_client(request: Request) -> httpx.AsyncClient:
    """lifespan에서 생성된 공유 httpx 클라이언트를 반환합니다."""
    return request.app.state.http_client


def get_estado_verifier(request: Request) -> ExistenceVerifier:
    return build_estado_client(get_http_client(request))


def get_compania_verifier(request: Request) -> ExistenceVerifier:
    return build_compania_client(get_http_client(request))


def get_foto_client(request: Request) -> FotoClient:
    return FotoClient(get_http_client(request), settings.FOTO_SERVICE_URL)
