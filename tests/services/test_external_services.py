# tests/services/test_external_services.py

"""
외부 서비스 클라이언트(HttpCatalogClient, FotoClient) 테스트 모듈입니다.
실제 네트워크 대신 `httpx.MockTransport`로 응답을 흉내 냅니다.
"""

import httpx
import pytest

from app.core.exceptions import (
    ExternalServiceError,
    InvalidArgumentError,
    ReferenceNotFoundError,
    ReferenceUnverifiableError,
)
from app.services.external_services import (
    FotoClient,
    HttpCatalogClient,
    build_compania_client,
    build_estado_client,
)

BASE_URL = "http://catalogo.test/api/estados"


def _catalog(handler) -> HttpCatalogClient:
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return HttpCatalogClient(
        http,
        BASE_URL + "/",
        not_found_message="no existe",
        unreachable_message="sin conexión",
    )


# --- 존재 확인 ---


@pytest.mark.asyncio
async def test_verify_accepts_success_response():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        return httpx.Response(200, json={"id": 7, "nombre": "Activo"})

    await _catalog(handler).verify(7)
    assert seen == [f"{BASE_URL}/7"]


@pytest.mark.asyncio
async def test_verify_client_error_means_not_found():
    client = _catalog(lambda request: httpx.Response(404))
    with pytest.raises(ReferenceNotFoundError, match="no existe"):
        await client.verify(1)


@pytest.mark.asyncio
async def test_verify_server_error_means_unverifiable():
    client = _catalog(lambda request: httpx.Response(503))
    with pytest.raises(ReferenceUnverifiableError, match="sin conexión"):
        await client.verify(1)


@pytest.mark.asyncio
async def test_verify_network_error_means_unverifiable():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(ReferenceUnverifiableError):
        await _catalog(handler).verify(1)


def test_both_failures_are_invalid_arguments():
    # 두 경우 모두 400 으로 보고되는 InvalidArgumentError 하위 타입입니다.
    assert issubclass(ReferenceNotFoundError, InvalidArgumentError)
    assert issubclass(ReferenceUnverifiableError, InvalidArgumentError)


@pytest.mark.asyncio
async def test_estado_client_uses_configured_messages():
    http = httpx.AsyncClient(transport=httpx.MockTransport(lambda request: httpx.Response(404)))
    with pytest.raises(ReferenceNotFoundError) as exc_info:
        await build_estado_client(http).verify(99)
    assert exc_info.value.message == "El estado asociado al usuario no existe en la API externa."


@pytest.mark.asyncio
@pytest.mark.parametrize("status", [400, 401, 403, 429])
async def test_estado_client_other_client_errors_are_unverifiable(status):
    # estado 카탈로그는 404 만 부재로 봅니다. 인증 실패 등은 확인 불가입니다.
    http = httpx.AsyncClient(transport=httpx.MockTransport(lambda request: httpx.Response(status)))
    with pytest.raises(ReferenceUnverifiableError) as exc_info:
        await build_estado_client(http).verify(1)
    assert exc_info.value.message == "Error al comunicarse con la API de estados."


@pytest.mark.asyncio
@pytest.mark.parametrize("status", [401, 404])
async def test_compania_client_treats_any_client_error_as_not_found(status):
    http = httpx.AsyncClient(transport=httpx.MockTransport(lambda request: httpx.Response(status)))
    with pytest.raises(ReferenceNotFoundError) as exc_info:
        await build_compania_client(http).verify(1)
    assert exc_info.value.message == "La compañía asociada al equipo no existe en la API externa."


# --- 목록 조회 ---


@pytest.mark.asyncio
async def test_list_all_returns_items():
    items = [{"id": 1}, {"id": 2}]
    client = _catalog(lambda request: httpx.Response(200, json=items))
    assert await client.list_all() == items


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(500),
        httpx.Response(200, json={"id": 1}),
        httpx.Response(200, text="<html>no json</html>"),
    ],
)
async def test_list_all_returns_empty_on_failure(response):
    client = _catalog(lambda request: response)
    assert await client.list_all() == []


# --- 사진 업로드 ---


def _fotos(handler) -> FotoClient:
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return FotoClient(http, "http://fotos.test/api/fotos")


@pytest.mark.asyncio
async def test_upload_reads_json_url():
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json={"url": "http://fotos.test/f/1.jpg"})

    url = await _fotos(handler).upload("perfil.jpg", b"imagen", "image/jpeg")
    assert url == "http://fotos.test/f/1.jpg"

    request = requests[0]
    assert request.method == "POST"
    assert str(request.url) == "http://fotos.test/api/fotos/upload"
    body = request.read()
    assert b'name="file"' in body
    assert b'filename="perfil.jpg"' in body
    assert b"imagen" in body


@pytest.mark.asyncio
async def test_upload_reads_plain_text_url():
    client = _fotos(lambda request: httpx.Response(200, text="http://fotos.test/f/2.jpg\n"))
    assert await client.upload("perfil.png", b"imagen", "image/png") == "http://fotos.test/f/2.jpg"


@pytest.mark.asyncio
async def test_upload_without_url_fails():
    client = _fotos(lambda request: httpx.Response(200, json={"id": 3}))
    with pytest.raises(ExternalServiceError, match="URL de foto no encontrada"):
        await client.upload("perfil.jpg", b"imagen")


@pytest.mark.asyncio
async def test_upload_http_error_fails():
    client = _fotos(lambda request: httpx.Response(500))
    with pytest.raises(ExternalServiceError, match="Error al comunicarse con la API de fotos"):
        await client.upload("perfil.jpg", b"imagen")


@pytest.mark.asyncio
async def test_upload_empty_file_is_rejected_before_request():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, text="http://fotos.test/f/4.jpg")

    with pytest.raises(InvalidArgumentError):
        await _fotos(handler).upload("vacia.jpg", b"")
    assert calls == []
