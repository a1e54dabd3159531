# tests/fakes.py

"""
테스트에서 외부 서비스(estado / compania 카탈로그, 사진 저장소) 대신 사용하는 가짜 구현 모듈입니다.
"""

from typing import Any, Dict, Iterable, List, Optional, Tuple

from app.core.exceptions import ReferenceNotFoundError, ReferenceUnverifiableError


class FakeVerifier:
    """
    외부 카탈로그 존재 확인기의 가짜 구현입니다.
    - missing: 존재하지 않는 것으로 응답할 id 목록 (4xx 상황)
    - unreachable: True 이면 모든 호출이 통신 오류 (네트워크/5xx 상황)
    호출된 id 는 `calls`에 기록됩니다.
    """

    def __init__(
        self,
        not_found_message: str,
        unreachable_message: str,
        missing: Iterable[int] = (),
        unreachable: bool = False,
    ):
        self.not_found_message = not_found_message
        self.unreachable_message = unreachable_message
        self.missing = set(missing)
        self.unreachable = unreachable
        self.calls: List[int] = []

    async def verify(self, id: int) -> None:
        self.calls.append(id)
        if self.unreachable:
            raise ReferenceUnverifiableError(self.unreachable_message)
        if id in self.missing:
            raise ReferenceNotFoundError(self.not_found_message)


def fake_estado_verifier(**kwargs: Any) -> FakeVerifier:
    return FakeVerifier(
        "El estado asociado al usuario no existe en la API externa.",
        "Error al comunicarse con la API de estados.",
        **kwargs,
    )


def fake_compania_verifier(**kwargs: Any) -> FakeVerifier:
    return FakeVerifier(
        "La compañía asociada al equipo no existe en la API externa.",
        "Error al comunicarse con la API de compañías.",
        **kwargs,
    )


class FakeFotoClient:
    def __init__(self, url: str = "http://fotos.test/usuario.jpg", error: Optional[Exception] = None):
        self.url = url
        self.error = error
        self.calls: List[Tuple[str, bytes, Optional[str]]] = []

    async def upload(self, filename: str, content: bytes, content_type: Optional[str] = None) -> str:
        self.calls.append((filename, content, content_type))
        if self.error is not None:
            raise self.error
        return self.url


class FakeCatalogClient:
    """seed 루틴용 목록 클라이언트의 가짜 구현입니다."""

    def __init__(self, items: List[Dict[str, Any]]):
        self.items = items

    async def list_all(self) -> List[Dict[str, Any]]:
        return list(self.items)
