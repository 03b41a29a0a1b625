"""测试公共夹具 — 内存版 Transport，不访问网络"""

from __future__ import annotations

from typing import Any

import pytest

from hookpull.core.exceptions import TransportError
from hookpull.utils.logger import reset_logging


class FakeTransport:
    """按 URL 返回预置内容，未预置的 URL 视为 404"""

    def __init__(self) -> None:
        self.documents: dict[str, Any] = {}
        self.files: dict[str, bytes] = {}
        self.requested: list[str] = []

    def get_json(self, url: str) -> Any:
        self.requested.append(url)
        if url not in self.documents:
            raise TransportError(url, "HTTP 404")
        return self.documents[url]

    def get_bytes(self, url: str) -> bytes:
        self.requested.append(url)
        if url not in self.files:
            raise TransportError(url, "HTTP 404")
        return self.files[url]


@pytest.fixture()
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture(autouse=True)
def _clean_logging():
    yield
    reset_logging()
