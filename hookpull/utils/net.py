"""网络工具 — URL 安全校验 + 远程内容拉取

通过 Transport 协议抽象 HTTP 拉取，方便测试时注入内存实现，
无需 patch urllib。
"""

from __future__ import annotations

import json
import logging
import urllib.error
import urllib.request
from typing import Any, Protocol
from urllib.parse import urlparse

from hookpull import __version__
from hookpull.core.exceptions import TransportError, ValidationError

logger = logging.getLogger(__name__)

_ALLOWED_SCHEMES = frozenset(("http", "https"))

DEFAULT_TIMEOUT = 30


def validate_url_scheme(url: str, *, context: str = "") -> None:
    """校验 URL 仅使用 http/https，防止 file:// 等非预期协议访问

    Raises:
        ValidationError: URL scheme 不在白名单内
    """
    parsed = urlparse(url)
    if parsed.scheme not in _ALLOWED_SCHEMES:
        label = f" ({context})" if context else ""
        raise ValidationError(
            f"不允许的 URL 协议 '{parsed.scheme}'{label}，"
            f"仅支持 http/https: {url}"
        )


class Transport(Protocol):
    """远程拉取协议 — 注册表 JSON 与 hook 源文件均经由此接口获取"""

    def get_json(self, url: str) -> Any:
        """拉取并解析 JSON 文档"""
        ...

    def get_bytes(self, url: str) -> bytes:
        """拉取原始字节内容"""
        ...


class UrllibTransport:
    """基于 urllib 的默认实现，所有网络错误统一转换为 TransportError"""

    def __init__(self, timeout: float = DEFAULT_TIMEOUT) -> None:
        self.timeout = timeout

    def get_bytes(self, url: str) -> bytes:
        try:
            validate_url_scheme(url, context="fetch")
        except ValidationError as e:
            raise TransportError(url, str(e)) from e
        request = urllib.request.Request(
            url, headers={"User-Agent": f"hookpull/{__version__}"},
        )
        logger.debug("GET %s", url)
        try:
            with urllib.request.urlopen(request, timeout=self.timeout) as resp:  # nosec B310
                data: bytes = resp.read()
        except urllib.error.HTTPError as e:
            raise TransportError(url, f"HTTP {e.code}") from e
        except (urllib.error.URLError, OSError) as e:
            raise TransportError(url, str(e)) from e
        logger.debug("  已接收 %d 字节: %s", len(data), url)
        return data

    def get_json(self, url: str) -> Any:
        raw = self.get_bytes(url)
        try:
            return json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise TransportError(url, f"JSON 解析失败: {e}") from e
