"""hook 注册表加载

职责:
- 从远程 URL 拉取注册表 JSON
- 解析为只读的 {hook 名: RegistryEntry} 映射

注册表格式:
    {
      "useFoo": {
        "name": "useFoo",
        "hooks": ["useBar"],
        "utils": ["formatDate"],
        "local": ["createStore"],
        "packages": ["left-pad"]
      }
    }
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from hookpull.core.dep.models import RegistryEntry
from hookpull.core.exceptions import RegistryUnavailableError, TransportError
from hookpull.utils.net import Transport

logger = logging.getLogger(__name__)

Registry = Mapping[str, RegistryEntry]

# JSON 字段 -> RegistryEntry 字段
_FIELDS = {
    "hooks": "units",
    "utils": "helpers",
    "local": "local_helpers",
    "packages": "packages",
}


def _parse_names(key: str, field_name: str, value: Any) -> list[str]:
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise RegistryUnavailableError(
            f"注册表条目 '{key}' 的 {field_name} 字段必须是字符串数组"
        )
    return value


def parse_registry(data: Any) -> Registry:
    """将注册表 JSON 文档解析为只读映射

    Raises:
        RegistryUnavailableError: 文档不是对象、为空或条目格式错误
    """
    if not isinstance(data, dict):
        raise RegistryUnavailableError("注册表内容不是 JSON 对象")
    if not data:
        raise RegistryUnavailableError("注册表为空")

    entries: dict[str, RegistryEntry] = {}
    for key, info in data.items():
        if not isinstance(info, dict):
            raise RegistryUnavailableError(f"注册表条目 '{key}' 不是 JSON 对象")
        kwargs = {
            attr: _parse_names(key, json_key, info.get(json_key))
            for json_key, attr in _FIELDS.items()
        }
        entries[key] = RegistryEntry(name=str(info.get("name") or key), **kwargs)

    logger.info("已加载 %d 个 hook", len(entries))
    return MappingProxyType(entries)


class RegistryLoader:
    """注册表加载器 - 每次调用拉取一次，不做缓存"""

    def __init__(self, transport: Transport) -> None:
        self.transport = transport

    def load(self, url: str) -> Registry:
        logger.info("拉取注册表: %s", url)
        try:
            data = self.transport.get_json(url)
        except TransportError as e:
            raise RegistryUnavailableError(f"注册表不可用: {e}") from e
        return parse_registry(data)


def list_units(registry: Registry) -> list[dict[str, Any]]:
    """格式化 hook 列表用于查询"""
    return [
        {
            "name": entry.name,
            "hooks": len(entry.units),
            "utils": len(entry.helpers),
            "local": len(entry.local_helpers),
            "packages": len(entry.packages),
        }
        for entry in registry.values()
    ]
