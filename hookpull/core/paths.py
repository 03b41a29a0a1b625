"""路径别名解析

把项目配置里的 hookPath / utilsPath（如 "@/hooks"）映射为本地绝对目录，
规则与 tsconfig-paths 的 matchPath 一致:

  1. 读取 tsconfig.json / jsconfig.json 的 compilerOptions.baseUrl 与 paths
  2. 按 "*" 之前的前缀长度从长到短尝试通配模式，再尝试精确模式，取首个目标路径
  3. 未命中任何模式时回退到 baseUrl/别名（match-all）

以 @ / ~ / # 开头的别名必须命中显式模式，否则视为无法解析。
相对路径或绝对路径不经过别名映射，直接相对项目目录解析。
"""

from __future__ import annotations

import json
import logging
import re
from functools import cached_property
from pathlib import Path
from typing import Any, NamedTuple

from hookpull.core.exceptions import PathResolutionError

logger = logging.getLogger(__name__)

_TRAILING_COMMA = re.compile(r",(\s*[}\]])")
_ALIAS_MARKERS = ("@", "~", "#")


class _Mapping(NamedTuple):
    base_url: Path
    # [(pattern, [target, ...])]，通配模式按前缀长度降序，精确模式在后
    entries: list[tuple[str, list[str]]]


def strip_json_comments(text: str) -> str:
    """去掉 JSONC 中的 // 与 /* */ 注释及尾随逗号，字符串内容保持不变"""
    out: list[str] = []
    i, n = 0, len(text)
    in_string = False
    while i < n:
        ch = text[i]
        if in_string:
            out.append(ch)
            if ch == "\\" and i + 1 < n:
                out.append(text[i + 1])
                i += 2
                continue
            if ch == '"':
                in_string = False
            i += 1
        elif ch == '"':
            in_string = True
            out.append(ch)
            i += 1
        elif text.startswith("//", i):
            end = text.find("\n", i)
            i = n if end == -1 else end
        elif text.startswith("/*", i):
            end = text.find("*/", i + 2)
            i = n if end == -1 else end + 2
        else:
            out.append(ch)
            i += 1
    return _TRAILING_COMMA.sub(r"\1", "".join(out))


def _match_star(pattern: str, alias: str) -> str | None:
    """模式匹配，返回 * 捕获的部分；无 * 的模式要求完全相等"""
    if "*" not in pattern:
        return "" if pattern == alias else None
    prefix, _, suffix = pattern.partition("*")
    if len(alias) < len(prefix) + len(suffix):
        return None
    if alias.startswith(prefix) and alias.endswith(suffix):
        return alias[len(prefix):len(alias) - len(suffix)]
    return None


class PathMapper:
    """项目路径别名映射器"""

    def __init__(self, project_dir: str | Path, *, prefer_typescript: bool = True) -> None:
        self.project_dir = Path(project_dir).resolve()
        names = ("tsconfig.json", "jsconfig.json")
        self.config_names = names if prefer_typescript else names[::-1]

    @property
    def config_file(self) -> Path | None:
        for name in self.config_names:
            candidate = self.project_dir / name
            if candidate.is_file():
                return candidate
        return None

    @cached_property
    def _mapping(self) -> _Mapping:
        config_file = self.config_file
        if config_file is None:
            logger.debug("未找到 tsconfig/jsconfig，以项目目录为 baseUrl")
            return _Mapping(self.project_dir, [])

        data = self._load(config_file)
        options = data.get("compilerOptions") or {}
        base_url = (config_file.parent / options.get("baseUrl", ".")).resolve()
        paths: dict[str, Any] = options.get("paths") or {}

        entries = [
            (pattern, [str(t) for t in targets])
            for pattern, targets in paths.items()
            if isinstance(targets, list) and targets
        ]
        # 无 * 的精确模式前缀长度记为 -1，排在所有通配模式之后
        entries.sort(key=lambda e: e[0].find("*"), reverse=True)
        logger.debug("已加载 %s: baseUrl=%s, %d 个 paths 模式", config_file, base_url, len(entries))
        return _Mapping(base_url, entries)

    @staticmethod
    def _load(config_file: Path) -> dict[str, Any]:
        try:
            data = json.loads(strip_json_comments(config_file.read_text(encoding="utf-8")))
        except (OSError, json.JSONDecodeError) as e:
            raise PathResolutionError(str(config_file), f"读取失败: {e}") from e
        if not isinstance(data, dict):
            raise PathResolutionError(str(config_file), "内容不是 JSON 对象")
        return data

    def resolve(self, alias: str) -> Path:
        """将别名解析为绝对目录

        Raises:
            PathResolutionError: 别名为空、配置文件损坏或别名未命中任何模式
        """
        alias = alias.strip()
        if not alias:
            raise PathResolutionError(alias, "别名为空")

        if alias.startswith(".") or Path(alias).is_absolute():
            return (self.project_dir / alias).resolve()

        mapping = self._mapping
        for pattern, targets in mapping.entries:
            star = _match_star(pattern, alias)
            if star is None:
                continue
            resolved = (mapping.base_url / targets[0].replace("*", star)).resolve()
            logger.debug("别名 %s 命中 %s -> %s", alias, pattern, resolved)
            return resolved

        if alias.startswith(_ALIAS_MARKERS):
            raise PathResolutionError(alias, "未匹配任何 paths 模式")
        return (mapping.base_url / alias).resolve()
