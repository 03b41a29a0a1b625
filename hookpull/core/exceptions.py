"""统一异常体系

所有业务异常继承 HookPullError。核心层只负责抛出，
CLI 层据此输出友好提示并决定退出码。
"""

from __future__ import annotations

from collections.abc import Sequence


class HookPullError(Exception):
    """框架基础异常"""

    code: str = "UNKNOWN"

    def __init__(self, message: str) -> None:
        super().__init__(message)


class ConfigError(HookPullError):
    """项目配置文件缺失或内容无效"""

    code = "CONFIG_MISSING"


class RegistryUnavailableError(HookPullError):
    """注册表拉取失败或内容不可用"""

    code = "REGISTRY_UNAVAILABLE"


class UnknownUnitError(HookPullError):
    """请求的 hook 不在注册表中"""

    code = "UNKNOWN_UNIT"

    def __init__(self, names: Sequence[str], parent: str = "") -> None:
        self.names = list(names)
        self.parent = parent
        joined = ", ".join(self.names)
        if parent:
            message = f"hook '{parent}' 依赖的 {joined} 不在注册表中"
        else:
            message = f"注册表中找不到 hook: {joined}"
        super().__init__(message)


class PathResolutionError(HookPullError):
    """路径别名无法映射到本地目录"""

    code = "PATH_RESOLUTION_FAILED"

    def __init__(self, alias: str, reason: str = "") -> None:
        self.alias = alias
        suffix = f" ({reason})" if reason else ""
        super().__init__(f"无法解析路径别名 '{alias}'{suffix}")


class CycleDetectedError(HookPullError):
    """hook 依赖关系存在环"""

    code = "CYCLE_DETECTED"

    def __init__(self, path: Sequence[str]) -> None:
        self.path = list(path)
        super().__init__(f"检测到循环依赖: {' -> '.join(self.path)}")


class TransportError(HookPullError):
    """远程内容拉取失败"""

    code = "TRANSPORT_FAILED"

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        super().__init__(f"拉取失败: {url} - {reason}")


class InvalidNodeKindError(HookPullError):
    """未知的依赖节点类型"""

    code = "INVALID_NODE_KIND"

    def __init__(self, kind: object) -> None:
        self.kind = kind
        super().__init__(f"未知的依赖类型: {kind!r}")


class ValidationError(HookPullError):
    """输入数据校验失败"""

    code = "VALIDATION_ERROR"

    def __init__(self, message: str, details: list[str] | None = None) -> None:
        super().__init__(message)
        self.details = details or []
