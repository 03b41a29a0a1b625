"""依赖解析与安装的数据模型

数据类:
- RegistryEntry: 注册表中单个 hook 的依赖声明
- DependencyNode: 解析结果中的单个依赖节点
- FileInstallPlan: 单个文件的安装计划
- InstallOutcome / InstallReport: 安装结果汇总
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class DependencyKind(str, Enum):
    UNIT = "unit"
    HELPER = "helper"
    LOCAL_HELPER = "local_helper"
    PACKAGE = "package"


def _ordered_unique(names: Iterable[str]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(names))


@dataclass(frozen=True)
class RegistryEntry:
    """单个 hook 的依赖声明

    units 可递归解析，其余三类均为叶子依赖。
    """

    name: str
    units: tuple[str, ...] = ()
    helpers: tuple[str, ...] = ()
    local_helpers: tuple[str, ...] = ()
    packages: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        # 保序去重，frozen 数据类只能通过 object.__setattr__ 赋值
        for attr in ("units", "helpers", "local_helpers", "packages"):
            object.__setattr__(self, attr, _ordered_unique(getattr(self, attr)))


@dataclass(frozen=True)
class DependencyNode:
    """依赖节点，parent_unit 为引入该节点的 hook 名"""

    kind: DependencyKind
    name: str
    parent_unit: str


# 解析结果: 名称 -> 节点，保持插入顺序
DependencyGraph = dict[str, DependencyNode]


@dataclass(frozen=True)
class FileInstallPlan:
    """单个文件的安装计划"""

    name: str
    kind: DependencyKind
    source_url: str
    destination_path: Path
    index_path: Path
    export_specifier: str

    @property
    def export_statement(self) -> str:
        """barrel 文件中的导出行（含换行符）"""
        return f"export * from './{self.export_specifier}';\n"


class InstallStatus(str, Enum):
    INSTALLED = "installed"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass
class InstallOutcome:
    plan: FileInstallPlan
    status: InstallStatus
    error: str = ""


@dataclass
class InstallReport:
    """一次安装的逐项结果"""

    outcomes: list[InstallOutcome] = field(default_factory=list)

    def _with(self, status: InstallStatus) -> list[InstallOutcome]:
        return [o for o in self.outcomes if o.status is status]

    @property
    def installed(self) -> list[InstallOutcome]:
        return self._with(InstallStatus.INSTALLED)

    @property
    def skipped(self) -> list[InstallOutcome]:
        return self._with(InstallStatus.SKIPPED)

    @property
    def failed(self) -> list[InstallOutcome]:
        return self._with(InstallStatus.FAILED)

    @property
    def success(self) -> bool:
        return not self.failed
