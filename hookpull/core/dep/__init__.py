"""hook 依赖解析与安装

- models.py: 数据模型
- registry.py: 注册表加载
- resolver.py: 依赖解析
- planner.py: 安装计划生成
- installer.py: 安装执行
"""

from hookpull.core.dep.installer import Installer, update_barrel_index
from hookpull.core.dep.models import (
    DependencyGraph,
    DependencyKind,
    DependencyNode,
    FileInstallPlan,
    InstallReport,
    InstallStatus,
    RegistryEntry,
)
from hookpull.core.dep.planner import PlanSet, build_plans
from hookpull.core.dep.registry import Registry, RegistryLoader, list_units, parse_registry
from hookpull.core.dep.resolver import resolve_dependencies

__all__ = [
    "DependencyGraph",
    "DependencyKind",
    "DependencyNode",
    "FileInstallPlan",
    "InstallReport",
    "InstallStatus",
    "Installer",
    "PlanSet",
    "Registry",
    "RegistryEntry",
    "RegistryLoader",
    "build_plans",
    "list_units",
    "parse_registry",
    "resolve_dependencies",
    "update_barrel_index",
]
