"""安装计划生成

将依赖图转换为逐文件的安装计划，packages 类型单独收集。

路径规则（ext 为 ts / js）:
  unit:         {hooks_root}/{name}/{name}.{ext}
                index: {hooks_root}/index.{ext}
                源:    {repo}/hooks/{name}/{name}.{ext}
  helper:       {utils_root}/{name}.{ext}
                index: {utils_root}/index.{ext}
                源:    {repo}/utils/helpers/{name}.{ext}
  local_helper: {hooks_root}/{parent}/helpers/{name}.{ext}
                index: {hooks_root}/{parent}/helpers/index.{ext}
                源:    {repo}/hooks/{parent}/helpers/{name}.{ext}
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import NamedTuple

from hookpull.core.dep.models import (
    DependencyGraph,
    DependencyKind,
    DependencyNode,
    FileInstallPlan,
)
from hookpull.core.exceptions import InvalidNodeKindError

logger = logging.getLogger(__name__)


class PlanSet(NamedTuple):
    plans: list[FileInstallPlan]
    packages: list[str]


def _plan_for(
    node: DependencyNode,
    hooks_root: Path,
    utils_root: Path,
    repo: str,
    ext: str,
) -> FileInstallPlan:
    name = node.name
    if node.kind is DependencyKind.UNIT:
        return FileInstallPlan(
            name=name,
            kind=node.kind,
            source_url=f"{repo}/hooks/{name}/{name}.{ext}",
            destination_path=hooks_root / name / f"{name}.{ext}",
            index_path=hooks_root / f"index.{ext}",
            export_specifier=f"{name}/{name}",
        )
    if node.kind is DependencyKind.HELPER:
        return FileInstallPlan(
            name=name,
            kind=node.kind,
            source_url=f"{repo}/utils/helpers/{name}.{ext}",
            destination_path=utils_root / f"{name}.{ext}",
            index_path=utils_root / f"index.{ext}",
            export_specifier=name,
        )
    if node.kind is DependencyKind.LOCAL_HELPER:
        helpers_dir = hooks_root / node.parent_unit / "helpers"
        return FileInstallPlan(
            name=name,
            kind=node.kind,
            source_url=f"{repo}/hooks/{node.parent_unit}/helpers/{name}.{ext}",
            destination_path=helpers_dir / f"{name}.{ext}",
            index_path=helpers_dir / f"index.{ext}",
            export_specifier=name,
        )
    raise InvalidNodeKindError(node.kind)


def build_plans(
    graph: DependencyGraph,
    hooks_root: str | Path,
    utils_root: str | Path,
    repo_base_url: str,
    extension: str,
) -> PlanSet:
    """生成安装计划

    计划顺序与依赖图的迭代顺序一致；package 节点不产生文件计划，
    按出现顺序收集到 packages。

    Raises:
        InvalidNodeKindError: 节点类型未知
    """
    hooks = Path(hooks_root)
    utils = Path(utils_root)
    repo = repo_base_url.rstrip("/")
    ext = extension.lstrip(".")

    plans: list[FileInstallPlan] = []
    packages: list[str] = []
    for node in graph.values():
        if node.kind is DependencyKind.PACKAGE:
            if node.name not in packages:
                packages.append(node.name)
            continue
        plans.append(_plan_for(node, hooks, utils, repo, ext))

    logger.info("生成 %d 个文件计划, %d 个依赖包", len(plans), len(packages))
    return PlanSet(plans, packages)
