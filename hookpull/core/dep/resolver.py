"""hook 依赖解析器

职责:
- 从请求的根 hook 出发，深度优先遍历注册表
- 产出按名称去重的依赖图（DependencyGraph）

规则:
  - 每个被访问的 hook 记为 unit 节点，parent_unit 为其自身
  - utils / local / packages 记为叶子节点，parent_unit 为当前 hook，不递归
  - 同名节点后写覆盖先写（保留首次插入位置），因此共享 helper 的 parent
    是最后访问到它的 hook
  - 递归不以依赖图做剪枝，仅以当前路径检测环
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from hookpull.core.dep.models import DependencyGraph, DependencyKind, DependencyNode
from hookpull.core.dep.registry import Registry
from hookpull.core.exceptions import CycleDetectedError, UnknownUnitError

logger = logging.getLogger(__name__)


def _visit(
    registry: Registry,
    name: str,
    graph: DependencyGraph,
    path: tuple[str, ...],
) -> DependencyGraph:
    if name in path:
        start = path.index(name)
        raise CycleDetectedError([*path[start:], name])

    entry = registry.get(name)
    if entry is None:
        raise UnknownUnitError([name], parent=path[-1] if path else "")

    graph[name] = DependencyNode(DependencyKind.UNIT, name, entry.name)
    leaves = (
        (DependencyKind.HELPER, entry.helpers),
        (DependencyKind.LOCAL_HELPER, entry.local_helpers),
        (DependencyKind.PACKAGE, entry.packages),
    )
    for kind, names in leaves:
        for leaf in names:
            graph[leaf] = DependencyNode(kind, leaf, entry.name)

    for child in entry.units:
        graph = _visit(registry, child, graph, (*path, name))
    return graph


def resolve_dependencies(registry: Registry, roots: Iterable[str]) -> DependencyGraph:
    """解析根 hook 的全部传递依赖

    Raises:
        UnknownUnitError: 根 hook 或其依赖的 hook 不在注册表中
        CycleDetectedError: hook 之间存在循环依赖
    """
    roots = list(roots)
    missing = [name for name in roots if name not in registry]
    if missing:
        raise UnknownUnitError(missing)

    graph: DependencyGraph = {}
    for root in roots:
        graph = _visit(registry, root, graph, ())

    logger.info("解析完成: %d 个根 hook -> %d 个依赖", len(roots), len(graph))
    return graph
