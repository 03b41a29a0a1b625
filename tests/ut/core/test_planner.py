"""安装计划生成单元测试"""

from __future__ import annotations

from pathlib import Path

import pytest

from hookpull.core.dep.models import DependencyKind, DependencyNode
from hookpull.core.dep.planner import build_plans
from hookpull.core.dep.registry import parse_registry
from hookpull.core.dep.resolver import resolve_dependencies
from hookpull.core.exceptions import InvalidNodeKindError

REPO = "https://example.com/bundle"


@pytest.fixture()
def roots(tmp_path: Path) -> tuple[Path, Path]:
    return tmp_path / "src" / "hooks", tmp_path / "src" / "utils"


class TestPlanPaths:
    def test_single_hook_with_helper_and_package(self, roots) -> None:
        hooks_root, utils_root = roots
        reg = parse_registry({
            "useFoo": {
                "name": "useFoo", "hooks": [], "utils": ["formatDate"],
                "local": [], "packages": ["left-pad"],
            },
        })
        graph = resolve_dependencies(reg, ["useFoo"])
        plans, packages = build_plans(graph, hooks_root, utils_root, REPO, "x")

        assert [p.kind for p in plans] == [DependencyKind.UNIT, DependencyKind.HELPER]
        unit, helper = plans
        assert unit.destination_path == hooks_root / "useFoo" / "useFoo.x"
        assert helper.destination_path == utils_root / "formatDate.x"
        assert not [p for p in plans if p.kind is DependencyKind.LOCAL_HELPER]
        assert packages == ["left-pad"]

    def test_unit_plan(self, roots) -> None:
        hooks_root, utils_root = roots
        graph = {"useFoo": DependencyNode(DependencyKind.UNIT, "useFoo", "useFoo")}
        (plan,), _ = build_plans(graph, hooks_root, utils_root, REPO, "ts")

        assert plan.source_url == f"{REPO}/hooks/useFoo/useFoo.ts"
        assert plan.index_path == hooks_root / "index.ts"
        assert plan.export_specifier == "useFoo/useFoo"
        assert plan.export_statement == "export * from './useFoo/useFoo';\n"

    def test_helper_plan(self, roots) -> None:
        hooks_root, utils_root = roots
        graph = {"isClient": DependencyNode(DependencyKind.HELPER, "isClient", "useFoo")}
        (plan,), _ = build_plans(graph, hooks_root, utils_root, REPO, "js")

        assert plan.source_url == f"{REPO}/utils/helpers/isClient.js"
        assert plan.index_path == utils_root / "index.js"
        assert plan.export_statement == "export * from './isClient';\n"

    def test_local_helper_plan_uses_parent(self, roots) -> None:
        hooks_root, utils_root = roots
        graph = {"createStore": DependencyNode(DependencyKind.LOCAL_HELPER, "createStore", "useStore")}
        (plan,), _ = build_plans(graph, hooks_root, utils_root, REPO, "ts")

        helpers = hooks_root / "useStore" / "helpers"
        assert plan.destination_path == helpers / "createStore.ts"
        assert plan.index_path == helpers / "index.ts"
        assert plan.source_url == f"{REPO}/hooks/useStore/helpers/createStore.ts"
        assert plan.export_specifier == "createStore"

    def test_trailing_slash_and_dot_extension_normalised(self, roots) -> None:
        hooks_root, utils_root = roots
        graph = {"useFoo": DependencyNode(DependencyKind.UNIT, "useFoo", "useFoo")}
        (plan,), _ = build_plans(graph, hooks_root, utils_root, REPO + "/", ".ts")
        assert plan.source_url == f"{REPO}/hooks/useFoo/useFoo.ts"
        assert plan.destination_path.name == "useFoo.ts"


class TestPartition:
    def test_every_node_in_exactly_one_bucket(self, roots) -> None:
        hooks_root, utils_root = roots
        reg = parse_registry({
            "useA": {"hooks": ["useB"], "utils": ["u1"], "local": ["l1"], "packages": ["p1", "p2"]},
            "useB": {"utils": ["u2"], "local": ["l2"], "packages": ["p1"]},
        })
        graph = resolve_dependencies(reg, ["useA"])
        plans, packages = build_plans(graph, hooks_root, utils_root, REPO, "ts")

        assert len(plans) + len(packages) == len(graph)
        plan_names = {p.name for p in plans}
        assert plan_names.isdisjoint(packages)
        assert plan_names | set(packages) == set(graph)

    def test_order_follows_graph(self, roots) -> None:
        hooks_root, utils_root = roots
        graph = {
            "p": DependencyNode(DependencyKind.PACKAGE, "p", "useA"),
            "useA": DependencyNode(DependencyKind.UNIT, "useA", "useA"),
            "h": DependencyNode(DependencyKind.HELPER, "h", "useA"),
            "q": DependencyNode(DependencyKind.PACKAGE, "q", "useA"),
        }
        plans, packages = build_plans(graph, hooks_root, utils_root, REPO, "ts")
        assert [p.name for p in plans] == ["useA", "h"]
        assert packages == ["p", "q"]

    def test_empty_graph(self, roots) -> None:
        plans, packages = build_plans({}, *roots, REPO, "ts")
        assert plans == []
        assert packages == []


class TestInvalidKind:
    def test_unknown_kind_raises(self, roots) -> None:
        graph = {"x": DependencyNode("bogus", "x", "useA")}  # type: ignore[arg-type]
        with pytest.raises(InvalidNodeKindError, match="bogus"):
            build_plans(graph, *roots, REPO, "ts")
