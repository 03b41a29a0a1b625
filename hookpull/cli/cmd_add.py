"""CLI — 添加 hooks"""

from __future__ import annotations

import logging
import re

import click
from rich.console import Console

from hookpull.cli import _abort, _transport
from hookpull.core.config import get_config, load_project_config
from hookpull.core.dep import (
    Installer,
    Registry,
    RegistryLoader,
    build_plans,
    resolve_dependencies,
)
from hookpull.core.exceptions import (
    ConfigError,
    CycleDetectedError,
    PathResolutionError,
    RegistryUnavailableError,
    UnknownUnitError,
)
from hookpull.core.paths import PathMapper

logger = logging.getLogger(__name__)


def register(group: click.Group) -> None:
    group.add_command(add)


def _prompt_units(registry: Registry) -> list[str]:
    """交互式多选：按序号或名称选择，逗号/空格分隔"""
    names = list(registry)
    click.echo("可添加的 hooks:")
    for i, name in enumerate(names, 1):
        click.echo(f"  {i:3d}) {registry[name].name}")
    raw = click.prompt(
        "选择要添加的 hooks（序号或名称，逗号/空格分隔，留空取消）",
        default="", show_default=False,
    )

    selected: list[str] = []
    for token in re.split(r"[,\s]+", raw.strip()):
        if not token:
            continue
        if token.isdigit() and 1 <= int(token) <= len(names):
            token = names[int(token) - 1]
        if token not in selected:
            selected.append(token)
    return selected


@click.command()
@click.argument("hooks", nargs=-1)
@click.option("--all", "-a", "add_all", is_flag=True, help="添加注册表中的全部 hooks")
@click.option("--registry", default=None, help="注册表 URL（默认取工具配置）")
@click.option("--overwrite", is_flag=True, help="目标文件已存在时直接覆盖，不再询问")
@click.option("--cwd", default=".", type=click.Path(file_okay=False), help="项目目录")
def add(
    hooks: tuple[str, ...], add_all: bool, registry: str | None,
    overwrite: bool, cwd: str,
) -> None:
    """添加 hooks 及其依赖到项目"""
    cfg = get_config()

    try:
        project = load_project_config(cwd, cfg)
    except ConfigError as e:
        _abort(f"{e}\n请先运行 {click.style('hookpull init', fg='green')} 创建配置文件。")

    registry_url = registry or cfg.registry_url
    try:
        units = RegistryLoader(_transport()).load(registry_url)
    except RegistryUnavailableError as e:
        _abort(f"{e}\n请检查注册表地址: {registry_url}")

    selected = list(units) if add_all else list(hooks)
    if not selected:
        selected = _prompt_units(units)

    if not add_all:
        missing = [name for name in selected if name not in units]
        if missing:
            _abort(f"注册表中找不到 hook: {', '.join(missing)}")

    if not selected:
        click.echo("未选择任何 hook。")
        return

    ext = project.extension
    try:
        repo_base_url = cfg.repo_url_for(ext)
    except ConfigError as e:
        _abort(str(e))

    mapper = PathMapper(cwd, prefer_typescript=project.typescript)
    try:
        hooks_root = mapper.resolve(project.hook_path)
        utils_root = mapper.resolve(project.utils_path)
    except PathResolutionError as e:
        _abort(f"路径解析失败: {e}")

    try:
        graph = resolve_dependencies(units, selected)
    except (UnknownUnitError, CycleDetectedError) as e:
        _abort(str(e))

    plan_set = build_plans(graph, hooks_root, utils_root, repo_base_url, ext)

    console = Console(stderr=True)
    installer = Installer(
        _transport(),
        overwrite=overwrite,
        confirm=lambda message: click.confirm(message, default=False),
        console=console,
    )
    report = installer.install(plan_set.plans)

    click.echo(
        f"完成: {len(report.installed)} 个文件已安装, "
        f"{len(report.skipped)} 个已跳过, {len(report.failed)} 个失败"
    )
    if plan_set.packages:
        click.echo("请使用项目的包管理器安装以下依赖包:")
        click.echo(f"  {' '.join(plan_set.packages)}")

    if not report.success:
        for outcome in report.failed:
            click.echo(f"  [FAIL] {outcome.plan.name}: {outcome.error}", err=True)
        _abort("部分文件安装失败，已安装的文件保留在原处。")
