"""CLI — 项目初始化"""

from __future__ import annotations

from pathlib import Path

import click

from hookpull.cli import _abort
from hookpull.core.config import (
    PROJECT_CONFIG_FILE,
    ProjectConfig,
    find_project_config,
    get_config,
    save_project_config,
)


def register(group: click.Group) -> None:
    group.add_command(init)


@click.command()
@click.option("--cwd", default=".", type=click.Path(file_okay=False), help="项目目录")
@click.option("--typescript/--javascript", default=True, help="安装 .ts 还是 .js 源文件")
@click.option("--hook-path", default="@/hooks", show_default=True, help="hooks 目录（路径别名或相对路径）")
@click.option("--utils-path", default="@/utils", show_default=True, help="utils 目录（路径别名或相对路径）")
@click.option("--force", is_flag=True, help="覆盖已有的配置文件")
def init(cwd: str, typescript: bool, hook_path: str, utils_path: str, force: bool) -> None:
    """在项目中创建 hookpull 配置文件"""
    existing = find_project_config(cwd, get_config())
    if existing is not None and not force:
        _abort(f"配置文件已存在: {existing}（使用 --force 覆盖）")

    # YAML 配置排在候选列表首位，始终写入它
    target = Path(cwd) / PROJECT_CONFIG_FILE
    save_project_config(
        target,
        ProjectConfig(typescript=typescript, hook_path=hook_path, utils_path=utils_path),
    )
    click.echo(f"已创建配置文件: {target}")
