"""安装执行器

逐个执行安装计划，严格串行:
  1. 冲突检查: 目标文件已存在时询问是否覆盖（--overwrite 跳过询问）
  2. 创建目标目录
  3. 拉取远程源文件
  4. 写入目标文件（直接覆盖）
  5. 幂等更新 barrel index（导出行已存在则不追加）

单个计划失败（拉取或写入）只记录该计划为 failed，继续执行后续计划，
最终由 InstallReport 汇总。已写入的文件不回滚。
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import TYPE_CHECKING

from rich.markup import escape

from hookpull.core.dep.models import (
    FileInstallPlan,
    InstallOutcome,
    InstallReport,
    InstallStatus,
)
from hookpull.core.exceptions import TransportError
from hookpull.utils.net import Transport

if TYPE_CHECKING:
    from rich.console import Console
    from rich.status import Status

logger = logging.getLogger(__name__)

ConfirmFn = Callable[[str], bool]


def update_barrel_index(index_path: Path, statement: str) -> bool:
    """向 barrel 文件追加导出行，已包含则不变

    返回是否发生了追加。index 不是合法 UTF-8 时抛出 UnicodeDecodeError。
    """
    index_path.parent.mkdir(parents=True, exist_ok=True)
    if not index_path.exists():
        index_path.write_text("", encoding="utf-8")

    content = index_path.read_text(encoding="utf-8")
    if statement.rstrip("\n") in content.splitlines():
        return False

    # 原文件末尾缺少换行时补一个，避免两条导出挤在同一行
    prefix = "\n" if content and not content.endswith("\n") else ""
    with open(index_path, "a", encoding="utf-8") as f:
        f.write(prefix + statement)
    return True


class Installer:
    """安装计划执行器

    参数:
        transport: 远程拉取实现
        overwrite: 为 True 时目标文件已存在也直接覆盖，不再询问
        confirm: 覆盖确认回调，返回 True 表示覆盖；为 None 时已存在的文件一律跳过
        console: rich Console，提供进度 spinner 与提示输出；为 None 时仅写日志
    """

    def __init__(
        self,
        transport: Transport,
        *,
        overwrite: bool = False,
        confirm: ConfirmFn | None = None,
        console: Console | None = None,
    ) -> None:
        self.transport = transport
        self.overwrite = overwrite
        self.confirm = confirm
        self.console = console

    def install(self, plans: Iterable[FileInstallPlan]) -> InstallReport:
        report = InstallReport()
        status = self.console.status("正在安装文件...") if self.console is not None else None
        if status is not None:
            status.start()
        try:
            for plan in plans:
                report.outcomes.append(self._install_one(plan, status))
        finally:
            if status is not None:
                status.stop()

        logger.info(
            "安装汇总: %d 成功, %d 跳过, %d 失败",
            len(report.installed), len(report.skipped), len(report.failed),
        )
        return report

    def _install_one(self, plan: FileInstallPlan, status: Status | None) -> InstallOutcome:
        if status is not None:
            status.update(f"正在安装 {plan.name}...")

        if plan.destination_path.exists() and not self._allow_overwrite(plan, status):
            logger.info("跳过已存在的文件: %s", plan.destination_path)
            self._notify(
                f"已跳过 {escape(plan.name)}。如需覆盖，请使用 [green]--overwrite[/green] 参数。"
            )
            return InstallOutcome(plan, InstallStatus.SKIPPED)

        try:
            plan.destination_path.parent.mkdir(parents=True, exist_ok=True)
            content = self.transport.get_bytes(plan.source_url)
            plan.destination_path.write_bytes(content)
            appended = update_barrel_index(plan.index_path, plan.export_statement)
        except (TransportError, OSError, UnicodeDecodeError) as e:
            logger.error("安装失败: %s (%s)", plan.name, e)
            self._notify(f"[red]安装失败[/red] {escape(plan.name)}: {escape(str(e))}")
            return InstallOutcome(plan, InstallStatus.FAILED, str(e))

        logger.info(
            "已安装 %s -> %s%s",
            plan.name, plan.destination_path, "" if appended else " (index 已包含)",
        )
        return InstallOutcome(plan, InstallStatus.INSTALLED)

    def _allow_overwrite(self, plan: FileInstallPlan, status: Status | None) -> bool:
        if self.overwrite:
            return True
        if self.confirm is None:
            return False

        # 询问期间暂停 spinner，避免与提示输出交错
        if status is not None:
            status.stop()
        try:
            return self.confirm(f"文件 {plan.name} 已存在，是否覆盖？")
        finally:
            if status is not None:
                status.start()

    def _notify(self, message: str) -> None:
        if self.console is not None:
            self.console.print(message)
