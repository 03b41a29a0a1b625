"""hookpull 命令行接口

CLI 按领域拆分为子模块，每个模块注册自己的命令到 main group。
"""

import os
import sys
from typing import NoReturn

import click

from hookpull import __version__
from hookpull.core.config import DEFAULT_SETTINGS_FILE, get_config, init_config
from hookpull.utils.logger import setup_logging
from hookpull.utils.net import Transport, UrllibTransport


def _transport() -> Transport:
    """按当前配置构造远程拉取实现"""
    return UrllibTransport(timeout=get_config().fetch_timeout)


def _abort(message: str) -> NoReturn:
    """输出错误提示并以退出码 1 结束"""
    click.echo(message, err=True)
    sys.exit(1)


@click.group()
@click.version_option(version=__version__)
def main() -> None:
    """hookpull - 从远程注册表拉取 hooks 到本地项目"""
    setup_logging(
        level=os.getenv("HOOKPULL_LOG_LEVEL", "WARNING"),
        json_output=os.getenv("HOOKPULL_LOG_JSON", "") == "1",
    )
    init_config(os.getenv("HOOKPULL_SETTINGS", DEFAULT_SETTINGS_FILE))


# 注册各领域子命令
from hookpull.cli.cmd_add import register as _reg_add  # noqa: E402
from hookpull.cli.cmd_project import register as _reg_project  # noqa: E402
from hookpull.cli.cmd_registry import register as _reg_registry  # noqa: E402

_reg_add(main)
_reg_registry(main)
_reg_project(main)
