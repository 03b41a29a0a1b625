"""CLI — 注册表查询"""

from __future__ import annotations

import click

from hookpull.cli import _abort, _transport
from hookpull.core.config import get_config
from hookpull.core.dep import RegistryLoader, list_units
from hookpull.core.exceptions import RegistryUnavailableError


def register(group: click.Group) -> None:
    group.add_command(list_hooks)


@click.command(name="list")
@click.option("--registry", default=None, help="注册表 URL（默认取工具配置）")
def list_hooks(registry: str | None) -> None:
    """列出注册表中的全部 hooks"""
    registry_url = registry or get_config().registry_url
    try:
        units = RegistryLoader(_transport()).load(registry_url)
    except RegistryUnavailableError as e:
        _abort(str(e))

    for row in list_units(units):
        click.echo(
            f"  {row['name']:28s} hooks={row['hooks']} utils={row['utils']} "
            f"local={row['local']} packages={row['packages']}"
        )
