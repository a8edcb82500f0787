"""submitdeps 命令行接口

CLI 按领域拆分为子模块，每个模块注册自己的命令到 main group。
"""

from __future__ import annotations

import os

import click

from submitdeps import __version__
from submitdeps.core.config import init_config
from submitdeps.utils.logger import setup_logging


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--config", "config_path", default=None,
    envvar="SUBMITDEPS_CONFIG", help="配置文件路径 (YAML)",
)
def main(config_path: str | None) -> None:
    """submitdeps - 作业提交依赖解析"""
    setup_logging(
        level=os.getenv("SUBMITDEPS_LOG_LEVEL", "INFO"),
        json_output=os.getenv("SUBMITDEPS_LOG_JSON", "") == "1",
    )
    if config_path:
        init_config(config_path)


from submitdeps.cli.cmd_deps import register as _reg_deps  # noqa: E402

_reg_deps(main)
