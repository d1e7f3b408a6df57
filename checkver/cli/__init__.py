"""checkver 命令行接口

CLI 按领域拆分为子模块，每个模块注册自己的命令到 main group。
"""

import os

import click

from checkver import __version__
from checkver.utils.logger import setup_logging


@click.group()
@click.version_option(version=__version__)
def main() -> None:
    """checkver - 检查版本清单中的组件是否有新的上游版本"""
    setup_logging(
        level=os.getenv("CHECKVER_LOG_LEVEL", "WARNING"),
        json_output=os.getenv("CHECKVER_LOG_JSON", "") == "1",
    )


# 注册各领域子命令
from checkver.cli.cmd_check import register as _reg_check  # noqa: E402

_reg_check(main)
