"""检查结果输出

两个互相独立的目的地:
- 标准输出（quiet 时关闭）
- 追加模式的输出文件（配置了路径时才写）

输出文件在整次运行期间只打开一次，不会代为创建父目录；打开或写入失败（OSError）直接向上抛出，终止运行。
"""

from __future__ import annotations

import logging
from pathlib import Path
from types import TracebackType
from typing import TextIO

import click

logger = logging.getLogger(__name__)


class Reporter:
    """按行写出检查结果"""

    def __init__(self, output_file: str | Path | None = None, quiet: bool = False) -> None:
        self.output_file = Path(output_file) if output_file else None
        self.quiet = quiet
        self.lines: list[str] = []
        self._fh: TextIO | None = None

    def open(self) -> Reporter:
        if self.output_file and self._fh is None:
            self._fh = open(self.output_file, "a", encoding="utf-8")
            logger.info("结果同时写入: %s", self.output_file)
        return self

    def close(self) -> None:
        if self._fh is not None:
            self._fh.close()
            self._fh = None

    def __enter__(self) -> Reporter:
        return self.open()

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def emit(self, line: str) -> None:
        self.lines.append(line)
        if self.output_file and self._fh is None:
            self.open()
        if self._fh is not None:
            self._fh.write(line + "\n")
            self._fh.flush()
        if not self.quiet:
            click.echo(line)
