"""checkver 日志配置

日志统一写 stderr，检查结果行走 stdout / 输出文件，两者互不混杂。
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone

_TEXT_FORMAT = "%(asctime)s [%(levelname)-7s] %(name)s: %(message)s"


class JSONFormatter(logging.Formatter):
    """每条记录输出一行 JSON，供 CI 采集"""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "where": f"{record.module}:{record.lineno}",
        }
        if record.exc_info and record.exc_info[1]:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False)


def _drop_handlers(root: logging.Logger) -> None:
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()


def setup_logging(level: str = "WARNING", json_output: bool = False) -> None:
    """按 CHECKVER_LOG_LEVEL / CHECKVER_LOG_JSON 配置根日志器，可重复调用；未知级别按 WARNING 处理"""
    root = logging.getLogger()
    _drop_handlers(root)
    root.setLevel(getattr(logging, level.upper(), logging.WARNING))

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JSONFormatter() if json_output else logging.Formatter(_TEXT_FORMAT))
    root.addHandler(handler)


def reset_logging() -> None:
    _drop_handlers(logging.getLogger())
