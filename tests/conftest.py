"""测试公共 fixture"""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from checkver.utils.logger import reset_logging


@pytest.fixture(autouse=True)
def _clean_logging() -> Iterator[None]:
    """CLI 测试会把 handler 绑定到 CliRunner 的临时流，每个用例结束后清理"""
    yield
    reset_logging()
