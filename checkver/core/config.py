"""集中配置管理

支持从 YAML 文件加载 + 编程式覆盖（CLI 参数优先于文件）。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any

from checkver.core.exceptions import ConfigError
from checkver.core.providers import DEFAULT_USER_AGENT
from checkver.utils.net import DEFAULT_TIMEOUT
from checkver.utils.yaml_io import load_yaml

logger = logging.getLogger(__name__)


@dataclass
class Config:
    """运行配置"""

    manifest_path: str = "versions.yaml"
    output_file: str = ""
    quiet: bool = False
    github_token: str = ""

    # 网络
    user_agent: str = DEFAULT_USER_AGENT
    timeout: float = DEFAULT_TIMEOUT

    # 自定义扩展 (放不到字段里的配置项)
    extra: dict = field(default_factory=dict)

    @classmethod
    def from_file(cls, path: str) -> Config:
        """从 YAML 文件加载配置，不存在则返回默认"""
        data = load_yaml(path)
        if not data:
            return cls()
        known = {f.name for f in cls.__dataclass_fields__.values()} - {"extra"}
        matched = {k: v for k, v in data.items() if k in known}
        extra = {k: v for k, v in data.items() if k not in known}
        try:
            timeout = float(matched.get("timeout", DEFAULT_TIMEOUT))
        except (TypeError, ValueError) as e:
            raise ConfigError(f"timeout 必须是数字: {matched.get('timeout')!r}") from e
        if timeout <= 0:
            raise ConfigError(f"timeout 必须大于 0: {timeout}")
        matched["timeout"] = timeout
        cfg = cls(**matched)
        cfg.extra = extra
        return cfg

    def override(self, **changes: Any) -> Config:
        """返回覆盖了非 None 字段的新配置"""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})

    @property
    def token(self) -> str | None:
        """空字符串视为未提供"""
        return self.github_token or None

    def to_dict(self) -> dict:
        from dataclasses import asdict
        return asdict(self)


# 全局单例，首次 import 时不加载文件；由 CLI 入口显式初始化
_current: Config | None = None


def get_config() -> Config:
    """获取当前配置（未初始化则返回默认值）"""
    global _current  # noqa: PLW0603
    if _current is None:
        _current = Config()
    return _current


def init_config(path: str = "") -> Config:
    """从文件初始化全局配置，path 为空时使用默认值"""
    global _current  # noqa: PLW0603
    _current = Config.from_file(path) if path else Config()
    if path:
        logger.info("配置已加载: %s", path)
    return _current
