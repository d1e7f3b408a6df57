"""配置加载测试"""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from checkver.core.config import Config, get_config, init_config
from checkver.core.exceptions import ConfigError
from checkver.core.providers import DEFAULT_USER_AGENT


class TestConfig:
    def test_defaults(self) -> None:
        cfg = Config()
        assert cfg.user_agent == DEFAULT_USER_AGENT
        assert cfg.token is None
        assert cfg.quiet is False

    def test_from_file_with_extra(self, tmp_path: Path) -> None:
        path = tmp_path / "checkver.yml"
        path.write_text(yaml.dump({
            "output_file": "out.txt", "timeout": 5, "team": "runtime",
        }), encoding="utf-8")
        cfg = Config.from_file(str(path))
        assert cfg.output_file == "out.txt"
        assert cfg.timeout == 5.0
        assert cfg.extra == {"team": "runtime"}

    def test_missing_file_defaults(self, tmp_path: Path) -> None:
        assert Config.from_file(str(tmp_path / "none.yml")) == Config()

    @pytest.mark.parametrize("timeout", ["soon", 0, -1])
    def test_bad_timeout(self, tmp_path: Path, timeout: object) -> None:
        path = tmp_path / "checkver.yml"
        path.write_text(yaml.dump({"timeout": timeout}), encoding="utf-8")
        with pytest.raises(ConfigError, match="timeout"):
            Config.from_file(str(path))

    def test_override_skips_none(self) -> None:
        cfg = Config(output_file="a.txt", github_token="t").override(
            output_file=None, github_token="", quiet=True,
        )
        assert cfg.output_file == "a.txt"
        assert cfg.quiet is True
        # 空 token 视为未提供
        assert cfg.token is None

    def test_init_config_sets_global(self, tmp_path: Path) -> None:
        path = tmp_path / "checkver.yml"
        path.write_text(yaml.dump({"user_agent": "ci/1"}), encoding="utf-8")
        cfg = init_config(str(path))
        assert get_config() is cfg
        assert cfg.user_agent == "ci/1"
        init_config()
        assert get_config().user_agent == DEFAULT_USER_AGENT
