"""上游版本查询 - Strategy 模式

每种上游协议实现 VersionProvider 接口，通过注册制工厂按协议取用。
新增来源只需继承 VersionProvider 并注册即可。
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from typing import Any

from checkver.core.exceptions import ParserError
from checkver.core.models import ProviderProtocol
from checkver.utils.net import DEFAULT_TIMEOUT, http_get

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "Check Versions v1.0"


def _parse_json(body: str, endpoint: str) -> Any:
    try:
        return json.loads(body)
    except json.JSONDecodeError as e:
        raise ParserError(f"响应不是合法 JSON: {endpoint}") from e


# =========================================================================
# Strategy: VersionProvider
# =========================================================================


class VersionProvider(ABC):
    """上游版本查询策略基类"""

    def __init__(
        self,
        *,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self.user_agent = user_agent
        self.timeout = timeout

    @abstractmethod
    def fetch_latest(self, endpoint: str, token: str | None = None) -> str:
        """查询端点，返回最新版本号

        Raises:
            ProviderError: 网络失败或响应结构不符合预期
        """


class GitHubReleasesProvider(VersionProvider):
    """GitHub releases/latest API，取顶层 tag_name"""

    def fetch_latest(self, endpoint: str, token: str | None = None) -> str:
        headers = {"User-Agent": self.user_agent}
        # 空 token 视为未提供，不发送空凭据
        if token:
            headers["Authorization"] = f"Bearer {token}"
        data = _parse_json(
            http_get(endpoint, headers, timeout=self.timeout), endpoint,
        )
        tag = data.get("tag_name") if isinstance(data, dict) else None
        if not isinstance(tag, str):
            raise ParserError(f"响应缺少字符串字段 tag_name: {endpoint}")
        return tag


class LanguageFeedProvider(GitHubReleasesProvider):
    """语言工具链的 GitHub 发布源，端点为按语言名固定的 URL"""


class GitLabTagsProvider(VersionProvider):
    """GitLab tags API，取数组第一个元素的 name

    依赖 API 默认按时间倒序返回，客户端不做排序。
    """

    def fetch_latest(self, endpoint: str, token: str | None = None) -> str:
        data = _parse_json(
            http_get(endpoint, {"User-Agent": self.user_agent}, timeout=self.timeout),
            endpoint,
        )
        if not isinstance(data, list) or not data:
            raise ParserError(f"tags 响应不是非空数组: {endpoint}")
        first = data[0]
        name = first.get("name") if isinstance(first, dict) else None
        if not isinstance(name, str):
            raise ParserError(f"首个 tag 缺少字符串字段 name: {endpoint}")
        return name


class PlainTextProvider(VersionProvider):
    """纯文本版本端点，整个响应体即版本号（不 strip，保留上游的换行）"""

    def fetch_latest(self, endpoint: str, token: str | None = None) -> str:
        return http_get(endpoint, timeout=self.timeout)


# =========================================================================
# 注册制工厂
# =========================================================================

_providers: dict[ProviderProtocol, type[VersionProvider]] = {
    ProviderProtocol.GITHUB_RELEASES: GitHubReleasesProvider,
    ProviderProtocol.GITLAB_TAGS: GitLabTagsProvider,
    ProviderProtocol.PLAIN_TEXT: PlainTextProvider,
    ProviderProtocol.LANGUAGE_FEED: LanguageFeedProvider,
}


def register_provider(
    protocol: ProviderProtocol, cls: type[VersionProvider],
) -> None:
    """注册或替换某个协议的查询实现"""
    _providers[protocol] = cls


def build_providers(
    *,
    user_agent: str = DEFAULT_USER_AGENT,
    timeout: float = DEFAULT_TIMEOUT,
) -> dict[ProviderProtocol, VersionProvider]:
    """按当前注册表实例化全部查询实现"""
    return {
        protocol: cls(user_agent=user_agent, timeout=timeout)
        for protocol, cls in _providers.items()
    }
