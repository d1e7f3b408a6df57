"""上游来源分类与 URL 规范化

职责:
- 判断组件 URL 属于哪种上游协议
- 将面向用户的 GitHub 仓库 URL 改写为 releases API 端点
- 维护两张封闭的按名称覆盖表：无 URL 的语言工具链、非 GitHub 的特例组件

覆盖表刻意写成显式字典，支持的来源集合一目了然、便于测试。
"""

from __future__ import annotations

import logging

from checkver.core.models import ProviderProtocol, Route

logger = logging.getLogger(__name__)

_GITHUB_MARKER = "github.com"
_GITHUB_WEB = "https://github.com"
_GITHUB_API = "https://api.github.com/repos"
_LATEST = "/releases/latest"


def is_github_url(url: str) -> bool:
    return _GITHUB_MARKER in url


def _is_api_endpoint(url: str) -> bool:
    return url.startswith(_GITHUB_API + "/") and url.endswith(_LATEST)


def to_github_api_url(url: str) -> str:
    """GitHub 仓库 URL -> releases/latest API 端点

    规则按从特殊到一般的顺序匹配:
      1. runtime-spec: 清单中直接给的是 releases 列表页，末尾 releases 改为 releases/latest
      2. containerd/containerd: 清单中不带 scheme，只替换主机部分后追加 /releases/latest
      3. 其他: 替换 https://github.com 前缀后追加 /releases/latest

    已经是 API 端点的 URL 原样返回，不会重复追加。
    """
    if _is_api_endpoint(url):
        return url
    if "runtime-spec" in url:
        endpoint = url.replace(_GITHUB_WEB, _GITHUB_API).rstrip("/")
        if endpoint.endswith("/releases"):
            endpoint += "/latest"
        return endpoint
    if "containerd/containerd" in url:
        return url.rstrip("/").replace(_GITHUB_MARKER, _GITHUB_API) + _LATEST
    return url.rstrip("/").replace(_GITHUB_WEB, _GITHUB_API) + _LATEST


def classify_and_normalize(url: str) -> tuple[ProviderProtocol, str]:
    """按 URL 判断协议并返回 (协议, 查询端点)

    非 GitHub URL 返回 (NONE, 原 URL)，是否有覆盖规则由 select_route 按名称决定。
    """
    if is_github_url(url):
        return ProviderProtocol.GITHUB_RELEASES, to_github_api_url(url)
    return ProviderProtocol.NONE, url


# =========================================================================
# 按名称覆盖表
# =========================================================================

# 清单中的语言条目没有 url 字段，按名称使用固定端点
LANGUAGE_ROUTES: dict[str, Route] = {
    "golang": Route(
        ProviderProtocol.PLAIN_TEXT, "https://golang.org/VERSION?m=text",
    ),
    "golangci-lint": Route(
        ProviderProtocol.LANGUAGE_FEED,
        to_github_api_url("https://github.com/golangci/golangci-lint"),
    ),
    "rust": Route(
        ProviderProtocol.LANGUAGE_FEED,
        "https://api.github.com/repos/rust-lang/rust/releases/latest",
    ),
}

# 有 url 但不在 GitHub 上的组件
URL_OVERRIDES: dict[str, Route] = {
    "virtiofsd": Route(
        ProviderProtocol.GITLAB_TAGS,
        "https://gitlab.com/api/v4/projects/21523468/repository/tags",
    ),
}


def select_route(name: str, url: str | None) -> Route | None:
    """为组件选择查询路由，返回 None 表示当前无法自动检查（静默跳过）"""
    if url is None:
        route = LANGUAGE_ROUTES.get(name)
    else:
        protocol, endpoint = classify_and_normalize(url)
        if protocol is ProviderProtocol.GITHUB_RELEASES:
            return Route(protocol, endpoint)
        route = URL_OVERRIDES.get(name)
    if route is None:
        logger.debug("无可用的版本来源，跳过: %s (url=%s)", name, url)
    return route
