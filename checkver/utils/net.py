"""网络工具 — URL 安全校验 + 阻塞式 HTTP GET"""

from __future__ import annotations

import http.client
import logging
import urllib.error
import urllib.request
from urllib.parse import urlparse

from checkver.core.exceptions import TransportError

logger = logging.getLogger(__name__)

_ALLOWED_SCHEMES = frozenset(("http", "https"))

DEFAULT_TIMEOUT = 30.0


def validate_url_scheme(url: str, *, context: str = "") -> None:
    """校验 URL 仅使用 http/https，防止 file:// 等非预期协议访问

    Raises:
        TransportError: URL scheme 不在白名单内
    """
    parsed = urlparse(url)
    if parsed.scheme not in _ALLOWED_SCHEMES:
        label = f" ({context})" if context else ""
        raise TransportError(
            f"不允许的 URL 协议 '{parsed.scheme}'{label}，"
            f"仅支持 http/https: {url}"
        )


def http_get(
    url: str,
    headers: dict[str, str] | None = None,
    *,
    timeout: float = DEFAULT_TIMEOUT,
) -> str:
    """发起 GET 请求并返回 UTF-8 解码后的响应体（原样，不做 strip）

    连接失败、超时、非 2xx 状态码、响应截断、非法 URL 统一转换为 TransportError。
    """
    validate_url_scheme(url, context="http get")
    logger.debug("GET %s", url)
    try:
        req = urllib.request.Request(url, headers=headers or {})
        with urllib.request.urlopen(req, timeout=timeout) as resp:  # nosec B310
            return resp.read().decode("utf-8")
    except urllib.error.HTTPError as e:
        raise TransportError(f"请求失败 (HTTP {e.code}): {url}") from e
    except (urllib.error.URLError, OSError, http.client.HTTPException, ValueError) as e:
        raise TransportError(f"请求失败: {url} - {e}") from e
