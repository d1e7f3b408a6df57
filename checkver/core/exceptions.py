"""统一异常体系

所有业务异常继承 CheckVerError。
单个组件的失败（MissingVersionError / ProviderError）由检查引擎捕获并转为告警行，
只有 ManifestError 会终止整次运行。
"""

from __future__ import annotations


class CheckVerError(Exception):
    """checkver 基础异常"""

    code: str = "UNKNOWN"

    def __init__(self, message: str) -> None:
        super().__init__(message)


class ConfigError(CheckVerError):
    """配置文件内容无效"""

    code = "CONFIG_ERROR"


class ManifestError(CheckVerError):
    """版本清单无法读取或解析"""

    code = "MANIFEST_ERROR"


class MissingVersionError(CheckVerError):
    """组件没有 tag / branch / version 任一字段"""

    code = "MISSING_VERSION"


class ProviderError(CheckVerError):
    """上游版本查询失败"""

    code = "PROVIDER_ERROR"


class ParserError(ProviderError):
    """上游响应结构不符合预期（JSON 结构错误、缺字段、类型不对、空数组）"""

    code = "PARSER_ERROR"


class TransportError(ProviderError):
    """网络请求失败（连接失败、超时、非 2xx 状态码、非法协议）"""

    code = "TRANSPORT_ERROR"
