"""核心数据模型

清单在启动时读取一次，整个运行期间不可变，全部使用 frozen dataclass + tuple。
ProviderProtocol / Route / CheckResult 为每次检查时临时产生的值，不做持久化。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

# 清单分类的固定遍历顺序
CATEGORIES = ("assets", "externals", "languages", "specs", "plugins")

# 架构相关组件的固定展开顺序
ARCHITECTURES = ("aarch64", "ppc64le", "s390x", "x86_64")

UNKNOWN_VERSION = "unknown"


# =========================================================================
# 清单模型
# =========================================================================


@dataclass(frozen=True)
class Component:
    """单个依赖组件"""

    name: str
    url: str | None = None
    version: str | None = None
    tag: str | None = None
    branch: str | None = None
    description: str = ""


@dataclass(frozen=True)
class ArchEntry:
    """某个 CPU 架构下的镜像 / initrd 条目"""

    name: str = ""
    version: str | None = None


@dataclass(frozen=True)
class ArchitectureComponent:
    """按架构区分版本的组件（image / initrd）

    当前版本取决于架构，展开为每个架构一次检查，共用同一个项目 URL。
    """

    name: str
    url: str | None = None
    architecture: dict[str, ArchEntry] = field(default_factory=dict)
    description: str = ""

    def entries(self) -> list[tuple[str, ArchEntry]]:
        """按 aarch64, ppc64le, s390x, x86_64 顺序返回已声明的架构条目"""
        return [
            (arch, self.architecture[arch])
            for arch in ARCHITECTURES
            if arch in self.architecture
        ]


@dataclass(frozen=True)
class Category:
    """清单中的一个分类，组件保持 YAML 声明顺序"""

    name: str
    description: str = ""
    components: tuple[Component | ArchitectureComponent, ...] = ()


@dataclass(frozen=True)
class Manifest:
    """版本清单根对象"""

    description: str = ""
    format: str = ""
    categories: tuple[Category, ...] = ()

    def components(self) -> list[Component | ArchitectureComponent]:
        """按分类顺序扁平化所有组件"""
        return [c for cat in self.categories for c in cat.components]


# =========================================================================
# 检查时的临时值
# =========================================================================


class ProviderProtocol(str, Enum):
    """上游版本来源协议（封闭集合）"""

    GITHUB_RELEASES = "github-releases"
    GITLAB_TAGS = "gitlab-tags"
    PLAIN_TEXT = "plain-text"
    LANGUAGE_FEED = "language-feed"
    NONE = "none"

    @property
    def github_hosted(self) -> bool:
        """是否托管在 GitHub，仅此类请求携带 bearer token"""
        return self in (ProviderProtocol.GITHUB_RELEASES, ProviderProtocol.LANGUAGE_FEED)


@dataclass(frozen=True)
class Route:
    """组件的查询路由：协议 + 查询端点"""

    protocol: ProviderProtocol
    endpoint: str


@dataclass(frozen=True)
class CheckResult:
    """单个组件的检查结果，由 Reporter 立即消费"""

    component_name: str
    current_version: str
    latest_version: str | None = None
    failure_reason: str = ""

    @property
    def ok(self) -> bool:
        return self.latest_version is not None

    def line(self) -> str:
        if self.latest_version is not None:
            return (
                f"project: {self.component_name}, "
                f"current_version: {self.current_version}, "
                f"latest_version: {self.latest_version}"
            )
        return f"Warning! Failed to check version for {self.component_name}"
