"""版本检查引擎

按清单声明顺序逐个检查组件（严格串行，每个组件的网络请求完成后才处理下一个）:

  1. 解析当前版本，失败则输出告警并以 "unknown" 继续
  2. 按 URL / 名称选择查询路由，无路由则静默跳过
  3. 调用对应协议的查询实现
  4. 每个组件输出一行结果或告警

单个组件的任何失败都在本层转为告警行，不会中断整次运行。
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from pathlib import Path

from checkver.core.classifier import classify_and_normalize, select_route
from checkver.core.config import Config
from checkver.core.exceptions import MissingVersionError, ProviderError
from checkver.core.manifest import load_manifest
from checkver.core.models import (
    UNKNOWN_VERSION,
    ArchitectureComponent,
    CheckResult,
    Component,
    Manifest,
    ProviderProtocol,
    Route,
)
from checkver.core.providers import VersionProvider, build_providers
from checkver.core.reporter import Reporter
from checkver.core.version import resolve_current_version

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CheckTarget:
    """一次待执行的检查：展示名 + 当前版本 + 查询路由"""

    name: str
    current_version: str
    route: Route | None
    version_missing: bool = False


def iter_targets(manifest: Manifest) -> Iterator[CheckTarget]:
    """按遍历顺序展开清单，架构组件按架构拆成多个检查目标"""
    for component in manifest.components():
        if isinstance(component, ArchitectureComponent):
            yield from _arch_targets(component)
        else:
            yield _component_target(component)


def _component_target(component: Component) -> CheckTarget:
    try:
        current = resolve_current_version(component)
        missing = False
    except MissingVersionError:
        current, missing = UNKNOWN_VERSION, True
    return CheckTarget(
        name=component.name,
        current_version=current,
        route=select_route(component.name, component.url),
        version_missing=missing,
    )


def _arch_targets(component: ArchitectureComponent) -> Iterator[CheckTarget]:
    route = None
    if component.url:
        protocol, endpoint = classify_and_normalize(component.url)
        if protocol is ProviderProtocol.GITHUB_RELEASES:
            route = Route(protocol, endpoint)
    for arch, entry in component.entries():
        yield CheckTarget(
            name=f"{component.name}-{arch}",
            current_version=entry.version or UNKNOWN_VERSION,
            route=route,
            version_missing=not entry.version,
        )


class VersionChecker:
    """遍历清单并输出每个组件的最新版本"""

    def __init__(
        self,
        manifest: Manifest,
        reporter: Reporter,
        *,
        github_token: str | None = None,
        providers: Mapping[ProviderProtocol, VersionProvider] | None = None,
    ) -> None:
        self.manifest = manifest
        self.reporter = reporter
        self.github_token = github_token or None
        self.providers = dict(providers) if providers is not None else build_providers()

    def run(self) -> list[CheckResult]:
        """检查全部组件，返回已输出的结果（不含静默跳过的组件）"""
        results: list[CheckResult] = []
        for target in iter_targets(self.manifest):
            result = self.check_target(target)
            if result is not None:
                results.append(result)

        failed = sum(1 for r in results if not r.ok)
        logger.info("检查汇总: %d 成功, %d 失败", len(results) - failed, failed)
        return results

    def check_target(self, target: CheckTarget) -> CheckResult | None:
        if target.version_missing:
            logger.warning("无法读取当前版本: %s", target.name)
            self.reporter.emit(f"Warning! Failed to read version for {target.name}")

        if target.route is None:
            return None

        result = self._resolve(target.name, target.current_version, target.route)
        self.reporter.emit(result.line())
        return result

    def _resolve(self, name: str, current: str, route: Route) -> CheckResult:
        provider = self.providers.get(route.protocol)
        if provider is None:
            logger.warning("协议 %s 没有注册查询实现: %s", route.protocol.value, name)
            return CheckResult(name, current, failure_reason="no provider")

        token = self.github_token if route.protocol.github_hosted else None
        try:
            latest = provider.fetch_latest(route.endpoint, token)
        except ProviderError as e:
            logger.warning("版本查询失败 %s (%s): %s", name, route.endpoint, e)
            return CheckResult(name, current, failure_reason=str(e))
        logger.debug("%s: %s -> %s", name, current, latest)
        return CheckResult(name, current, latest_version=latest)


def check_versions(
    manifest_path: str | Path,
    config: Config,
    *,
    providers: Mapping[ProviderProtocol, VersionProvider] | None = None,
) -> list[CheckResult]:
    """加载清单并执行完整检查

    Raises:
        ManifestError: 清单不可读或无法解析，此时不执行任何检查
        OSError: 输出文件写入失败
    """
    manifest = load_manifest(manifest_path)
    if providers is None:
        providers = build_providers(user_agent=config.user_agent, timeout=config.timeout)
    with Reporter(config.output_file or None, quiet=config.quiet) as reporter:
        checker = VersionChecker(
            manifest, reporter, github_token=config.token, providers=providers,
        )
        return checker.run()
