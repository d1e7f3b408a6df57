"""版本清单加载

职责:
- 从 YAML 文件加载 assets / externals / languages / specs / plugins 五个分类
- 嵌套分组（如 assets.hypervisor）按声明顺序展开
- 带 architecture 表的条目加载为 ArchitectureComponent

读取或解析失败抛出 ManifestError，调用方据此终止整次运行。
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from checkver.core.exceptions import ManifestError
from checkver.core.models import (
    ARCHITECTURES,
    CATEGORIES,
    ArchEntry,
    ArchitectureComponent,
    Category,
    Component,
    Manifest,
)
from checkver.utils.yaml_io import load_yaml

logger = logging.getLogger(__name__)

_COMPONENT_KEYS = frozenset(("url", "version", "tag", "branch"))


def _opt_str(value: Any) -> str | None:
    """YAML 中的版本号可能被解析成数字（如 1.20 -> 1.2），这里统一转成字符串"""
    if value is None:
        return None
    return str(value)


def _is_group(info: dict[str, Any]) -> bool:
    if info.keys() & _COMPONENT_KEYS or "architecture" in info:
        return False
    return any(isinstance(v, dict) for v in info.values())


def _load_arch_component(name: str, info: dict[str, Any]) -> ArchitectureComponent:
    table = info.get("architecture") or {}
    if not isinstance(table, dict):
        raise ManifestError(f"{name}.architecture 必须是映射")
    arches: dict[str, ArchEntry] = {}
    for arch in ARCHITECTURES:
        entry = table.get(arch)
        if entry is None:
            continue
        if not isinstance(entry, dict):
            raise ManifestError(f"{name}.architecture.{arch} 必须是映射")
        arches[arch] = ArchEntry(
            name=str(entry.get("name", "")),
            version=_opt_str(entry.get("version")),
        )
    return ArchitectureComponent(
        name=name,
        url=_opt_str(info.get("url")),
        architecture=arches,
        description=str(info.get("description", "")),
    )


def _load_entries(
    section: dict[str, Any], path: str,
) -> list[Component | ArchitectureComponent]:
    components: list[Component | ArchitectureComponent] = []
    for name, info in section.items():
        if name == "description":
            continue
        if not isinstance(info, dict):
            raise ManifestError(f"{path}.{name} 必须是映射")
        if "architecture" in info:
            components.append(_load_arch_component(str(name), info))
        elif _is_group(info):
            components.extend(_load_entries(info, f"{path}.{name}"))
        else:
            components.append(Component(
                name=str(name),
                url=_opt_str(info.get("url")),
                version=_opt_str(info.get("version")),
                tag=_opt_str(info.get("tag")),
                branch=_opt_str(info.get("branch")),
                description=str(info.get("description", "")),
            ))
    return components


def parse_manifest(data: dict[str, Any]) -> Manifest:
    """将已解析的 YAML 字典转换为 Manifest"""
    if not data:
        raise ManifestError("清单为空或顶层不是映射")

    categories: list[Category] = []
    for cat_name in CATEGORIES:
        section = data.get(cat_name)
        if section is None:
            logger.debug("清单缺少分类: %s", cat_name)
            continue
        if not isinstance(section, dict):
            raise ManifestError(f"分类 {cat_name} 必须是映射")
        categories.append(Category(
            name=cat_name,
            description=str(section.get("description", "")),
            components=tuple(_load_entries(section, cat_name)),
        ))

    manifest = Manifest(
        description=str(data.get("description", "")),
        format=str(data.get("format", "")),
        categories=tuple(categories),
    )
    logger.info("已加载 %d 个组件", len(manifest.components()))
    return manifest


def load_manifest(path: str | Path) -> Manifest:
    """从 YAML 文件加载版本清单

    Raises:
        ManifestError: 文件不存在、不可读或格式错误
    """
    p = Path(path)
    if not p.is_file():
        raise ManifestError(f"Unable to read {p}")
    try:
        data = load_yaml(p)
    except (OSError, ValueError) as e:
        raise ManifestError(f"Unable to read {p}") from e
    except yaml.YAMLError as e:
        raise ManifestError(f"Unable to parse {p}") from e
    try:
        return parse_manifest(data)
    except ManifestError as e:
        raise ManifestError(f"Unable to parse {p}: {e}") from e
