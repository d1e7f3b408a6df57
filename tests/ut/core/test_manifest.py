"""版本清单加载测试"""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from checkver.core.exceptions import ManifestError
from checkver.core.manifest import load_manifest, parse_manifest
from checkver.core.models import ArchitectureComponent, Component


def _write_manifest(tmp_path: Path, data: dict) -> Path:
    manifest = tmp_path / "versions.yaml"
    manifest.write_text(yaml.dump(data, sort_keys=False), encoding="utf-8")
    return manifest


KATA_LIKE = {
    "description": "Kata Containers version information",
    "format": "1",
    "assets": {
        "description": "Additional assets",
        "hypervisor": {
            "description": "Component used to create virtual machines",
            "cloud_hypervisor": {
                "url": "https://github.com/cloud-hypervisor/cloud-hypervisor",
                "version": "v34.0",
            },
            "qemu": {"url": "https://github.com/qemu/qemu", "tag": "v8.0.0"},
        },
        "image": {
            "description": "Root filesystem disk image",
            "url": "https://github.com/kata-containers/kata-containers",
            "architecture": {
                "x86_64": {"name": "ubuntu", "version": "22.04"},
                "aarch64": {"name": "ubuntu", "version": "22.04"},
            },
        },
        "kernel": {"url": "https://cdn.kernel.org/pub/linux/kernel/v6.x/", "version": "v6.1.38"},
    },
    "externals": {
        "description": "Third-party projects",
        "virtiofsd": {"url": "https://gitlab.com/virtio-fs/virtiofsd", "version": "v1.8.0"},
    },
    "languages": {
        "description": "Programming languages",
        "golang": {"description": "Google's 'go' language", "version": "1.20"},
    },
    "specs": {"oci": {"url": "https://github.com/opencontainers/runtime-spec/releases", "version": "v1.1.0"}},
    "plugins": {"sriov-network-device": {"url": "https://github.com/k8snetworkplumbingwg/sriov-network-device-plugin", "version": "b7f6d3e"}},
}


class TestLoadManifest:
    def test_traversal_order(self, tmp_path: Path) -> None:
        manifest = load_manifest(_write_manifest(tmp_path, KATA_LIKE))
        names = [c.name for c in manifest.components()]
        assert names == [
            "cloud_hypervisor", "qemu", "image", "kernel",
            "virtiofsd", "golang", "oci", "sriov-network-device",
        ]
        assert [c.name for c in manifest.categories] == [
            "assets", "externals", "languages", "specs", "plugins",
        ]
        assert manifest.format == "1"

    def test_category_order_fixed(self, tmp_path: Path) -> None:
        """分类顺序固定，与 YAML 中的书写顺序无关"""
        data = {
            "plugins": {"p": {"version": "1"}},
            "assets": {"a": {"version": "1"}},
        }
        manifest = load_manifest(_write_manifest(tmp_path, data))
        assert [c.name for c in manifest.components()] == ["a", "p"]

    def test_component_fields(self, tmp_path: Path) -> None:
        manifest = load_manifest(_write_manifest(tmp_path, KATA_LIKE))
        qemu = manifest.components()[1]
        assert qemu == Component(name="qemu", url="https://github.com/qemu/qemu", tag="v8.0.0")
        golang = manifest.components()[5]
        assert golang.url is None
        assert golang.version == "1.20"

    def test_architecture_component(self, tmp_path: Path) -> None:
        manifest = load_manifest(_write_manifest(tmp_path, KATA_LIKE))
        image = manifest.components()[2]
        assert isinstance(image, ArchitectureComponent)
        assert [arch for arch, _ in image.entries()] == ["aarch64", "x86_64"]
        assert image.architecture["x86_64"].version == "22.04"

    def test_numeric_version_stringified(self, tmp_path: Path) -> None:
        path = tmp_path / "versions.yaml"
        path.write_text("languages:\n  golang:\n    version: 1.21\n", encoding="utf-8")
        golang = load_manifest(path).components()[0]
        assert golang.version == "1.21"

    def test_missing_categories_ok(self, tmp_path: Path) -> None:
        manifest = load_manifest(_write_manifest(tmp_path, {"languages": {"rust": {"version": "1.72"}}}))
        assert len(manifest.categories) == 1


class TestManifestErrors:
    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ManifestError, match="Unable to read"):
            load_manifest(tmp_path / "nope.yaml")

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "versions.yaml"
        path.write_text("assets: [unclosed\n", encoding="utf-8")
        with pytest.raises(ManifestError, match="Unable to parse"):
            load_manifest(path)

    def test_top_level_not_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "versions.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ManifestError, match="Unable to parse"):
            load_manifest(path)

    def test_category_not_mapping(self) -> None:
        with pytest.raises(ManifestError, match="externals"):
            parse_manifest({"externals": ["runc"]})

    def test_component_not_mapping(self) -> None:
        with pytest.raises(ManifestError, match="externals.runc"):
            parse_manifest({"externals": {"runc": "v1.1.9"}})
