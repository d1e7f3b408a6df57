"""CLI — 版本检查命令"""

from __future__ import annotations

import click

from checkver.core.exceptions import CheckVerError


def register(group: click.Group) -> None:
    group.add_command(check)
    group.add_command(routes)


@click.command()
@click.option("--versions-file", "-v", required=True, help="版本清单路径（如 kata-containers 的 versions.yaml）")
@click.option("--outfile", "-o", default=None, help="同时以追加模式写入该文件")
@click.option("--quiet", "-q", is_flag=True, help="不输出到控制台，通常与 --outfile 配合")
@click.option(
    "--github-token", "-g", envvar="GITHUB_TOKEN", default=None,
    help="GitHub token，提高 API 限额（也可通过 GITHUB_TOKEN 环境变量设置）",
)
@click.option("--config", "-c", default="", help="配置文件路径")
@click.option("--timeout", type=float, default=None, help="单次请求超时（秒）")
def check(
    versions_file: str, outfile: str | None, quiet: bool,
    github_token: str | None, config: str, timeout: float | None,
) -> None:
    """检查清单中每个组件的最新上游版本"""
    from checkver.core.checker import check_versions
    from checkver.core.config import init_config

    try:
        cfg = init_config(config).override(
            manifest_path=versions_file,
            output_file=outfile,
            quiet=quiet or None,
            github_token=github_token,
            timeout=timeout,
        )
        check_versions(cfg.manifest_path, cfg)
    except CheckVerError as e:
        raise click.ClickException(str(e)) from e


@click.command()
@click.option("--versions-file", "-v", required=True, help="版本清单路径")
def routes(versions_file: str) -> None:
    """列出每个组件的当前版本与查询来源（不发起网络请求）"""
    from checkver.core.checker import iter_targets
    from checkver.core.manifest import load_manifest

    try:
        manifest = load_manifest(versions_file)
    except CheckVerError as e:
        raise click.ClickException(str(e)) from e

    for t in iter_targets(manifest):
        if t.route is None:
            source = "[skip]"
        else:
            source = f"[{t.route.protocol.value}] {t.route.endpoint}"
        click.echo(f"  {t.name:32s} {t.current_version:24s} {source}")
