"""CLI — 坐标解析命令"""

from __future__ import annotations

import click

from submitdeps.core.exceptions import SubmitDepsError


def register(group: click.Group) -> None:
    group.add_command(resolve)
    group.add_command(list_resolvers)
    group.add_command(parse)


@click.command()
@click.argument("coordinates")
@click.option("--repositories", default=None, help="额外仓库，逗号分隔")
@click.option("--ivy-path", default=None, help="ivy 缓存根目录（默认 ~/.ivy2）")
@click.option("--transitive/--no-transitive", default=None, help="是否解析传递依赖")
def resolve(
    coordinates: str, repositories: str | None,
    ivy_path: str | None, transitive: bool | None,
) -> None:
    """解析坐标并输出 classpath 路径串"""
    from submitdeps.core.config import get_config
    from submitdeps.core.resolve import resolve_maven_coordinates

    cfg = get_config()
    if transitive is None:
        transitive = cfg.transitive
    try:
        paths = resolve_maven_coordinates(
            coordinates, repositories, ivy_path, transitive, config=cfg,
        )
    except SubmitDepsError as e:
        raise click.ClickException(str(e)) from e
    click.echo(paths)


@click.command(name="resolvers")
@click.option("--repositories", default=None, help="额外仓库，逗号分隔")
@click.option("--ivy-path", default=None, help="ivy 缓存根目录（默认 ~/.ivy2）")
def list_resolvers(repositories: str | None, ivy_path: str | None) -> None:
    """按查询顺序列出解析链"""
    from pathlib import Path

    from submitdeps.core.resolve import create_repo_resolvers

    try:
        chain = create_repo_resolvers(
            repositories, Path(ivy_path) if ivy_path else None,
        )
    except SubmitDepsError as e:
        raise click.ClickException(str(e)) from e
    for i, r in enumerate(chain):
        click.echo(f"  {i:2d}  {r.name:16s} {r.root}")


@click.command()
@click.argument("coordinates")
def parse(coordinates: str) -> None:
    """校验坐标串并逐个输出"""
    from submitdeps.core.coordinate import extract_maven_coordinates
    from submitdeps.core.exclusion import is_spark_component

    try:
        coords = extract_maven_coordinates(coordinates)
    except SubmitDepsError as e:
        raise click.ClickException(str(e)) from e
    for c in coords:
        marker = "  (Spark 组件，将被忽略)" if is_spark_component(c) else ""
        click.echo(f"{c}{marker}")
