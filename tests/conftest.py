"""测试共享 fixture — 隔离配置 + 临时仓库构造

  isolated_config       默认仓库全部指向 tmp 下的空目录，测试永不访问网络
  maven_repo(root, c)   在 root 下按 Maven 布局写入 jar + pom
  ivy_repo(root, c)     在 root 下按 ivy 布局写入 jar + ivy.xml
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from pathlib import Path

import pytest

import submitdeps.core.config as cfgmod
from submitdeps.core.coordinate import MavenCoordinate

POM_NS = "http://maven.apache.org/POM/4.0.0"


def _pom(c: MavenCoordinate, deps: Sequence[MavenCoordinate]) -> str:
    dep_xml = "".join(
        "<dependency>"
        f"<groupId>{d.group_id}</groupId>"
        f"<artifactId>{d.artifact_id}</artifactId>"
        f"<version>{d.version}</version>"
        "</dependency>"
        for d in deps
    )
    return (
        f'<?xml version="1.0" encoding="UTF-8"?>\n<project xmlns="{POM_NS}">'
        "<modelVersion>4.0.0</modelVersion>"
        f"<groupId>{c.group_id}</groupId>"
        f"<artifactId>{c.artifact_id}</artifactId>"
        f"<version>{c.version}</version>"
        f"<dependencies>{dep_xml}</dependencies>"
        "</project>"
    )


def _ivy_xml(c: MavenCoordinate, deps: Sequence[MavenCoordinate]) -> str:
    dep_xml = "".join(
        f'<dependency org="{d.group_id}" name="{d.artifact_id}" rev="{d.version}"/>'
        for d in deps
    )
    return (
        '<ivy-module version="2.0">'
        f'<info organisation="{c.group_id}" module="{c.artifact_id}" revision="{c.version}"/>'
        f"<dependencies>{dep_xml}</dependencies>"
        "</ivy-module>"
    )


def write_maven_artifact(
    root: Path,
    c: MavenCoordinate,
    deps: Sequence[MavenCoordinate] = (),
    pom: str | None = None,
) -> Path:
    base = root / c.group_id.replace(".", "/") / c.artifact_id / c.version
    base.mkdir(parents=True, exist_ok=True)
    jar = base / f"{c.artifact_id}-{c.version}.jar"
    jar.write_bytes(f"jar:{c}".encode())
    (base / f"{c.artifact_id}-{c.version}.pom").write_text(
        pom if pom is not None else _pom(c, deps), encoding="utf-8",
    )
    return jar


def write_ivy_artifact(
    root: Path,
    c: MavenCoordinate,
    deps: Sequence[MavenCoordinate] = (),
) -> Path:
    base = root / c.group_id / c.artifact_id / c.version
    (base / "jars").mkdir(parents=True, exist_ok=True)
    (base / "ivys").mkdir(parents=True, exist_ok=True)
    jar = base / "jars" / f"{c.artifact_id}.jar"
    jar.write_bytes(f"jar:{c}".encode())
    (base / "ivys" / "ivy.xml").write_text(_ivy_xml(c, deps), encoding="utf-8")
    return jar


@pytest.fixture()
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> cfgmod.Config:
    """独立的配置与缓存目录，远程默认仓库替换为本地空目录"""
    for d in ("m2", "central", "spark-packages"):
        (tmp_path / d).mkdir()
    cfg = cfgmod.Config(
        ivy_home=str(tmp_path / "ivy-home"),
        m2_path=str(tmp_path / "m2"),
        central_url=(tmp_path / "central").as_uri(),
        spark_packages_url=(tmp_path / "spark-packages").as_uri(),
    )
    monkeypatch.setattr(cfgmod, "_current", cfg)
    return cfg


@pytest.fixture()
def maven_repo() -> Callable[..., Path]:
    """Maven 布局仓库工厂 fixture

    用法:
        def test_xxx(self, tmp_path, maven_repo):
            maven_repo(tmp_path / "repo", coord, deps=[other])
    """
    return write_maven_artifact


@pytest.fixture()
def ivy_repo() -> Callable[..., Path]:
    """ivy 布局仓库工厂 fixture"""
    return write_ivy_artifact


@pytest.fixture(autouse=True)
def _restore_root_logging():
    """CLI 会重置根日志器并挂自己的 handler，用例结束后恢复原状"""
    root = logging.getLogger()
    saved_handlers = root.handlers[:]
    saved_level = root.level
    yield
    for handler in root.handlers[:]:
        if handler not in saved_handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in saved_handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(saved_level)
