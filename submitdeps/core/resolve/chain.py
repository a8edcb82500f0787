"""解析链构建

固定前缀（顺序不可变）:
  0. local-m2-cache   本地 Maven 仓库
  1. local-ivy-cache  <ivy home>/local
  2. central          Maven Central
  3. spark-packages   Spark 社区包仓库
之后按输入顺序追加用户仓库 repo-1, repo-2, ...

排在前面的端点先被查询且命中优先，用户仓库永远排在默认仓库之后。
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

from submitdeps.core.config import Config, get_config
from submitdeps.core.protocols import Resolver
from submitdeps.core.resolve.repositories import (
    FileSystemResolver,
    LocalIvyResolver,
    repository_resolver,
)

logger = logging.getLogger(__name__)

CHAIN_NAME = "spark-list"


class ResolverChain:
    """有序的仓库端点列表"""

    def __init__(self, name: str = CHAIN_NAME) -> None:
        self.name = name
        self._resolvers: list[Resolver] = []

    def add(self, resolver: Resolver) -> None:
        self._resolvers.append(resolver)

    @property
    def resolvers(self) -> list[Resolver]:
        return list(self._resolvers)

    def names(self) -> list[str]:
        return [r.name for r in self._resolvers]

    def __len__(self) -> int:
        return len(self._resolvers)

    def __getitem__(self, index: int) -> Resolver:
        return self._resolvers[index]

    def __iter__(self) -> Iterator[Resolver]:
        return iter(self._resolvers)


def split_repositories(remote_repos: str | None) -> list[str]:
    """拆分逗号分隔的仓库列表，忽略空白项"""
    if not remote_repos:
        return []
    return [r.strip() for r in remote_repos.split(",") if r.strip()]


def create_repo_resolvers(
    remote_repos: str | None,
    ivy_home: Path | None = None,
    config: Config | None = None,
) -> ResolverChain:
    """构建解析链，长度恒为 4 + 用户仓库数"""
    cfg = config or get_config()
    ivy_home = ivy_home or cfg.ivy_home_path

    chain = ResolverChain()
    chain.add(FileSystemResolver("local-m2-cache", str(cfg.m2_repository)))
    chain.add(LocalIvyResolver("local-ivy-cache", str(ivy_home / "local")))
    chain.add(repository_resolver(
        "central", cfg.central_url, timeout=cfg.fetch_timeout,
    ))
    chain.add(repository_resolver(
        "spark-packages", cfg.spark_packages_url, timeout=cfg.fetch_timeout,
    ))

    for i, repo in enumerate(split_repositories(remote_repos), start=1):
        chain.add(repository_resolver(f"repo-{i}", repo, timeout=cfg.fetch_timeout))
        logger.info("已添加远程仓库 repo-%d: %s", i, repo)

    return chain
