"""依赖解析引擎

流程:
  坐标串 → 解析校验 → 剔除 Spark 组件 →（为空则直接返回空串，不碰任何仓库）
        → 构建解析链 → 合成模块描述 → 逐个解析（本地缓存优先，其次按链顺序首个命中）
        → 可选传递解析 → retrieve 到 <ivy home>/jars → 路径串

任何一个坐标在整条链上都找不到即整体失败，不返回部分结果。

用法:
    from submitdeps.core.resolve import resolve_maven_coordinates

    classpath = resolve_maven_coordinates(
        "com.databricks:spark-csv_2.10:1.0.3",
        remote_repos="https://repo.example.com/maven",
        ivy_path="/tmp/ivy",
    )
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from collections import deque
from pathlib import Path

from submitdeps.core.config import Config, get_config
from submitdeps.core.coordinate import MavenCoordinate, extract_maven_coordinates
from submitdeps.core.exceptions import ResolutionNotFoundError
from submitdeps.core.exclusion import (
    ExclusionRule,
    filter_spark_components,
    matches_any,
    spark_exclusion_rules,
)
from submitdeps.core.resolve.cache import CacheEntry, ResolutionCache
from submitdeps.core.resolve.chain import ResolverChain, create_repo_resolvers
from submitdeps.core.resolve.descriptors import parse_descriptor
from submitdeps.core.resolve.models import ResolvedArtifact
from submitdeps.core.resolve.module import (
    DEFAULT_CONF,
    ModuleDescriptor,
    add_dependencies_to_ivy,
    add_exclusion_rules,
    get_module_descriptor,
)
from submitdeps.core.resolve.paths import resolve_dependency_paths

logger = logging.getLogger(__name__)


class DependencyResolver:
    """坐标解析器

    log 为注入的日志出口，默认使用模块 logger；测试可注入独立 logger 捕获输出。
    """

    def __init__(
        self,
        config: Config | None = None,
        log: logging.Logger | None = None,
    ) -> None:
        self.config = config or get_config()
        self.log = log or logger

    def resolve(
        self,
        coordinates: str | None,
        remote_repos: str | None = None,
        ivy_path: str | None = None,
        transitive: bool = True,
    ) -> str:
        """解析坐标串，返回以 os.pathsep 拼接的本地 jar 路径"""
        artifacts = self.resolve_artifacts(
            coordinates, remote_repos, ivy_path, transitive,
        )
        return resolve_dependency_paths(artifacts)

    def resolve_artifacts(
        self,
        coordinates: str | None,
        remote_repos: str | None = None,
        ivy_path: str | None = None,
        transitive: bool = True,
    ) -> list[ResolvedArtifact]:
        if coordinates is None or not coordinates.strip():
            return []

        requested = filter_spark_components(extract_maven_coordinates(coordinates))
        if not requested:
            self.log.info("请求的坐标均为 Spark 自身组件，无需解析")
            return []

        ivy_home = Path(ivy_path) if ivy_path else self.config.ivy_home_path
        cache = ResolutionCache(ivy_home)
        cache.ensure()
        self.log.info("Ivy 缓存目录: %s", cache.cache_dir)
        self.log.info("jar 包存放目录: %s", cache.retrieve_dir)

        chain = create_repo_resolvers(remote_repos, ivy_home, self.config)

        md = get_module_descriptor()
        add_exclusion_rules(md, spark_exclusion_rules())
        add_dependencies_to_ivy(md, requested, DEFAULT_CONF, transitive=transitive)
        for dep in md.dependencies:
            self.log.info("已加入依赖: %s", dep.coordinate)

        resolved = self._resolve_module(md, chain, cache)

        artifacts = [
            ResolvedArtifact(c, cache.retrieve(c), entry.resolver)
            for c, entry in resolved
        ]
        self.log.info(
            "解析完成: 请求 %d 个, 共 %d 个制品", len(requested), len(artifacts),
        )
        return artifacts

    def _resolve_module(
        self,
        md: ModuleDescriptor,
        chain: ResolverChain,
        cache: ResolutionCache,
    ) -> list[tuple[MavenCoordinate, CacheEntry]]:
        """广度优先解析；同一 group:artifact 只解析一次，先声明的版本胜出"""
        queue: deque[tuple[MavenCoordinate, tuple[ExclusionRule, ...], bool]] = deque(
            (d.coordinate, (), d.transitive) for d in md.dependencies_for(DEFAULT_CONF)
        )
        seen: dict[str, str] = {}
        resolved: list[tuple[MavenCoordinate, CacheEntry]] = []
        unresolved: list[MavenCoordinate] = []

        while queue:
            coordinate, exclusions, transitive = queue.popleft()
            chosen = seen.get(coordinate.module_id)
            if chosen is not None:
                if chosen != coordinate.version:
                    self.log.debug(
                        "%s 已选定版本 %s，忽略 %s", coordinate.module_id,
                        chosen, coordinate.version,
                    )
                continue
            seen[coordinate.module_id] = coordinate.version

            entry = self._resolve_one(coordinate, chain, cache)
            if entry is None:
                unresolved.append(coordinate)
                continue
            resolved.append((coordinate, entry))

            if not transitive or entry.descriptor is None:
                continue
            for child, child_exclusions in self._declared_children(
                coordinate, entry, md.exclusion_rules, exclusions,
            ):
                queue.append((child, child_exclusions, True))

        if unresolved:
            for c in unresolved:
                self.log.error("未解析的依赖: %s", c)
            raise ResolutionNotFoundError(unresolved)
        return resolved

    def _resolve_one(
        self,
        coordinate: MavenCoordinate,
        chain: ResolverChain,
        cache: ResolutionCache,
    ) -> CacheEntry | None:
        cached = cache.lookup(coordinate)
        if cached is not None:
            self.log.info("缓存命中: %s (来源 %s)", coordinate, cached.resolver)
            return cached

        dest = cache.artifact_path(coordinate)
        for resolver in chain:
            if resolver.attempt_resolve(coordinate, dest) is None:
                self.log.debug("%s 未命中: %s", resolver.name, coordinate)
                continue
            descriptor = resolver.read_descriptor(coordinate)
            cache.store(
                coordinate,
                resolver=resolver.name,
                descriptor_kind=resolver.descriptor_kind,
                descriptor=descriptor,
            )
            self.log.info("%s 命中: %s", resolver.name, coordinate)
            return CacheEntry(
                artifact=dest,
                resolver=resolver.name,
                descriptor_kind=resolver.descriptor_kind,
                descriptor=descriptor,
            )
        return None

    def _declared_children(
        self,
        parent: MavenCoordinate,
        entry: CacheEntry,
        module_rules: list[ExclusionRule],
        inherited: tuple[ExclusionRule, ...],
    ) -> list[tuple[MavenCoordinate, tuple[ExclusionRule, ...]]]:
        try:
            declared = parse_descriptor(entry.descriptor_kind, entry.descriptor or b"")
        except ET.ParseError as e:
            self.log.warning("%s 的描述文件无法解析，跳过传递依赖: %s", parent, e)
            return []

        children = []
        for dep in declared:
            if not dep.is_runtime:
                continue
            child = dep.coordinate
            if matches_any(child, module_rules) or matches_any(child, inherited):
                self.log.debug("排除传递依赖 %s (来自 %s)", child, parent)
                continue
            children.append((child, inherited + dep.exclusions))
        return children


def resolve_maven_coordinates(
    coordinates: str | None,
    remote_repos: str | None = None,
    ivy_path: str | None = None,
    transitive: bool = True,
    *,
    config: Config | None = None,
    log: logging.Logger | None = None,
) -> str:
    """解析坐标串为 classpath 路径串（无需解析时返回空串）

    Raises:
        InvalidCoordinateError: 坐标格式错误，发生在任何 IO 之前
        ResolutionNotFoundError: 有坐标在整条解析链上都不存在
    """
    return DependencyResolver(config=config, log=log).resolve(
        coordinates, remote_repos, ivy_path, transitive,
    )
