"""宿主平台组件排除

Spark 自身及其一方模块已经在提交端 classpath 上，绝不能作为用户依赖再去远程解析。
SPARK_COMPONENTS 是维护中的模块名前缀表，新增 Spark 模块时在此追加即可。
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from fnmatch import fnmatchcase

from submitdeps.core.coordinate import MavenCoordinate

logger = logging.getLogger(__name__)

SPARK_GROUP_ID = "org.apache.spark"

# artifactId = "spark-" + 前缀 + Scala 二进制版本后缀（如 spark-core_2.10）
SPARK_COMPONENTS: tuple[str, ...] = (
    "bagel_",
    "catalyst_",
    "core_",
    "graphx_",
    "hive_",
    "mllib_",
    "repl_",
    "sql_",
    "streaming_",
    "yarn_",
    "network-common_",
    "network-shuffle_",
    "network-yarn_",
)

_SPARK_ARTIFACT_PREFIXES = tuple(f"spark-{c}" for c in SPARK_COMPONENTS)


@dataclass(frozen=True)
class ExclusionRule:
    """按 group/artifact 通配符排除传递依赖"""

    group: str = "*"
    artifact: str = "*"

    def matches(self, coordinate: MavenCoordinate) -> bool:
        return fnmatchcase(coordinate.group_id, self.group) and fnmatchcase(
            coordinate.artifact_id, self.artifact
        )


def is_spark_component(coordinate: MavenCoordinate) -> bool:
    """坐标是否属于 Spark 自身发行版"""
    return (
        coordinate.group_id == SPARK_GROUP_ID
        and coordinate.artifact_id.startswith(_SPARK_ARTIFACT_PREFIXES)
    )


def filter_spark_components(
    coordinates: Iterable[MavenCoordinate],
) -> list[MavenCoordinate]:
    """剔除 Spark 组件，保持其余坐标的原始顺序"""
    kept = []
    for c in coordinates:
        if is_spark_component(c):
            logger.debug("忽略 Spark 自身组件: %s", c)
            continue
        kept.append(c)
    return kept


def spark_exclusion_rules() -> list[ExclusionRule]:
    """传递依赖排除规则: Spark 组件 + Scala 运行时"""
    rules = [ExclusionRule(group="*", artifact="scala-library")]
    rules.extend(
        ExclusionRule(group=SPARK_GROUP_ID, artifact=f"{prefix}*")
        for prefix in _SPARK_ARTIFACT_PREFIXES
    )
    return rules


def matches_any(coordinate: MavenCoordinate, rules: Iterable[ExclusionRule]) -> bool:
    return any(rule.matches(coordinate) for rule in rules)
