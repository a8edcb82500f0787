"""合成模块描述

提交请求被表示为一个不发布任何制品的虚拟模块，用户坐标作为它的依赖声明挂在
某个配置（默认 "default"）下，排除规则同样挂在该模块上。
"""

from __future__ import annotations

from dataclasses import dataclass, field

from submitdeps.core.coordinate import MavenCoordinate
from submitdeps.core.exclusion import ExclusionRule

DEFAULT_CONF = "default"


@dataclass(frozen=True)
class DependencyDescriptor:
    """合成模块上的一条依赖声明"""

    coordinate: MavenCoordinate
    configuration: str = DEFAULT_CONF
    transitive: bool = True


@dataclass
class ModuleDescriptor:
    """提交请求对应的合成模块"""

    module: MavenCoordinate
    configurations: list[str] = field(default_factory=lambda: [DEFAULT_CONF])
    artifacts: list[str] = field(default_factory=list)
    dependencies: list[DependencyDescriptor] = field(default_factory=list)
    exclusion_rules: list[ExclusionRule] = field(default_factory=list)

    def dependencies_for(self, configuration: str) -> list[DependencyDescriptor]:
        return [d for d in self.dependencies if d.configuration == configuration]


def get_module_descriptor() -> ModuleDescriptor:
    """创建空的合成模块 org.apache.spark:spark-submit-parent:1.0"""
    return ModuleDescriptor(
        module=MavenCoordinate("org.apache.spark", "spark-submit-parent", "1.0"),
    )


def add_dependencies_to_ivy(
    md: ModuleDescriptor,
    artifacts: list[MavenCoordinate],
    ivy_conf_name: str = DEFAULT_CONF,
    *,
    transitive: bool = True,
) -> None:
    """每个坐标追加一条依赖声明，不去重，保持输入顺序"""
    if ivy_conf_name not in md.configurations:
        md.configurations.append(ivy_conf_name)
    for coordinate in artifacts:
        md.dependencies.append(
            DependencyDescriptor(coordinate, ivy_conf_name, transitive)
        )


def add_exclusion_rules(md: ModuleDescriptor, rules: list[ExclusionRule]) -> None:
    md.exclusion_rules.extend(rules)
