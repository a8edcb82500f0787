"""合成模块描述测试"""

from __future__ import annotations

from submitdeps.core.coordinate import MavenCoordinate, extract_maven_coordinates
from submitdeps.core.exclusion import ExclusionRule
from submitdeps.core.resolve.module import (
    DEFAULT_CONF,
    add_dependencies_to_ivy,
    add_exclusion_rules,
    get_module_descriptor,
)


class TestModuleDescriptor:
    def test_new_descriptor_is_empty(self) -> None:
        md = get_module_descriptor()
        assert md.module == MavenCoordinate("org.apache.spark", "spark-submit-parent", "1.0")
        assert md.dependencies == []
        assert md.artifacts == []
        assert md.configurations == [DEFAULT_CONF]

    def test_add_dependencies(self) -> None:
        md = get_module_descriptor()
        artifacts = extract_maven_coordinates(
            "com.databricks:spark-csv_2.10:0.1,com.databricks:spark-avro_2.10:0.1",
        )
        add_dependencies_to_ivy(md, artifacts, "default")
        assert len(md.dependencies) == 2
        assert [d.coordinate for d in md.dependencies] == artifacts

    def test_duplicates_kept(self) -> None:
        md = get_module_descriptor()
        c = MavenCoordinate("com.a", "lib", "1.0")
        add_dependencies_to_ivy(md, [c, c], "default")
        assert len(md.dependencies) == 2

    def test_custom_configuration(self) -> None:
        md = get_module_descriptor()
        add_dependencies_to_ivy(md, [MavenCoordinate("com.a", "lib", "1.0")], "runtime")
        assert "runtime" in md.configurations
        assert md.dependencies_for("runtime")[0].configuration == "runtime"
        assert md.dependencies_for(DEFAULT_CONF) == []

    def test_transitive_flag(self) -> None:
        md = get_module_descriptor()
        add_dependencies_to_ivy(
            md, [MavenCoordinate("com.a", "lib", "1.0")], transitive=False,
        )
        assert md.dependencies[0].transitive is False

    def test_exclusion_rules(self) -> None:
        md = get_module_descriptor()
        add_exclusion_rules(md, [ExclusionRule("*", "scala-library")])
        assert md.exclusion_rules == [ExclusionRule("*", "scala-library")]
