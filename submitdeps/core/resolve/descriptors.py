"""模块描述文件解析（POM / ivy.xml）

只提取传递解析需要的信息：运行期依赖、optional 标记、依赖级 exclusions。
父 POM 继承与 dependencyManagement 不展开，缺少版本号的依赖会被跳过并告警。
"""

from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field

from submitdeps.core.coordinate import MavenCoordinate
from submitdeps.core.exceptions import InvalidCoordinateError
from submitdeps.core.exclusion import ExclusionRule

logger = logging.getLogger(__name__)

POM = "pom"
IVY = "ivy"

# 进入运行期 classpath 的 scope
RUNTIME_SCOPES = frozenset(("compile", "runtime"))

_PROPERTY_RE = re.compile(r"\$\{([^}]+)\}")


@dataclass(frozen=True)
class DeclaredDependency:
    """描述文件中声明的一条依赖"""

    coordinate: MavenCoordinate
    scope: str = "compile"
    optional: bool = False
    exclusions: tuple[ExclusionRule, ...] = field(default_factory=tuple)

    @property
    def is_runtime(self) -> bool:
        return self.scope in RUNTIME_SCOPES and not self.optional


def parse_descriptor(kind: str, content: bytes) -> list[DeclaredDependency]:
    """按描述文件类型分发解析"""
    if kind == POM:
        return parse_pom(content)
    if kind == IVY:
        return parse_ivy(content)
    raise ValueError(f"不支持的描述文件类型: {kind}")


# =========================================================================
# POM
# =========================================================================


def _namespace(root: ET.Element) -> str:
    if root.tag.startswith("{"):
        return root.tag[: root.tag.index("}") + 1]
    return ""


def _text(parent: ET.Element | None, tag: str, ns: str) -> str:
    if parent is None:
        return ""
    el = parent.find(f"{ns}{tag}")
    if el is None or el.text is None:
        return ""
    return el.text.strip()


def _pom_properties(root: ET.Element, ns: str) -> dict[str, str]:
    parent = root.find(f"{ns}parent")
    group_id = _text(root, "groupId", ns) or _text(parent, "groupId", ns)
    version = _text(root, "version", ns) or _text(parent, "version", ns)
    props = {
        "project.groupId": group_id,
        "pom.groupId": group_id,
        "groupId": group_id,
        "project.version": version,
        "pom.version": version,
        "version": version,
        "project.artifactId": _text(root, "artifactId", ns),
        "project.parent.version": _text(parent, "version", ns),
    }
    props_el = root.find(f"{ns}properties")
    if props_el is not None:
        for child in props_el:
            if not isinstance(child.tag, str):
                continue
            key = child.tag[len(ns):] if child.tag.startswith(ns) else child.tag
            props[key] = (child.text or "").strip()
    return props


def _substitute(value: str, props: dict[str, str]) -> str:
    # 属性值可能继续引用其他属性，最多展开几轮避免循环引用
    for _ in range(5):
        expanded = _PROPERTY_RE.sub(lambda m: props.get(m.group(1), m.group(0)), value)
        if expanded == value:
            break
        value = expanded
    return value


def parse_pom(content: bytes) -> list[DeclaredDependency]:
    """解析 POM 的 <dependencies>（不含 dependencyManagement）"""
    root = ET.fromstring(content)
    ns = _namespace(root)
    props = _pom_properties(root, ns)

    deps_el = root.find(f"{ns}dependencies")
    if deps_el is None:
        return []

    declared: list[DeclaredDependency] = []
    for dep in deps_el.findall(f"{ns}dependency"):
        group_id = _substitute(_text(dep, "groupId", ns), props)
        artifact_id = _substitute(_text(dep, "artifactId", ns), props)
        version = _substitute(_text(dep, "version", ns), props)
        if not group_id or not artifact_id:
            continue
        if not version or _PROPERTY_RE.search(version):
            logger.warning(
                "跳过版本不明确的依赖: %s:%s (version=%r)",
                group_id, artifact_id, version,
            )
            continue
        try:
            coordinate = MavenCoordinate(group_id, artifact_id, version)
        except InvalidCoordinateError as e:
            logger.warning("跳过非法依赖声明: %s", e)
            continue

        exclusions = tuple(
            ExclusionRule(
                group=_text(ex, "groupId", ns) or "*",
                artifact=_text(ex, "artifactId", ns) or "*",
            )
            for ex in dep.findall(f"{ns}exclusions/{ns}exclusion")
        )
        declared.append(DeclaredDependency(
            coordinate=coordinate,
            scope=_text(dep, "scope", ns) or "compile",
            optional=_text(dep, "optional", ns).lower() == "true",
            exclusions=exclusions,
        ))
    return declared


# =========================================================================
# ivy.xml
# =========================================================================


def _ivy_scope(conf: str) -> str:
    """把 ivy 的 conf 映射粗略折算为 Maven scope"""
    if not conf:
        return "compile"
    master = conf.split("->", 1)[0].strip()
    confs = {c.strip() for c in master.split(",")}
    if confs & {"*", "default", "compile", "runtime", "master"}:
        return "compile"
    return "test" if "test" in confs else "provided"


def parse_ivy(content: bytes) -> list[DeclaredDependency]:
    """解析 ivy.xml 的 <dependencies>"""
    root = ET.fromstring(content)
    deps_el = root.find("dependencies")
    if deps_el is None:
        return []

    declared: list[DeclaredDependency] = []
    for dep in deps_el.findall("dependency"):
        org = dep.get("org", "").strip()
        name = dep.get("name", "").strip()
        rev = dep.get("rev", "").strip()
        if not org or not name or not rev:
            logger.warning("跳过不完整的 ivy 依赖: org=%r name=%r rev=%r", org, name, rev)
            continue
        try:
            coordinate = MavenCoordinate(org, name, rev)
        except InvalidCoordinateError as e:
            logger.warning("跳过非法依赖声明: %s", e)
            continue
        exclusions = tuple(
            ExclusionRule(group=ex.get("org", "*"), artifact=ex.get("module", "*"))
            for ex in dep.findall("exclude")
        )
        declared.append(DeclaredDependency(
            coordinate=coordinate,
            scope=_ivy_scope(dep.get("conf", "")),
            exclusions=exclusions,
        ))
    return declared
