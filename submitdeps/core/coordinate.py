"""Maven 坐标解析

坐标格式: groupId:artifactId:version，多个坐标以逗号分隔。
三段都必须非空（去除首尾空白后），段数不为 3 一律拒绝。
各段会拼进仓库与缓存路径，含路径分隔符、".." 或 groupId 含空分段的同样拒绝。
"""

from __future__ import annotations

from dataclasses import dataclass

from submitdeps.core.exceptions import InvalidCoordinateError

_PATH_UNSAFE = ("/", "\\", "..")


def _check_parts(group_id: str, artifact_id: str, version: str) -> None:
    text = f"{group_id}:{artifact_id}:{version}"
    for part in (group_id, artifact_id, version):
        if not part or part == "." or any(s in part for s in _PATH_UNSAFE):
            raise InvalidCoordinateError(f"坐标包含非法的路径字符: '{text}'")
    # ".evil.x" 拆目录后会变成绝对路径
    if not all(group_id.split(".")):
        raise InvalidCoordinateError(f"groupId 存在空的分段: '{text}'")


@dataclass(frozen=True)
class MavenCoordinate:
    """单个 Maven 制品坐标"""

    group_id: str
    artifact_id: str
    version: str

    def __post_init__(self) -> None:
        _check_parts(self.group_id, self.artifact_id, self.version)

    def __str__(self) -> str:
        return f"{self.group_id}:{self.artifact_id}:{self.version}"

    @property
    def module_id(self) -> str:
        """不含版本的模块标识，用于传递依赖去重"""
        return f"{self.group_id}:{self.artifact_id}"

    @classmethod
    def parse(cls, text: str) -> MavenCoordinate:
        splits = text.split(":")
        if len(splits) != 3 or not all(s.strip() for s in splits):
            raise InvalidCoordinateError(
                f"坐标格式错误: '{text}'，必须为 'groupId:artifactId:version'"
            )
        group_id, artifact_id, version = (s.strip() for s in splits)
        return cls(group_id, artifact_id, version)


def extract_maven_coordinates(coordinates: str) -> list[MavenCoordinate]:
    """解析逗号分隔的坐标串

    Raises:
        InvalidCoordinateError: 任一坐标段数不为 3、存在空白段或含非法路径字符
    """
    return [MavenCoordinate.parse(p) for p in coordinates.split(",")]
