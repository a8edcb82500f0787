"""统一异常体系

所有业务异常继承 SubmitDepsError，CLI 层据此输出友好提示。
需要兼容调用方既有 except 子句的异常同时继承对应的内置异常。
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from submitdeps.core.coordinate import MavenCoordinate


class SubmitDepsError(Exception):
    """框架基础异常"""

    code: str = "UNKNOWN"

    def __init__(self, message: str) -> None:
        super().__init__(message)


class ConfigError(SubmitDepsError):
    """配置文件缺失或内容无效"""

    code = "CONFIG_ERROR"


class ValidationError(SubmitDepsError, ValueError):
    """输入数据校验失败"""

    code = "VALIDATION_ERROR"

    def __init__(self, message: str, details: list[str] | None = None) -> None:
        super().__init__(message)
        self.details = details or []


class InvalidCoordinateError(SubmitDepsError, ValueError):
    """坐标字符串格式错误（必须为 groupId:artifactId:version）"""

    code = "INVALID_COORDINATE"


class DependencyError(SubmitDepsError):
    """依赖解析失败"""

    code = "DEPENDENCY_ERROR"


class ResolutionNotFoundError(DependencyError, RuntimeError):
    """坐标格式正确，但解析链上所有仓库都找不到"""

    code = "ARTIFACT_NOT_FOUND"

    def __init__(self, unresolved: list[MavenCoordinate]) -> None:
        self.unresolved = list(unresolved)
        detail = ", ".join(
            f"{c.group_id}#{c.artifact_id};{c.version}: not found"
            for c in self.unresolved
        )
        super().__init__(f"[unresolved dependency: {detail}]")
