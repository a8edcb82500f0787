"""领域协议定义

解析链上的每个仓库端点都满足 Resolver 协议，引擎按链顺序逐个尝试，
不关心端点背后是本地目录、ivy 本地仓库还是 HTTP 仓库。
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from submitdeps.core.coordinate import MavenCoordinate


class Resolver(Protocol):
    """仓库端点协议"""

    name: str
    root: str

    @property
    def descriptor_kind(self) -> str:
        """描述文件类型: "pom" 或 "ivy" """
        ...

    def attempt_resolve(self, coordinate: MavenCoordinate, dest: Path) -> Path | None:
        """尝试把制品拉取到 dest，命中返回 dest，未命中返回 None"""
        ...

    def read_descriptor(self, coordinate: MavenCoordinate) -> bytes | None:
        """读取模块描述文件（POM / ivy.xml），不存在返回 None"""
        ...
