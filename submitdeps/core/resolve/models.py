"""解析结果数据模型"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from submitdeps.core.coordinate import MavenCoordinate


@dataclass(frozen=True)
class ResolvedArtifact:
    """已解析并 retrieve 到本地的制品"""

    coordinate: MavenCoordinate
    path: Path
    resolver: str = ""
