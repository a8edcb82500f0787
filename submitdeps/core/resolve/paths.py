"""解析结果 → classpath 路径串"""

from __future__ import annotations

import os
from collections.abc import Sequence

from submitdeps.core.resolve.models import ResolvedArtifact


def resolve_dependency_paths(artifacts: Sequence[ResolvedArtifact]) -> str:
    """以平台 classpath 分隔符（os.pathsep）拼接本地路径，保持顺序；空列表返回空串"""
    return os.pathsep.join(str(a.path) for a in artifacts)
