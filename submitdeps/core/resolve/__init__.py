"""依赖解析模块

- module.py:       合成模块描述
- repositories.py: 仓库端点（本地目录 / ivy 本地仓库 / HTTP）
- chain.py:        解析链构建
- descriptors.py:  POM / ivy.xml 解析
- cache.py:        本地解析缓存
- engine.py:       解析引擎
- paths.py:        路径串拼接
"""

from submitdeps.core.resolve.chain import ResolverChain, create_repo_resolvers
from submitdeps.core.resolve.engine import DependencyResolver, resolve_maven_coordinates
from submitdeps.core.resolve.models import ResolvedArtifact
from submitdeps.core.resolve.module import (
    ModuleDescriptor,
    add_dependencies_to_ivy,
    get_module_descriptor,
)
from submitdeps.core.resolve.paths import resolve_dependency_paths

__all__ = [
    "DependencyResolver",
    "ModuleDescriptor",
    "ResolvedArtifact",
    "ResolverChain",
    "add_dependencies_to_ivy",
    "create_repo_resolvers",
    "get_module_descriptor",
    "resolve_dependency_paths",
    "resolve_maven_coordinates",
]
