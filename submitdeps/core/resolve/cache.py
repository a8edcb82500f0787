"""本地解析缓存

目录布局（<root> 为 ivy home，默认 ~/.ivy2）:
  <root>/cache/<group>/<artifact>/jars/<artifact>-<version>.jar
  <root>/cache/<group>/<artifact>/<kind>-<version>.xml     描述文件（pom / ivy）
  <root>/cache/<group>/<artifact>/resolved-<version>.yml   记账: 来源端点、描述文件类型
  <root>/jars/<group>_<artifact>-<version>.jar             retrieve 目标

缓存可被同一主机上多个提交进程并发读写，所有写入均为原子替换。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import yaml

from submitdeps.core.coordinate import MavenCoordinate
from submitdeps.utils.yaml_io import atomic_write_bytes, atomic_write_stream, load_yaml, save_yaml

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CacheEntry:
    """缓存命中结果"""

    artifact: Path
    resolver: str
    descriptor_kind: str
    descriptor: bytes | None


class ResolutionCache:
    """ivy home 下的解析缓存"""

    def __init__(self, root: Path) -> None:
        self.root = Path(root)

    @property
    def cache_dir(self) -> Path:
        return self.root / "cache"

    @property
    def retrieve_dir(self) -> Path:
        return self.root / "jars"

    def _module_dir(self, c: MavenCoordinate) -> Path:
        return self.cache_dir / c.group_id / c.artifact_id

    def artifact_path(self, c: MavenCoordinate) -> Path:
        return self._module_dir(c) / "jars" / f"{c.artifact_id}-{c.version}.jar"

    def descriptor_path(self, c: MavenCoordinate, kind: str) -> Path:
        return self._module_dir(c) / f"{kind}-{c.version}.xml"

    def _record_path(self, c: MavenCoordinate) -> Path:
        return self._module_dir(c) / f"resolved-{c.version}.yml"

    def retrieve_path(self, c: MavenCoordinate) -> Path:
        """retrieve 模式: [organization]_[artifact]-[revision].[ext]"""
        return self.retrieve_dir / f"{c.group_id}_{c.artifact_id}-{c.version}.jar"

    def ensure(self) -> None:
        """首次使用时创建目录，从不删除"""
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        self.retrieve_dir.mkdir(parents=True, exist_ok=True)

    def lookup(self, c: MavenCoordinate) -> CacheEntry | None:
        """查找已解析过的模块；记账文件与制品缺一不可"""
        record_path = self._record_path(c)
        try:
            record = load_yaml(record_path)
        except (yaml.YAMLError, ValueError) as e:
            logger.warning("解析记录损坏，按未命中处理: %s (%s)", record_path, e)
            return None
        artifact = self.artifact_path(c)
        if not record or not artifact.is_file():
            return None
        kind = record.get("descriptor_kind", "")
        descriptor = None
        if record.get("has_descriptor") and kind:
            desc_path = self.descriptor_path(c, kind)
            if desc_path.is_file():
                descriptor = desc_path.read_bytes()
        return CacheEntry(
            artifact=artifact,
            resolver=str(record.get("resolver", "")),
            descriptor_kind=kind,
            descriptor=descriptor,
        )

    def store(
        self,
        c: MavenCoordinate,
        *,
        resolver: str,
        descriptor_kind: str,
        descriptor: bytes | None,
    ) -> None:
        """制品已由端点写入 artifact_path 后，补写描述文件与记账"""
        if descriptor is not None:
            atomic_write_bytes(self.descriptor_path(c, descriptor_kind), descriptor)
        save_yaml(self._record_path(c), {
            "coordinate": str(c),
            "resolver": resolver,
            "descriptor_kind": descriptor_kind,
            "has_descriptor": descriptor is not None,
        })

    def retrieve(self, c: MavenCoordinate) -> Path:
        """把缓存中的制品复制到 retrieve 目录，返回目标路径

        每次都重新复制，缓存中同名制品被替换后 jars/ 下不会残留旧内容。
        """
        src = self.artifact_path(c)
        dest = self.retrieve_path(c)
        with open(src, "rb") as f:
            atomic_write_stream(dest, f)
        return dest
