"""仓库端点实现

两种目录布局:
  - Maven:  <group 按 . 拆目录>/<artifact>/<version>/<artifact>-<version>.jar (+ .pom)
  - ivy:    <org>/<module>/<rev>/jars/<module>.jar (+ ivys/ivy.xml)

两种传输方式:
  - 本地目录（含 file: URI）: FileSystemResolver / LocalIvyResolver
  - http/https:              HttpResolver
"""

from __future__ import annotations

import logging
import urllib.error
import urllib.request
from pathlib import Path
from urllib.parse import urlparse

from submitdeps import __version__
from submitdeps.core.coordinate import MavenCoordinate
from submitdeps.core.resolve.descriptors import IVY, POM
from submitdeps.utils.net import (
    ensure_trailing_slash,
    is_local,
    validate_url_scheme,
)
from submitdeps.utils.yaml_io import atomic_write_stream

logger = logging.getLogger(__name__)


def maven_layout(coordinate: MavenCoordinate, ext: str) -> str:
    """Maven 仓库中的相对路径"""
    group_dir = coordinate.group_id.replace(".", "/")
    a, v = coordinate.artifact_id, coordinate.version
    return f"{group_dir}/{a}/{v}/{a}-{v}.{ext}"


def ivy_layout(coordinate: MavenCoordinate, kind: str) -> str:
    """ivy 本地仓库中的相对路径

    [organisation]/[module]/[revision]/[type]s/[artifact](-[classifier]).[ext]
    """
    base = f"{coordinate.group_id}/{coordinate.artifact_id}/{coordinate.version}"
    if kind == "ivy":
        return f"{base}/ivys/ivy.xml"
    return f"{base}/jars/{coordinate.artifact_id}.jar"


def root_to_path(root: str) -> Path:
    """本地仓库根（普通路径或 file: URI）转为 Path"""
    parsed = urlparse(root)
    if parsed.scheme == "file":
        return Path(urllib.request.url2pathname(parsed.path))
    return Path(root)


class FileSystemResolver:
    """Maven 布局的本地目录仓库（~/.m2/repository 或用户给出的目录）"""

    descriptor_kind = POM

    def __init__(self, name: str, root: str) -> None:
        self.name = name
        self.root = ensure_trailing_slash(root)
        self._base = root_to_path(self.root)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, root={self.root!r})"

    def artifact_location(self, coordinate: MavenCoordinate) -> str:
        return maven_layout(coordinate, "jar")

    def descriptor_location(self, coordinate: MavenCoordinate) -> str:
        return maven_layout(coordinate, "pom")

    def attempt_resolve(self, coordinate: MavenCoordinate, dest: Path) -> Path | None:
        src = self._base / self.artifact_location(coordinate)
        if not src.is_file():
            return None
        with open(src, "rb") as f:
            atomic_write_stream(dest, f)
        return dest

    def read_descriptor(self, coordinate: MavenCoordinate) -> bytes | None:
        src = self._base / self.descriptor_location(coordinate)
        if not src.is_file():
            return None
        return src.read_bytes()


class LocalIvyResolver(FileSystemResolver):
    """ivy 布局的本地仓库（<ivy home>/local）"""

    descriptor_kind = IVY

    def artifact_location(self, coordinate: MavenCoordinate) -> str:
        return ivy_layout(coordinate, "jar")

    def descriptor_location(self, coordinate: MavenCoordinate) -> str:
        return ivy_layout(coordinate, "ivy")


class HttpResolver:
    """Maven 布局的远程仓库

    404 视为未命中；其他网络错误记录告警后同样视为未命中，交给链上的下一个端点。
    """

    descriptor_kind = POM

    def __init__(self, name: str, root: str, timeout: int = 30) -> None:
        validate_url_scheme(root, context=f"resolver {name}")
        self.name = name
        self.root = ensure_trailing_slash(root)
        self.timeout = timeout

    def __repr__(self) -> str:
        return f"HttpResolver(name={self.name!r}, root={self.root!r})"

    def _open(self, location: str):
        url = self.root + location
        req = urllib.request.Request(
            url, headers={"User-Agent": f"submitdeps/{__version__}"},
        )
        try:
            return urllib.request.urlopen(req, timeout=self.timeout)  # nosec B310
        except urllib.error.HTTPError as e:
            if e.code != 404:
                logger.warning("[%s] 请求失败 %s: HTTP %d", self.name, url, e.code)
            return None
        except (urllib.error.URLError, OSError) as e:
            logger.warning("[%s] 无法访问 %s: %s", self.name, url, e)
            return None

    def attempt_resolve(self, coordinate: MavenCoordinate, dest: Path) -> Path | None:
        resp = self._open(maven_layout(coordinate, "jar"))
        if resp is None:
            return None
        try:
            with resp:
                atomic_write_stream(dest, resp)
        except OSError as e:
            logger.warning("[%s] 下载中断 %s: %s", self.name, coordinate, e)
            return None
        return dest

    def read_descriptor(self, coordinate: MavenCoordinate) -> bytes | None:
        resp = self._open(maven_layout(coordinate, "pom"))
        if resp is None:
            return None
        try:
            with resp:
                return resp.read()
        except OSError as e:
            logger.warning("[%s] 读取描述文件失败 %s: %s", self.name, coordinate, e)
            return None


def repository_resolver(name: str, root: str, timeout: int = 30):
    """按仓库根的协议选择端点实现

    Raises:
        ValidationError: 既不是本地路径也不是 http/https 的仓库地址（如 ftp://）
    """
    if is_local(root):
        return FileSystemResolver(name, root)
    # 非本地地址一律交给 HttpResolver，由其拒绝 http/https 以外的协议
    return HttpResolver(name, root, timeout=timeout)
