"""集中配置管理

默认仓库地址、本地缓存目录、拉取超时统一在此定义。
支持从 YAML 文件加载 + 编程式覆盖。
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path

from submitdeps.core.exceptions import ConfigError
from submitdeps.utils.yaml_io import load_yaml

logger = logging.getLogger(__name__)

DEFAULT_CENTRAL_URL = "https://repo1.maven.org/maven2/"
DEFAULT_SPARK_PACKAGES_URL = "https://repos.spark-packages.org/"


@dataclass
class Config:
    """解析器全局配置"""

    # 目录（留空则使用 ~/.ivy2 与 ~/.m2/repository）
    ivy_home: str = ""
    m2_path: str = ""

    # 默认远程仓库
    central_url: str = DEFAULT_CENTRAL_URL
    spark_packages_url: str = DEFAULT_SPARK_PACKAGES_URL

    # 解析
    fetch_timeout: int = 30
    transitive: bool = True

    # 自定义扩展 (放不到字段里的配置项)
    extra: dict = field(default_factory=dict)

    @property
    def ivy_home_path(self) -> Path:
        if self.ivy_home:
            return Path(self.ivy_home).expanduser()
        return Path.home() / ".ivy2"

    @property
    def m2_repository(self) -> Path:
        if self.m2_path:
            return Path(self.m2_path).expanduser()
        return Path.home() / ".m2" / "repository"

    @classmethod
    def from_file(cls, path: str = "configs/submitdeps.yml") -> Config:
        """从 YAML 文件加载配置，不存在则返回默认"""
        data = load_yaml(path)
        if not data:
            return cls()
        known = {f.name for f in cls.__dataclass_fields__.values()}
        matched = {k: v for k, v in data.items() if k in known and k != "extra"}
        extra = dict(data.get("extra") or {})
        extra.update({k: v for k, v in data.items() if k not in known})
        try:
            cfg = cls(**matched)
        except TypeError as e:
            raise ConfigError(f"配置文件内容无效: {path} - {e}") from e
        if not isinstance(cfg.fetch_timeout, int) or cfg.fetch_timeout <= 0:
            raise ConfigError(f"fetch_timeout 必须为正整数: {cfg.fetch_timeout!r}")
        cfg.extra = extra
        return cfg

    def to_dict(self) -> dict:
        return asdict(self)


# 全局单例，首次 import 时不加载文件；由 CLI 入口显式初始化
_current: Config | None = None


def get_config() -> Config:
    """获取当前配置（未初始化则返回默认值）"""
    global _current  # noqa: PLW0603
    if _current is None:
        _current = Config()
    return _current


def init_config(path: str = "configs/submitdeps.yml") -> Config:
    """从文件初始化全局配置"""
    global _current  # noqa: PLW0603
    _current = Config.from_file(path)
    logger.info("配置已加载: %s", path)
    return _current
