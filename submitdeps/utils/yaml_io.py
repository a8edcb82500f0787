"""YAML 与缓存文件统一读写工具

统一 encoding="utf-8"、空值保护、目录自动创建、原子写入。
解析缓存可能被同一主机上的多个提交进程同时使用，所有写入都走临时文件 + rename。
"""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Any, BinaryIO

import yaml

logger = logging.getLogger(__name__)

# YAML 文件最大大小限制 (1MB)，配置与缓存记账文件都很小
MAX_YAML_SIZE = 1024 * 1024


def atomic_write_bytes(path: Path, content: bytes) -> None:
    """原子写入二进制内容：同目录临时文件写完后 os.replace 覆盖目标

    异常:
        OSError: 写入或替换失败（临时文件会被清理）
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(dir=str(path.parent), suffix=".part")
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(content)
        os.replace(tmp, str(path))
    except Exception:
        # 只捕获普通异常，不拦截 KeyboardInterrupt/SystemExit
        try:
            os.unlink(tmp)
        except OSError:
            pass
        raise


def atomic_write_stream(path: Path, stream: BinaryIO) -> None:
    """把可读二进制流原子写入目标文件（大文件分块复制，不整体读入内存）"""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(dir=str(path.parent), suffix=".part")
    try:
        with os.fdopen(fd, "wb") as f:
            shutil.copyfileobj(stream, f)
        os.replace(tmp, str(path))
    except Exception:
        try:
            os.unlink(tmp)
        except OSError:
            pass
        raise


def atomic_write(path: Path, content: str) -> None:
    """原子写入文本文件（UTF-8）"""
    atomic_write_bytes(path, content.encode("utf-8"))


def load_yaml(path: str | Path) -> dict[str, Any]:
    """安全读取 YAML 文件

    返回:
        dict: 文件不存在、为空或顶层不是字典时返回空字典

    异常:
        yaml.YAMLError: YAML 格式错误
        ValueError: 文件过大
    """
    p = Path(path)
    if not p.exists():
        return {}

    file_size = p.stat().st_size
    if file_size > MAX_YAML_SIZE:
        raise ValueError(
            f"YAML 文件过大: {p} ({file_size} 字节), 超过限制 {MAX_YAML_SIZE} 字节"
        )

    try:
        with open(p, encoding="utf-8") as f:
            result = yaml.safe_load(f)
    except yaml.YAMLError:
        logger.error("解析 YAML 文件失败: %s", p)
        raise

    if result is None:
        return {}
    if not isinstance(result, dict):
        logger.warning(
            "%s 内容不是字典类型 (实际类型: %s)，返回空字典",
            p, type(result).__name__,
        )
        return {}
    return result


def save_yaml(path: str | Path, data: Any) -> None:
    """原子写入 YAML 文件，保持键顺序"""
    content = yaml.dump(
        data, default_flow_style=False,
        allow_unicode=True, sort_keys=False,
    )
    atomic_write(Path(path), content)
