"""submitdeps 日志配置

支持两种输出：人类可读文本（默认）与结构化 JSON（CI 流水线消费）。
解析器本身只依赖 logging.Logger，由调用方注入；此处只负责根日志器的装配。
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import TextIO

_TEXT_FORMAT = "%(asctime)s [%(levelname)-7s] %(name)s: %(message)s"


class JSONFormatter(logging.Formatter):
    """结构化 JSON 日志格式器

    输出示例:
        {"timestamp": "...", "level": "INFO", "logger": "submitdeps.core.resolve.engine",
         "message": "...", "line": 42}
    """

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            # 记录事件发生时间而非格式化时间
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "line": record.lineno,
        }
        if record.exc_info and record.exc_info[1]:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False)


def setup_logging(
    level: str = "INFO",
    json_output: bool = False,
    stream: TextIO | None = None,
) -> None:
    """配置根日志器

    参数:
        level: 日志级别字符串（DEBUG, INFO, WARNING, ERROR）
        json_output: 为 True 时输出 JSON
        stream: 输出流，默认 stderr（stdout 留给路径列表输出）
    """
    reset_logging()
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    handler = logging.StreamHandler(stream or sys.stderr)
    if json_output:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(_TEXT_FORMAT))
    root.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """获取指定名称的 logger，通常传 __name__"""
    return logging.getLogger(name)


def reset_logging() -> None:
    """清理根日志器上的所有 handler，恢复未配置状态"""
    root = logging.getLogger()
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()
