"""网络工具 — 仓库地址校验与拼接"""

from __future__ import annotations

from urllib.parse import urlparse

from submitdeps.core.exceptions import ValidationError

_REMOTE_SCHEMES = frozenset(("http", "https"))


def is_local(root: str) -> bool:
    """普通路径、file: URI 或 Windows 盘符路径（C:\\...）"""
    scheme = urlparse(root).scheme
    return scheme in ("", "file") or len(scheme) == 1


def validate_url_scheme(url: str, *, context: str = "") -> None:
    """校验 URL 仅使用 http/https，防止 ftp:// 等非预期协议被当成远程仓库

    Raises:
        ValidationError: URL scheme 不在白名单内
    """
    parsed = urlparse(url)
    if parsed.scheme not in _REMOTE_SCHEMES:
        label = f" ({context})" if context else ""
        raise ValidationError(
            f"不允许的 URL 协议 '{parsed.scheme}'{label}，"
            f"仅支持 http/https: {url}"
        )


def ensure_trailing_slash(root: str) -> str:
    """仓库根统一以 / 结尾，便于拼接相对路径"""
    return root if root.endswith("/") else root + "/"
