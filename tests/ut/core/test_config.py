"""配置加载测试"""

from __future__ import annotations

from pathlib import Path

import pytest

import submitdeps.core.config as cfgmod
from submitdeps.core.config import DEFAULT_CENTRAL_URL, Config, get_config, init_config
from submitdeps.core.exceptions import ConfigError


class TestConfig:
    def test_defaults(self) -> None:
        cfg = Config()
        assert cfg.central_url == DEFAULT_CENTRAL_URL
        assert cfg.ivy_home_path == Path.home() / ".ivy2"
        assert cfg.m2_repository == Path.home() / ".m2" / "repository"
        assert cfg.transitive is True

    def test_from_missing_file_returns_defaults(self, tmp_path: Path) -> None:
        cfg = Config.from_file(str(tmp_path / "nope.yml"))
        assert cfg == Config()

    def test_from_file_with_extra(self, tmp_path: Path) -> None:
        path = tmp_path / "cfg.yml"
        path.write_text(
            "ivy_home: /data/ivy\nfetch_timeout: 5\nteam: infra\n",
            encoding="utf-8",
        )
        cfg = Config.from_file(str(path))
        assert cfg.ivy_home_path == Path("/data/ivy")
        assert cfg.fetch_timeout == 5
        assert cfg.extra == {"team": "infra"}

    def test_invalid_timeout(self, tmp_path: Path) -> None:
        path = tmp_path / "cfg.yml"
        path.write_text("fetch_timeout: -1\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="fetch_timeout"):
            Config.from_file(str(path))

    def test_to_dict(self) -> None:
        assert Config(ivy_home="/x").to_dict()["ivy_home"] == "/x"


class TestGlobalConfig:
    def test_get_config_lazily_created(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(cfgmod, "_current", None)
        assert get_config() is get_config()

    def test_init_config(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(cfgmod, "_current", None)
        path = tmp_path / "cfg.yml"
        path.write_text("transitive: false\n", encoding="utf-8")
        cfg = init_config(str(path))
        assert get_config() is cfg
        assert cfg.transitive is False
