"""解析链构建测试"""

from __future__ import annotations

from pathlib import Path

import pytest

from submitdeps.core.config import Config
from submitdeps.core.exceptions import ValidationError
from submitdeps.core.resolve.chain import create_repo_resolvers, split_repositories
from submitdeps.core.resolve.repositories import (
    FileSystemResolver,
    HttpResolver,
    LocalIvyResolver,
)

DEFAULT_NAMES = ["local-m2-cache", "local-ivy-cache", "central", "spark-packages"]


class TestCreateRepoResolvers:
    def test_default_chain(self, tmp_path: Path) -> None:
        chain = create_repo_resolvers(None, tmp_path / "ivy", Config())
        assert len(chain) == 4
        assert chain.names() == DEFAULT_NAMES
        assert chain.name == "spark-list"

    def test_default_resolver_types(self, tmp_path: Path) -> None:
        chain = create_repo_resolvers(None, tmp_path / "ivy", Config(m2_path=str(tmp_path / "m2")))
        assert type(chain[0]) is FileSystemResolver
        assert isinstance(chain[1], LocalIvyResolver)
        assert isinstance(chain[2], HttpResolver)
        assert chain[2].root == "https://repo1.maven.org/maven2/"
        assert isinstance(chain[3], HttpResolver)

    def test_local_ivy_under_ivy_home(self, tmp_path: Path) -> None:
        chain = create_repo_resolvers(None, tmp_path / "dummy" / "ivy", Config())
        assert chain[1].root == str(tmp_path / "dummy" / "ivy" / "local") + "/"

    def test_user_repos_appended_in_order(self, tmp_path: Path) -> None:
        repos = "a/1,b/2,c/3"
        chain = create_repo_resolvers(repos, tmp_path / "ivy", Config())
        assert len(chain) == 7
        assert chain.names()[:4] == DEFAULT_NAMES
        expected = [f"{r}/" for r in repos.split(",")]
        for i in range(1, 4):
            resolver = chain[3 + i]
            assert resolver.name == f"repo-{i}"
            assert resolver.root == expected[i - 1]

    def test_user_repo_kinds(self, tmp_path: Path) -> None:
        chain = create_repo_resolvers(
            "https://repo.example.com/maven/,file:/tmp/repo", tmp_path / "ivy", Config(),
        )
        assert isinstance(chain[4], HttpResolver)
        assert chain[4].root == "https://repo.example.com/maven/"
        assert isinstance(chain[5], FileSystemResolver)
        assert chain[5].root == "file:/tmp/repo/"

    def test_unsupported_scheme(self, tmp_path: Path) -> None:
        with pytest.raises(ValidationError):
            create_repo_resolvers("ftp://old.example.com/repo", tmp_path, Config())

    def test_uses_global_config(self, isolated_config: Config) -> None:
        chain = create_repo_resolvers(None)
        assert chain[0].root == isolated_config.m2_path + "/"
        assert chain[1].root == str(Path(isolated_config.ivy_home) / "local") + "/"


class TestSplitRepositories:
    def test_none(self) -> None:
        assert split_repositories(None) == []

    def test_blank_entries_skipped(self) -> None:
        assert split_repositories(" a/1 ,, b/2,") == ["a/1", "b/2"]
