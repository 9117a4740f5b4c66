"""Tests for the resolved-package index and lockfile selection."""

import pytest

from npm_deps.errors import UnsupportedLockfileFormat
from npm_deps.lockfile import LockfileIndex, find_lockfile, load_lockfile
from npm_deps.models import DependencyFile, ResolvedPackage


def _file(name, content="{}"):
    return DependencyFile(name=name, content=content)


class TestLookup:
    @pytest.fixture
    def npm_index(self, dependency_file):
        return load_lockfile(dependency_file("package-lock.json", "npm_lockfiles", "diamond.json"))

    @pytest.fixture
    def yarn_index(self, dependency_file):
        return load_lockfile(dependency_file("yarn.lock", "yarn_lockfiles", "multiple_versions.lock"))

    def test_lookup_by_name(self, npm_index):
        assert [p.version for p in npm_index.lookup("etag")] == ["1.8.1", "1.7.0"]
        assert npm_index.lookup("missing") == ()

    def test_lookup_by_range(self, npm_index):
        assert npm_index.lookup("etag", "^1.8.0").version == "1.8.1"
        assert npm_index.lookup("etag", "~1.7.0").version == "1.7.0"

    def test_unsatisfied_range_falls_back_to_first(self, npm_index):
        assert npm_index.lookup("etag", "^2.0.0").version == "1.8.1"
        assert npm_index.lookup("etag", "latest").version == "1.8.1"

    def test_unknown_name(self, npm_index):
        assert npm_index.lookup("missing", "^1.0.0") is None

    def test_exact_selector_wins(self, yarn_index):
        assert yarn_index.lookup("etag", "^1.0.0").version == "1.7.0"
        assert yarn_index.lookup("etag", "^1.8.0").version == "1.8.1"
        assert yarn_index.lookup("etag", "~1.8.1").version == "1.8.1"

    def test_range_match_without_selector(self, yarn_index):
        assert yarn_index.lookup("etag", ">=1.8.0").version == "1.8.1"
        assert yarn_index.lookup("@babel/code-frame", "^7.1.0").version == "7.8.3"

    def test_len_and_names(self, yarn_index):
        assert len(yarn_index) == 4
        assert yarn_index.names == ("@babel/code-frame", "etag", "left-pad")
        assert "etag" in yarn_index

    def test_duplicate_versions_are_merged(self):
        index = LockfileIndex(
            "package-lock.json",
            [
                ResolvedPackage("etag", "1.8.1", "https://registry.npmjs.org/etag/-/etag-1.8.1.tgz"),
                ResolvedPackage("etag", "1.8.1"),
            ],
        )

        assert len(index) == 1
        assert index.lookup("etag")[0].origin_url is not None


class TestLoadLockfile:
    def test_dispatch_by_name(self, dependency_file):
        npm = load_lockfile(dependency_file("package-lock.json", "npm_lockfiles", "package-lock.json"))
        yarn = load_lockfile(dependency_file("yarn.lock", "yarn_lockfiles", "yarn.lock"))

        assert npm.lookup("etag", "^1.0.0").version == "1.8.1"
        assert yarn.lookup("etag", "^1.0.0").version == "1.7.0"

    def test_unsupported(self):
        with pytest.raises(UnsupportedLockfileFormat) as excinfo:
            load_lockfile(_file("pnpm-lock.yaml", "lockfileVersion: 5.4\n"))

        assert excinfo.value.file_name == "pnpm-lock.yaml"


class TestFindLockfile:
    def test_no_lockfile(self):
        assert find_lockfile([_file("package.json"), _file("README.md")]) is None

    @pytest.mark.parametrize("name", ["pnpm-lock.yaml", "bun.lockb"])
    def test_unsupported_lockfile_is_returned(self, name):
        found = find_lockfile([_file("package.json"), _file(name)])

        assert found.name == name
        with pytest.raises(UnsupportedLockfileFormat):
            load_lockfile(found)

    def test_supported_lockfile_wins(self):
        files = [_file("package.json"), _file("pnpm-lock.yaml"), _file("package-lock.json")]

        assert find_lockfile(files).name == "package-lock.json"

    def test_nested_unsupported_lockfile_is_ignored(self):
        assert find_lockfile([_file("package.json"), _file("app/pnpm-lock.yaml")]) is None

    def test_precedence(self):
        files = [_file("package.json"), _file("package-lock.json"), _file("yarn.lock")]

        assert find_lockfile(files).name == "yarn.lock"
        assert find_lockfile(files[:2]).name == "package-lock.json"

    def test_nested_lockfiles_are_ignored(self):
        files = [_file("package.json"), _file("packages/a/yarn.lock"), _file("npm-shrinkwrap.json")]

        assert find_lockfile(files).name == "npm-shrinkwrap.json"
