"""Tests for the npm-deps command line."""

import json

import pytest

from npm_deps.cli import collect_files, main
from npm_deps.config import CONFIG_PATH_ENV_VAR, REGISTRY_HOSTS_ENV_VAR


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    monkeypatch.delenv(CONFIG_PATH_ENV_VAR, raising=False)
    monkeypatch.delenv(REGISTRY_HOSTS_ENV_VAR, raising=False)


@pytest.fixture
def project(tmp_path, fixture_text):
    (tmp_path / "package.json").write_text(fixture_text("package_files", "workspaces.json"), encoding="utf-8")
    (tmp_path / "yarn.lock").write_text(fixture_text("yarn_lockfiles", "workspaces.lock"), encoding="utf-8")
    member = tmp_path / "packages" / "package1"
    member.mkdir(parents=True)
    (member / "package.json").write_text(fixture_text("package_files", "package1.json"), encoding="utf-8")
    other = tmp_path / "other_package"
    other.mkdir()
    (other / "package.json").write_text(fixture_text("package_files", "other_package.json"), encoding="utf-8")
    vendored = tmp_path / "node_modules" / "etag"
    vendored.mkdir(parents=True)
    (vendored / "package.json").write_text(fixture_text("package_files", "etag.json"), encoding="utf-8")
    (other / "yarn.lock").write_text("not a lockfile", encoding="utf-8")
    return tmp_path


def test_collect_files(project):
    names = [f.name for f in collect_files(project)]

    assert sorted(names) == [
        "other_package/package.json",
        "package.json",
        "packages/package1/package.json",
        "yarn.lock",
    ]


def test_json_output(project, capsys):
    assert main(["--root", str(project), "--validate"]) == 0

    report = json.loads(capsys.readouterr().out)
    assert [d["name"] for d in report["dependencies"]] == ["lodash", "chalk", "etag"]
    assert report["totals"]["requirements"] == 6


def test_markdown_output(project, capsys):
    assert main(["--root", str(project), "--format", "markdown"]) == 0

    out = capsys.readouterr().out
    assert out.startswith("# npm-deps Summary")
    assert "| etag | 1.8.1 | ^1.1.0 | packages/package1/package.json | devDependencies | default |" in out


def test_missing_manifest(tmp_path, capsys):
    assert main(["--root", str(tmp_path)]) == 1

    assert "No package.json" in capsys.readouterr().err


def test_unparseable_lockfile(project, capsys):
    (project / "yarn.lock").write_text("etag@^1.0.0\n", encoding="utf-8")

    assert main(["--root", str(project)]) == 1
    assert "yarn.lock not parseable" in capsys.readouterr().err


def test_bad_config(project, tmp_path, capsys):
    config = tmp_path / "settings.json"
    config.write_text("[]", encoding="utf-8")

    assert main(["--root", str(project), "--config", str(config)]) == 1
    assert "must be a JSON object" in capsys.readouterr().err


def test_manifest_not_utf8(tmp_path, capsys):
    (tmp_path / "package.json").write_bytes(b"\xff\xfe{}")

    assert main(["--root", str(tmp_path)]) == 1
    assert "package.json not parseable" in capsys.readouterr().err


def test_unsupported_lockfile(project, capsys):
    (project / "yarn.lock").unlink()
    (project / "bun.lockb").write_bytes(b"\x00\xff\xfebinary")

    assert main(["--root", str(project)]) == 1
    assert "Unsupported lockfile format: bun.lockb" in capsys.readouterr().err
