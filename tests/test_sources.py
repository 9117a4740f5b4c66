"""Tests for registry source classification."""

import pytest

from npm_deps.models import ResolvedPackage, SourceInfo
from npm_deps.sources import classify, registry_url


@pytest.mark.parametrize(
    "url",
    [
        "https://registry.npmjs.org/etag/-/etag-1.8.1.tgz",
        "https://registry.yarnpkg.com/etag/-/etag-1.8.1.tgz#41ae2eeb65efa62268aebfea83ac7d79299b0887",
        "HTTPS://Registry.NPMJS.org/etag/-/etag-1.8.1.tgz",
    ],
)
def test_default_registry(url):
    assert classify(ResolvedPackage("etag", "1.8.1", url)) is None


def test_unresolved_or_missing_origin():
    assert classify(None) is None
    assert classify(ResolvedPackage("etag", "1.8.1")) is None


def test_git_origin_is_not_a_registry():
    package = ResolvedPackage("etag", "1.8.1", "git+ssh://git@github.com/jshttp/etag.git#abc")

    assert classify(package) is None


@pytest.mark.parametrize(
    "name, url, expected",
    [
        ("chalk", "http://registry.npm.taobao.org/chalk/download/chalk-2.3.0.tgz", "http://registry.npm.taobao.org"),
        ("@dependabot/etag", "https://npm.fury.io/dependabot/@dependabot/etag/-/etag-1.8.0.tgz", "https://npm.fury.io/dependabot"),
        ("@dependabot/etag", "https://npm.fury.io/dependabot/@dependabot%2fetag/-/etag-1.8.0.tgz", "https://npm.fury.io/dependabot"),
        ("etag", "https://example.jfrog.io/artifactory/api/npm/npm/etag/-/etag-1.8.1.tgz", "https://example.jfrog.io/artifactory/api/npm/npm"),
        ("etag", "https://artifacts.example.com/api/npm/npm-repo/~/etag-1.8.1.tgz", "https://artifacts.example.com/api/npm/npm-repo"),
        ("etag", "https://cdn.example.com/tarballs/etag-1.8.1.tgz", "https://cdn.example.com"),
        ("npm", "https://x.jfrog.io/artifactory/api/npm/npm/npm/-/npm-6.0.0.tgz", "https://x.jfrog.io/artifactory/api/npm/npm"),
        ("chalk", "https://npm.example.com/chalk/chalk/-/chalk-2.3.0.tgz", "https://npm.example.com/chalk"),
    ],
)
def test_registry_url(name, url, expected):
    assert registry_url(url, name) == expected


def test_private_registry():
    package = ResolvedPackage("chalk", "2.3.0", "http://registry.npm.taobao.org/chalk/download/chalk-2.3.0.tgz")

    assert classify(package) == SourceInfo(url="http://registry.npm.taobao.org")
    assert classify(package).to_dict() == {"type": "private_registry", "url": "http://registry.npm.taobao.org"}


def test_custom_default_hosts():
    package = ResolvedPackage("chalk", "2.3.0", "http://registry.npm.taobao.org/chalk/download/chalk-2.3.0.tgz")

    assert classify(package, ("registry.npm.taobao.org",)) is None
