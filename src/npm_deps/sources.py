"""Classify where a resolved package was downloaded from."""

from __future__ import annotations

import logging
from urllib.parse import quote, urlsplit

from .models import ResolvedPackage, SourceInfo

logger = logging.getLogger(__name__)

DEFAULT_REGISTRY_HOSTS = ("registry.npmjs.org", "registry.yarnpkg.com")


def registry_url(origin_url: str, name: str) -> str:
    """Return the registry base of a tarball URL.

    ``http://registry.npm.taobao.org/chalk/download/chalk-2.3.0.tgz`` becomes
    ``http://registry.npm.taobao.org``. Scoped names may appear URL-encoded
    (``@scope%2fname``) and Artifactory-style URLs are cut at ``/~/``.
    """
    url = origin_url.split("#", 1)[0]
    if "/~/" in url:
        return url.split("/~/", 1)[0]
    lowered = url.lower()
    names = (name, quote(name, safe="@"), quote(name, safe=""))
    # the tarball path "/<name>/-/" is the most specific marker
    for suffix in ("/-/", "/"):
        for encoded in names:
            idx = lowered.rfind(f"/{encoded}{suffix}".lower())
            if idx >= 0:
                return url[:idx]
    parts = urlsplit(url)
    return f"{parts.scheme}://{parts.netloc}"


def classify(
    package: ResolvedPackage | None,
    default_hosts: tuple[str, ...] = DEFAULT_REGISTRY_HOSTS,
) -> SourceInfo | None:
    """Return None for the default registry, otherwise a private registry source."""
    if package is None or not package.origin_url:
        return None
    parts = urlsplit(package.origin_url)
    if parts.scheme not in {"http", "https"} or not parts.hostname:
        # git and file origins are not registries
        return None
    if parts.hostname.lower() in default_hosts:
        return None
    url = registry_url(package.origin_url, package.name)
    logger.debug("%s resolved from private registry %s", package.name, url)
    return SourceInfo(url=url)
