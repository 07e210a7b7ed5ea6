"""Cache-aside catalog reads and content-addressed chart rendering."""

from __future__ import annotations

import logging
from typing import Any, Callable, TypeVar

from chart_viewer.config.settings import settings
from chart_viewer.core.analyzer import Analyzer
from chart_viewer.core.cache_store import CacheStore
from chart_viewer.core.chart_source import ChartSource
from chart_viewer.core.exceptions import (
    AnalysisFailed,
    CacheUnavailable,
    CacheWriteFailed,
    DecodeFailed,
    ManifestNotFound,
    RepositoryNotFound,
)
from chart_viewer.core.index_fetcher import IndexFetcher
from chart_viewer.models.analytics import AnalyticsResult, KubernetesAPIVersion
from chart_viewer.models.chart import ChartDetail, ManifestResponse, Template
from chart_viewer.models.repo import Chart, Repo
from chart_viewer.utils.encoding import content_hash, decode_entry, encode_entry
from chart_viewer.utils.manifest_parser import join_manifests, post_process

logger = logging.getLogger(__name__)

T = TypeVar("T")

REPOS_KEY = "repos"
API_VERSIONS_KEY = "api-versions"
# A repository's chart list is cached under its bare name, so these names
# cannot be used for repositories.
RESERVED_REPO_NAMES = frozenset({REPOS_KEY, API_VERSIONS_KEY})


def values_key(repo: str, chart: str, version: str) -> str:
    return f"value-{repo}-{chart}-{version}"


def templates_key(repo: str, chart: str, version: str) -> str:
    return f"template-{repo}-{chart}-{version}"


def manifests_key(repo: str, chart: str, version: str, digest: str) -> str:
    return f"manifests-{repo}-{chart}-{version}-{digest}"


def manifests_url(repo: str, chart: str, version: str, digest: str) -> str:
    return f"{settings.manifests_path}/{repo}/{chart}/{version}/{digest}"


def _repos_from(data: Any) -> list[Repo]:
    return [Repo.from_dict(r) for r in data]


def _charts_from(data: Any) -> list[Chart]:
    return [Chart.from_dict(c) for c in data]


def _values_from(data: Any) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise DecodeFailed("cached values are not a mapping")
    return data


def _templates_from(data: Any) -> list[Template]:
    return [Template.from_dict(t) for t in data]


def _manifests_from(data: Any) -> ManifestResponse:
    if not isinstance(data, dict) or not data.get("url"):
        raise DecodeFailed("cached manifests are not a manifest response")
    return ManifestResponse.from_dict(data)


def _api_versions_from(data: Any) -> list[KubernetesAPIVersion]:
    return [KubernetesAPIVersion.from_dict(k) for k in data]


class CatalogService:
    """Serves repositories, charts and rendered manifests from the cache.

    Every read consults the store first. A miss is resolved through the
    index fetcher or the chart source and written back under the same key
    before it is returned. Concurrent misses on one key may both fetch and
    both write; the values are equivalent so the overwrite is harmless.
    """

    def __init__(
        self,
        store: CacheStore,
        fetcher: IndexFetcher,
        chart_source: ChartSource,
        analyzer: Analyzer,
    ):
        self.store = store
        self.fetcher = fetcher
        self.chart_source = chart_source
        self.analyzer = analyzer

    def close(self) -> None:
        """Release the fetcher's connections, if it holds any."""
        close = getattr(self.fetcher, "close", None)
        if close is not None:
            close()

    def __enter__(self) -> CatalogService:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Cache plumbing
    # ------------------------------------------------------------------

    def _cached(self, key: str, convert: Callable[[Any], T]) -> T | None:
        """Return the decoded entry for ``key``, or None on a miss.

        Store errors propagate. Empty, undecodable or empty-collection
        entries count as misses.
        """
        raw = self.store.get(key)
        try:
            value = convert(decode_entry(raw))
        except (DecodeFailed, AttributeError, TypeError, ValueError):
            if raw:
                logger.debug("Discarding undecodable cache entry %s", key, exc_info=True)
            return None
        if not value:
            return None
        return value

    def _write(self, key: str, value: Any) -> None:
        try:
            self.store.set(key, encode_entry(value))
        except CacheUnavailable as e:
            raise CacheWriteFailed(f"cannot cache {key}: {e}") from e
        logger.debug("cached %s", key)

    # ------------------------------------------------------------------
    # Catalog
    # ------------------------------------------------------------------

    def list_repos(self) -> list[Repo]:
        """Return the registered repositories.

        Repositories are only ever seeded, so a miss yields an empty list.
        """
        repos = self._cached(REPOS_KEY, _repos_from)
        return repos or []

    def repo_url(self, repo_name: str) -> str:
        for r in self.list_repos():
            if r.name == repo_name:
                return r.url
        raise RepositoryNotFound(f"repository {repo_name!r} is not registered")

    def list_charts(self, repo_name: str) -> list[Chart]:
        if repo_name in RESERVED_REPO_NAMES:
            raise RepositoryNotFound(f"{repo_name!r} is a reserved name, not a repository")
        cached = self._cached(repo_name, _charts_from)
        if cached is not None:
            logger.info("%s charts fetched from cache", repo_name)
            return cached

        url = self.repo_url(repo_name)
        entries = self.fetcher.fetch(url)
        charts = [Chart.from_index_entries(name, versions) for name, versions in entries.items()]
        self._write(repo_name, [c.to_dict() for c in charts])
        return charts

    def get_values(self, repo_name: str, chart_name: str, chart_version: str) -> dict[str, Any]:
        key = values_key(repo_name, chart_name, chart_version)
        cached = self._cached(key, _values_from)
        if cached is not None:
            logger.info("%s chart values fetched from cache", key)
            return cached

        url = self.repo_url(repo_name)
        values = self.chart_source.get_values(url, chart_name, chart_version)
        self._write(key, values)
        return values

    def get_templates(self, repo_name: str, chart_name: str, chart_version: str) -> list[Template]:
        key = templates_key(repo_name, chart_name, chart_version)
        cached = self._cached(key, _templates_from)
        if cached is not None:
            logger.info("%s chart templates fetched from cache", key)
            return cached

        url = self.repo_url(repo_name)
        templates = self.chart_source.get_templates(url, chart_name, chart_version)
        self._write(key, [t.to_dict() for t in templates])
        return templates

    def get_chart(self, repo_name: str, chart_name: str, chart_version: str) -> ChartDetail:
        values = self.get_values(repo_name, chart_name, chart_version)
        templates = self.get_templates(repo_name, chart_name, chart_version)
        return ChartDetail(values=values, templates=templates)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render(
        self,
        repo_name: str,
        chart_name: str,
        chart_version: str,
        overrides: str | bytes,
    ) -> ManifestResponse:
        """Render a chart with override values, at most once per distinct input.

        The cache key and retrieval URL both end in the sha256 of the
        override payload. An undecodable cached entry is re-rendered.
        """
        digest = content_hash(overrides)
        key = manifests_key(repo_name, chart_name, chart_version, digest)
        cached = self._cached(key, _manifests_from)
        if cached is not None:
            logger.info("manifest fetched from cache with key: %s", key)
            return cached

        url = self.repo_url(repo_name)
        payload = overrides.encode("utf-8") if isinstance(overrides, str) else bytes(overrides)
        raw = self.chart_source.render(url, chart_name, chart_version, payload)

        response = ManifestResponse(
            url=manifests_url(repo_name, chart_name, chart_version, digest),
            manifests=post_process(raw),
        )
        self._write(key, response.to_dict())
        return response

    def get_manifests(
        self, repo_name: str, chart_name: str, chart_version: str, digest: str,
    ) -> ManifestResponse:
        """Return a previously rendered ManifestResponse by its hash."""
        key = manifests_key(repo_name, chart_name, chart_version, digest)
        raw = self.store.get(key)
        if not raw:
            raise ManifestNotFound(f"no rendered manifests cached under {key}")
        try:
            return _manifests_from(decode_entry(raw))
        except (AttributeError, TypeError, ValueError) as e:
            raise DecodeFailed(f"cached manifests under {key} are malformed: {e}") from e

    def get_rendered_text(
        self, repo_name: str, chart_name: str, chart_version: str, digest: str,
    ) -> str:
        response = self.get_manifests(repo_name, chart_name, chart_version, digest)
        return join_manifests(response.manifests)

    # ------------------------------------------------------------------
    # Analysis
    # ------------------------------------------------------------------

    def api_catalog(self, kube_version: str) -> KubernetesAPIVersion:
        """Return the API catalog of a Kubernetes version, empty when unknown."""
        for entry in self._cached(API_VERSIONS_KEY, _api_versions_from) or []:
            if entry.kube_version == kube_version:
                return entry
        logger.debug("no API catalog for kubernetes %r", kube_version)
        return KubernetesAPIVersion(kube_version=kube_version)

    def analyze(self, templates: list[Template], kube_version: str) -> list[AnalyticsResult]:
        catalog = self.api_catalog(kube_version)
        try:
            return self.analyzer.analyze(templates, catalog)
        except AnalysisFailed:
            raise
        except Exception as e:
            raise AnalysisFailed(f"cannot analyze templates for kubernetes {kube_version!r}: {e}") from e
