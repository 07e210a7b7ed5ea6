"""Fetch and reduce remote Helm repository index files."""

from __future__ import annotations

import logging
from typing import Protocol

import httpx
import yaml

from chart_viewer.config.settings import settings
from chart_viewer.core.exceptions import UpstreamFetchFailed

logger = logging.getLogger(__name__)

# Prefer the C-accelerated YAML loader when available (~10x faster).
_YamlLoader = getattr(yaml, "CSafeLoader", yaml.SafeLoader)

IndexEntries = dict[str, list[dict[str, str]]]


class IndexFetcher(Protocol):
    def fetch(self, repo_url: str) -> IndexEntries:
        """Return {chart_name: [{version, appVersion}, ...]} for a repository."""
        ...


def index_url(repo_url: str) -> str:
    return repo_url.rstrip("/") + "/index.yaml"


def _version(entry: dict) -> str:
    value = entry.get("version")
    if value is None:
        return ""
    return str(value).strip()


def reduce_index(data: dict | None) -> IndexEntries:
    """Keep only chart names and their version entries from a parsed index.

    Helm repo index files can be 25+ MB of YAML; everything but the version
    listing is dropped before it reaches the cache. Chart names keep index
    order, entries keep the order the index lists them in. Entries without
    a version are skipped.

    Raises UpstreamFetchFailed when ``entries`` is not a mapping of lists.
    """
    if not data or not isinstance(data, dict):
        return {}
    entries = data.get("entries") or {}
    if not isinstance(entries, dict):
        raise UpstreamFetchFailed("unexpected entries in index: expected a mapping of charts")
    lightweight: IndexEntries = {}
    for chart_name, chart_entries in entries.items():
        if chart_entries is not None and not isinstance(chart_entries, list):
            raise UpstreamFetchFailed(f"unexpected entries for chart {chart_name} in index")
        lightweight[str(chart_name)] = [
            {"version": _version(e), "appVersion": str(e.get("appVersion") or "")}
            for e in chart_entries or []
            if isinstance(e, dict) and _version(e)
        ]
    return lightweight


class HttpIndexFetcher:
    """Download ``index.yaml`` over HTTP(S)."""

    def __init__(self, client: httpx.Client | None = None, timeout: float | None = None):
        self._client = client or httpx.Client(
            follow_redirects=True,
            timeout=settings.timeout if timeout is None else timeout,
        )

    def fetch(self, repo_url: str) -> IndexEntries:
        url = index_url(repo_url)
        logger.info("outgoing call: %s", url)
        try:
            response = self._client.get(url)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise UpstreamFetchFailed(f"cannot fetch {url}: {e}") from e

        try:
            data = yaml.load(response.text, Loader=_YamlLoader)
        except yaml.YAMLError as e:
            raise UpstreamFetchFailed(f"cannot parse {url}: {e}") from e

        if data is not None and not isinstance(data, dict):
            raise UpstreamFetchFailed(f"unexpected index document at {url}")
        entries = (data or {}).get("entries")
        if entries is not None and not isinstance(entries, dict):
            raise UpstreamFetchFailed(f"unexpected entries in {url}")
        return reduce_index(data)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> HttpIndexFetcher:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
