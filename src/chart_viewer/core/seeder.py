"""Populate the cache with repositories, API catalogs and chart details."""

from __future__ import annotations

import json
import logging
from concurrent.futures import ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from chart_viewer.core.cache_store import CacheStore
from chart_viewer.core.catalog_service import API_VERSIONS_KEY, RESERVED_REPO_NAMES, REPOS_KEY, CatalogService
from chart_viewer.core.exceptions import ChartViewerError, SeedError
from chart_viewer.models.repo import Repo

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, str, str], None]


@dataclass
class SeedReport:
    repos: int = 0
    charts: int = 0
    failures: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


def _read_seed(path: Path) -> str:
    """Read a JSON seed file and check that it holds a list."""
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise SeedError(f"cannot read seed file {path}: {e}") from e
    try:
        data = json.loads(text)
    except ValueError as e:
        raise SeedError(f"seed file {path} is not valid JSON: {e}") from e
    if not isinstance(data, list):
        raise SeedError(f"seed file {path} must contain a JSON array")
    return text


def seed_api_versions(store: CacheStore, path: Path) -> None:
    """Store the Kubernetes API catalog file verbatim."""
    store.set(API_VERSIONS_KEY, _read_seed(path))
    logger.info("Kubernetes API versions seeded from %s", path)


def seed_repos(store: CacheStore, path: Path) -> None:
    """Store the repository list file verbatim.

    Rejects a list naming a repository ``repos`` or ``api-versions``: those
    keys hold the registry itself and the API catalog.
    """
    logger.info("populating repositories from %s", path)
    text = _read_seed(path)
    for entry in json.loads(text):
        name = entry.get("name") if isinstance(entry, dict) else None
        if isinstance(name, str) and name in RESERVED_REPO_NAMES:
            raise SeedError(f"seed file {path}: {name!r} is a reserved name and cannot be used for a repository")
    store.set(REPOS_KEY, text)


def _pull_repo(
    service: CatalogService,
    repo: Repo,
    on_progress: ProgressCallback | None,
) -> SeedReport:
    """Warm one repository; runs on a worker thread with its own report."""
    report = SeedReport(repos=1)
    try:
        charts = service.list_charts(repo.name)
    except ChartViewerError as e:
        logger.warning("error populating charts from repo %s: %s", repo.name, e)
        report.failures.append(f"{repo.name}: {e}")
        return report

    for chart in charts:
        for version in chart.versions:
            if on_progress:
                on_progress(repo.name, chart.name, version)
            logger.info("populating %s/%s:%s", repo.name, chart.name, version)
            try:
                service.get_chart(repo.name, chart.name, version)
            except ChartViewerError as e:
                logger.warning("error populating chart %s/%s:%s: %s", repo.name, chart.name, version, e)
                report.failures.append(f"{repo.name}/{chart.name}:{version}: {e}")
                continue
            report.charts += 1
    return report


def seed_charts(
    service: CatalogService,
    on_progress: ProgressCallback | None = None,
) -> SeedReport:
    """Warm chart lists and chart details of every repository concurrently.

    One worker per repository; the call returns once all of them finished.
    Failures are collected in the report instead of being raised.
    """
    repos = service.list_repos()
    report = SeedReport(repos=len(repos))
    if not repos:
        return report

    with ThreadPoolExecutor(max_workers=len(repos), thread_name_prefix="seed") as pool:
        futures = [pool.submit(_pull_repo, service, r, on_progress) for r in repos]
        wait(futures)

    for f in futures:
        partial = f.result()
        report.charts += partial.charts
        report.failures.extend(partial.failures)
    return report
