import json

import pytest

from chart_viewer.core.catalog_service import CatalogService
from chart_viewer.core.cache_store import MemoryStore
from chart_viewer.core.exceptions import CacheUnavailable, RenderFailed, UpstreamFetchFailed
from chart_viewer.models.analytics import AnalyticsResult
from chart_viewer.models.chart import Template

STABLE_URL = "https://chart.stable.com"

RENDERED = """---
# Source: mychart/templates/serviceaccount.yaml
apiVersion: v1
kind: ServiceAccount
metadata:
  name: mychart
---
# Source: mychart/templates/service.yaml
apiVersion: v1
kind: Service
metadata:
  name: mychart
---
# Source: mychart/templates/deployment.yaml
apiVersion: apps/v1
kind: Deployment
metadata:
  name: mychart
---
# Source: mychart/templates/tests/test-connection.yaml
apiVersion: v1
kind: Pod
metadata:
  name: mychart-test-connection
"""


class FakeStore(MemoryStore):
    """MemoryStore that records traffic and can be told to fail."""

    def __init__(self, initial=None):
        super().__init__(initial)
        self.gets = []
        self.sets = []
        self.fail_get = set()
        self.fail_set = False

    def get(self, key):
        self.gets.append(key)
        if key in self.fail_get:
            raise CacheUnavailable(f"GET {key}: connection refused")
        return super().get(key)

    def set(self, key, value):
        if self.fail_set:
            raise CacheUnavailable(f"SET {key}: connection refused")
        self.sets.append((key, value))
        super().set(key, value)


class FakeFetcher:
    def __init__(self, entries=None, error=None):
        self.entries = entries or {}
        self.error = error
        self.calls = []

    def fetch(self, repo_url):
        self.calls.append(repo_url)
        if self.error:
            raise self.error
        return self.entries


class FakeChartSource:
    def __init__(self, values=None, templates=None, rendered=RENDERED):
        self.values = values if values is not None else {"replicaCount": 1}
        self.templates = templates if templates is not None else [
            Template(name="templates/deployment.yaml", content="apiVersion: apps/v1\nkind: Deployment\n"),
        ]
        self.rendered = rendered
        self.error = None
        self.calls = []

    def get_values(self, repo_url, chart, version):
        self.calls.append(("values", repo_url, chart, version))
        if self.error:
            raise self.error
        return self.values

    def get_templates(self, repo_url, chart, version):
        self.calls.append(("templates", repo_url, chart, version))
        if self.error:
            raise self.error
        return self.templates

    def render(self, repo_url, chart, version, overrides):
        self.calls.append(("render", repo_url, chart, version, overrides))
        if self.error:
            raise self.error
        return self.rendered


class FakeAnalyzer:
    def __init__(self, error=None):
        self.error = error
        self.calls = []

    def analyze(self, templates, catalog):
        self.calls.append((templates, catalog))
        if self.error:
            raise self.error
        return [AnalyticsResult(template=t, compatible=True) for t in templates]


@pytest.fixture
def store():
    return FakeStore({"repos": json.dumps([{"name": "stable", "url": STABLE_URL}])})


@pytest.fixture
def fetcher():
    return FakeFetcher({"acs-engine-autoscaler": [{"version": "2.2.2", "appVersion": "2.1.1"}]})


@pytest.fixture
def chart_source():
    return FakeChartSource()


@pytest.fixture
def analyzer():
    return FakeAnalyzer()


@pytest.fixture
def service(store, fetcher, chart_source, analyzer):
    return CatalogService(store=store, fetcher=fetcher, chart_source=chart_source, analyzer=analyzer)


@pytest.fixture
def upstream_error():
    return UpstreamFetchFailed("connection reset by peer")


@pytest.fixture
def render_error():
    return RenderFailed("template: mychart/templates/deployment.yaml:3: unexpected EOF")
