import json

import pytest

from chart_viewer.core.exceptions import SeedError, UpstreamFetchFailed
from chart_viewer.core.seeder import seed_api_versions, seed_charts, seed_repos

from conftest import FakeStore, STABLE_URL


def test_seed_repos_stores_file_verbatim(tmp_path):
    seed = tmp_path / "seed.json"
    seed.write_text('[{"name": "stable", "url": "https://charts.helm.sh/stable"}]')
    store = FakeStore()

    seed_repos(store, seed)

    assert store.get("repos") == seed.read_text()


def test_seed_api_versions(tmp_path):
    seed = tmp_path / "api_versions.json"
    seed.write_text(json.dumps([{"kubeVersion": "1.22", "apiVersions": ["v1"]}]))
    store = FakeStore()

    seed_api_versions(store, seed)

    assert json.loads(store.get("api-versions"))[0]["kubeVersion"] == "1.22"


@pytest.mark.parametrize("content", ["{not json", '{"name": "stable"}'])
def test_malformed_seed_file(tmp_path, content):
    seed = tmp_path / "seed.json"
    seed.write_text(content)
    with pytest.raises(SeedError):
        seed_repos(FakeStore(), seed)


def test_missing_seed_file(tmp_path):
    with pytest.raises(SeedError):
        seed_repos(FakeStore(), tmp_path / "nope.json")


@pytest.mark.parametrize("name", ["repos", "api-versions"])
def test_reserved_repository_names_are_rejected(tmp_path, name):
    seed = tmp_path / "seed.json"
    seed.write_text(json.dumps([{"name": "stable", "url": STABLE_URL}, {"name": name, "url": "https://example.com"}]))
    store = FakeStore()

    with pytest.raises(SeedError, match="reserved"):
        seed_repos(store, seed)
    assert "repos" not in store


def test_seed_charts_warms_every_version(service, store, fetcher, chart_source):
    fetcher.entries = {"nginx": [{"version": "1.0.0"}, {"version": "1.1.0"}], "redis": [{"version": "10.0.0"}]}
    seen = []

    report = seed_charts(service, on_progress=lambda repo, chart, version: seen.append((repo, chart, version)))

    assert report.repos == 1
    assert report.charts == 3
    assert report.ok
    assert sorted(seen) == [("stable", "nginx", "1.0.0"), ("stable", "nginx", "1.1.0"), ("stable", "redis", "10.0.0")]
    assert store.get("template-stable-nginx-1.1.0")
    assert store.get("value-stable-redis-10.0.0")


def test_seed_charts_collects_failures(service, store, fetcher, chart_source, upstream_error):
    store.set("repos", json.dumps([
        {"name": "stable", "url": STABLE_URL},
        {"name": "broken", "url": "https://broken.example.com"},
    ]))
    fetcher.entries = {"nginx": [{"version": "1.0.0"}]}
    store.set("broken", "")

    original_fetch = fetcher.fetch

    def fetch(url):
        if url == "https://broken.example.com":
            raise upstream_error
        return original_fetch(url)

    fetcher.fetch = fetch

    report = seed_charts(service)

    assert report.repos == 2
    assert report.charts == 1
    assert report.failures == ["broken: connection reset by peer"]


def test_seed_charts_without_repos(service, store):
    store.set("repos", "[]")
    report = seed_charts(service)
    assert report.repos == 0
    assert report.ok


def test_malformed_index_is_reported_per_repo(service, fetcher):
    fetcher.error = UpstreamFetchFailed("unexpected entries in https://chart.stable.com/index.yaml")

    report = seed_charts(service)

    assert report.charts == 0
    assert report.failures == ["stable: unexpected entries in https://chart.stable.com/index.yaml"]
