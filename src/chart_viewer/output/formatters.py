"""Table / JSON / YAML output dispatch."""

from __future__ import annotations

import json
from typing import Any

import yaml
from rich.console import Console

from chart_viewer.models.analytics import AnalyticsResult
from chart_viewer.models.chart import ManifestResponse, Template
from chart_viewer.models.repo import Chart, Repo

console = Console()


def _print_data(data: Any, fmt: str) -> bool:
    """Print ``data`` as JSON or YAML; return False for table output."""
    if fmt == "json":
        console.print_json(json.dumps(data, indent=2))
        return True
    if fmt == "yaml":
        console.print(yaml.dump(data, default_flow_style=False, sort_keys=False), end="", markup=False)
        return True
    return False


def output_repos(repos: list[Repo], fmt: str) -> None:
    if not _print_data([r.to_dict() for r in repos], fmt):
        from chart_viewer.output.tables import repo_list_table
        console.print(repo_list_table(repos))


def output_charts(repo_name: str, charts: list[Chart], fmt: str) -> None:
    if not _print_data([c.to_dict() for c in charts], fmt):
        from chart_viewer.output.tables import chart_list_table
        console.print(chart_list_table(repo_name, charts))


def output_values(values: dict, title: str, fmt: str) -> None:
    if not _print_data(values, fmt):
        from chart_viewer.output.tables import values_panel
        console.print(values_panel(values, title))


def output_templates(templates: list[Template], fmt: str) -> None:
    if not _print_data([t.to_dict() for t in templates], fmt):
        from chart_viewer.output.tables import template_list_table
        console.print(template_list_table(templates))


def output_manifests(response: ManifestResponse, fmt: str) -> None:
    if not _print_data(response.to_dict(), fmt):
        from chart_viewer.output.tables import manifest_list_table
        console.print(manifest_list_table(response))


def output_analytics(results: list[AnalyticsResult], kube_version: str, fmt: str) -> None:
    data = [{"template": r.template.name, "compatible": r.compatible} for r in results]
    if not _print_data(data, fmt):
        from chart_viewer.output.tables import analytics_table
        console.print(analytics_table(results, kube_version))
