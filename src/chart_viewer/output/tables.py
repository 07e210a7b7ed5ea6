"""Rich table builders for each command."""

from __future__ import annotations

import yaml
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from chart_viewer.models.analytics import AnalyticsResult
from chart_viewer.models.chart import ManifestResponse, Template
from chart_viewer.models.repo import Chart, Repo
from chart_viewer.output.themes import styled_compatibility
from chart_viewer.utils.version_compare import latest_version


def repo_list_table(repos: list[Repo]) -> Table:
    table = Table(title="Chart Repositories", expand=True)
    table.add_column("Name", style="bold white", no_wrap=True)
    table.add_column("URL", style="cyan")
    for r in repos:
        table.add_row(r.name, r.url)
    return table


def chart_list_table(repo_name: str, charts: list[Chart]) -> Table:
    table = Table(title=f"Charts in {repo_name}", expand=True)
    table.add_column("Chart", style="magenta", no_wrap=True)
    table.add_column("Latest", style="bold")
    table.add_column("Versions", justify="right", style="dim")
    for c in charts:
        table.add_row(c.name, latest_version(c.versions) or "-", str(len(c.versions)))
    return table


def values_panel(values: dict, title: str) -> Panel:
    text = yaml.dump(values, default_flow_style=False, sort_keys=False) if values else "(no default values)"
    syntax = Syntax(text, "yaml", theme="monokai", line_numbers=False)
    return Panel(syntax, title=f"[bold]{title}[/bold]", border_style="green")


def template_list_table(templates: list[Template]) -> Table:
    table = Table(title="Templates", expand=True)
    table.add_column("Template", style="cyan")
    table.add_column("Lines", justify="right", style="dim")
    for t in templates:
        table.add_row(t.name, str(len(t.content.splitlines())))
    return table


def manifest_list_table(response: ManifestResponse) -> Table:
    table = Table(title="Rendered Manifests", caption=response.url, expand=True)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Manifest", style="cyan")
    for i, m in enumerate(response.manifests, 1):
        table.add_row(str(i), m.name)
    return table


def analytics_table(results: list[AnalyticsResult], kube_version: str) -> Table:
    title = f"API Compatibility (Kubernetes {kube_version})" if kube_version else "API Compatibility"
    table = Table(title=title, expand=True)
    table.add_column("Template", style="cyan")
    table.add_column("Status", no_wrap=True)
    for r in results:
        table.add_row(r.template.name, styled_compatibility(r.compatible))
    return table
