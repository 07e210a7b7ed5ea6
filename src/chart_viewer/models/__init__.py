"""Data models for Chart Viewer."""

from __future__ import annotations

from chart_viewer.models.analytics import AnalyticsResult, KubernetesAPIVersion
from chart_viewer.models.chart import ChartDetail, Manifest, ManifestResponse, Template
from chart_viewer.models.repo import Chart, Repo

__all__ = [
    "AnalyticsResult",
    "Chart",
    "ChartDetail",
    "KubernetesAPIVersion",
    "Manifest",
    "ManifestResponse",
    "Repo",
    "Template",
]
