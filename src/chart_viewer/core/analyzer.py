"""Flag templates whose apiVersion a Kubernetes release does not serve."""

from __future__ import annotations

import logging
import re
from typing import Protocol

from chart_viewer.models.analytics import AnalyticsResult, KubernetesAPIVersion
from chart_viewer.models.chart import Template

logger = logging.getLogger(__name__)

_API_VERSION_LINE = re.compile(r"^apiVersion:\s*(?P<value>.+?)\s*$", re.MULTILINE)


class Analyzer(Protocol):
    def analyze(
        self, templates: list[Template], catalog: KubernetesAPIVersion,
    ) -> list[AnalyticsResult]:
        ...


def literal_api_versions(content: str) -> list[str]:
    """Return the apiVersion values written literally in a template.

    Values produced by template actions cannot be known before rendering
    and are skipped.
    """
    versions: list[str] = []
    for match in _API_VERSION_LINE.finditer(content):
        value = match.group("value").strip("'\"")
        if not value or "{{" in value:
            continue
        versions.append(value)
    return versions


class ApiVersionAnalyzer:
    """Compare each template's literal apiVersions with the served catalog."""

    def analyze(
        self, templates: list[Template], catalog: KubernetesAPIVersion,
    ) -> list[AnalyticsResult]:
        served = set(catalog.api_versions)
        results: list[AnalyticsResult] = []
        for template in templates:
            compatible = True
            if served:
                missing = [v for v in literal_api_versions(template.content) if v not in served]
                if missing:
                    logger.debug(
                        "%s uses %s, not served by %s",
                        template.name, ", ".join(missing), catalog.kube_version,
                    )
                    compatible = False
            results.append(AnalyticsResult(template=template, compatible=compatible))
        return results
