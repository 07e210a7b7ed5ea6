"""Deprecated API analysis models."""

from __future__ import annotations

from dataclasses import dataclass, field

from chart_viewer.models.chart import Template


@dataclass
class KubernetesAPIVersion:
    """API group/versions served by one Kubernetes release."""

    kube_version: str = ""
    api_versions: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, d: dict) -> KubernetesAPIVersion:
        return cls(
            kube_version=str(d.get("kubeVersion", "")),
            api_versions=list(d.get("apiVersions") or []),
        )

    def to_dict(self) -> dict:
        return {"kubeVersion": self.kube_version, "apiVersions": list(self.api_versions)}


@dataclass
class AnalyticsResult:
    template: Template
    compatible: bool

    def to_dict(self) -> dict:
        return {"template": self.template.to_dict(), "compatible": self.compatible}
