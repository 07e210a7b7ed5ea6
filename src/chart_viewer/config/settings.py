"""Application configuration and defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "")
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "")
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _default_helm_bin() -> str:
    """Return the helm binary to drive.

    HELM_BIN is the variable helm itself exports to plugins, so honour it.
    """
    return os.environ.get("HELM_BIN", "") or "helm"


@dataclass
class Settings:
    redis_host: str = field(default_factory=lambda: os.environ.get("CHART_VIEWER_REDIS_HOST", "127.0.0.1"))
    redis_port: int = field(default_factory=lambda: _env_int("CHART_VIEWER_REDIS_PORT", 6379))
    redis_db: int = field(default_factory=lambda: _env_int("CHART_VIEWER_REDIS_DB", 0))
    repo_seed_file: Path = field(
        default_factory=lambda: Path(os.environ.get("CHART_VIEWER_REPO_SEED", "./seed.json"))
    )
    kube_version_seed_file: Path = field(
        default_factory=lambda: Path(os.environ.get("CHART_VIEWER_KUBE_VERSION_SEED", "./api_versions.json"))
    )
    helm_bin: str = field(default_factory=_default_helm_bin)
    # Deadline in seconds for every index fetch, helm invocation and store call
    timeout: float = field(default_factory=lambda: _env_float("CHART_VIEWER_TIMEOUT", 60.0))
    api_prefix: str = field(default_factory=lambda: os.environ.get("CHART_VIEWER_API_PREFIX", "/api/v1"))
    default_output: str = "table"

    @property
    def manifests_path(self) -> str:
        return f"{self.api_prefix.rstrip('/')}/charts/manifests"


# Global singleton
settings = Settings()
