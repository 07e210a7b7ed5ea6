"""Chart values, templates and rendering through the helm binary."""

from __future__ import annotations

import logging
import subprocess
import tempfile
from pathlib import Path
from typing import Any, Protocol

import yaml

from chart_viewer.config.settings import settings
from chart_viewer.core.exceptions import RenderFailed, UpstreamFetchFailed
from chart_viewer.models.chart import Template

logger = logging.getLogger(__name__)


class ChartSource(Protocol):
    def get_values(self, repo_url: str, chart: str, version: str) -> dict[str, Any]:
        ...

    def get_templates(self, repo_url: str, chart: str, version: str) -> list[Template]:
        ...

    def render(self, repo_url: str, chart: str, version: str, overrides: bytes) -> str:
        """Return the raw multi-document output of rendering with ``overrides``."""
        ...


class HelmCliSource:
    """Drive ``helm show``, ``helm pull`` and ``helm template`` client-side."""

    def __init__(self, helm_bin: str | None = None, timeout: float | None = None):
        self.helm_bin = helm_bin or settings.helm_bin
        self.timeout = settings.timeout if timeout is None else timeout

    def _chart_args(self, repo_url: str, version: str) -> list[str]:
        return ["--repo", repo_url, "--version", version]

    def _run(self, args: list[str], error_cls: type[UpstreamFetchFailed] = UpstreamFetchFailed) -> str:
        cmd = [self.helm_bin, *args]
        logger.debug("running %s", " ".join(cmd))
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise error_cls(f"helm {args[0]} timed out after {self.timeout}s") from e
        except OSError as e:
            raise error_cls(f"cannot run {self.helm_bin}: {e}") from e

        if result.returncode != 0:
            raise error_cls(f"helm {args[0]} failed: {result.stderr.strip()}")
        return result.stdout

    def get_values(self, repo_url: str, chart: str, version: str) -> dict[str, Any]:
        logger.info("getting %s:%s values from remote", chart, version)
        out = self._run(["show", "values", chart, *self._chart_args(repo_url, version)])
        try:
            values = yaml.safe_load(out)
        except yaml.YAMLError as e:
            raise UpstreamFetchFailed(f"cannot parse values of {chart}:{version}: {e}") from e
        if values is None:
            return {}
        if not isinstance(values, dict):
            raise UpstreamFetchFailed(f"values of {chart}:{version} are not a mapping")
        return values

    def get_templates(self, repo_url: str, chart: str, version: str) -> list[Template]:
        logger.info("getting %s:%s templates from remote", chart, version)
        with tempfile.TemporaryDirectory(prefix="chart-viewer-") as tmp:
            self._run([
                "pull", chart, *self._chart_args(repo_url, version),
                "--untar", "--untardir", tmp,
            ])
            return read_templates(Path(tmp) / chart)

    def render(self, repo_url: str, chart: str, version: str, overrides: bytes) -> str:
        logger.info("rendering %s:%s", chart, version)
        with tempfile.TemporaryDirectory(prefix="chart-viewer-") as tmp:
            values_file = Path(tmp) / "values.yaml"
            values_file.write_bytes(overrides)
            return self._run(
                [
                    "template", chart, chart, *self._chart_args(repo_url, version),
                    "--values", str(values_file),
                ],
                error_cls=RenderFailed,
            )


def read_templates(chart_dir: Path) -> list[Template]:
    """Read every file under ``templates/``, named relative to the chart root."""
    templates_dir = chart_dir / "templates"
    if not templates_dir.is_dir():
        raise UpstreamFetchFailed(f"no templates directory in {chart_dir.name}")

    templates: list[Template] = []
    for path in sorted(p for p in templates_dir.rglob("*") if p.is_file()):
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            logger.debug("Skipping unreadable template %s", path, exc_info=True)
            continue
        templates.append(Template(
            name=path.relative_to(chart_dir).as_posix(),
            content=content,
        ))
    return templates
