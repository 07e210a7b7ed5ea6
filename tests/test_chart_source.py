import subprocess

import pytest

from chart_viewer.core import chart_source
from chart_viewer.core.chart_source import HelmCliSource, read_templates
from chart_viewer.core.exceptions import RenderFailed, UpstreamFetchFailed


class RunRecorder:
    def __init__(self, stdout="", returncode=0, stderr="", error=None, side_effect=None):
        self.stdout = stdout
        self.returncode = returncode
        self.stderr = stderr
        self.error = error
        self.side_effect = side_effect
        self.commands = []

    def __call__(self, cmd, capture_output, text, timeout):
        self.commands.append(cmd)
        if self.error:
            raise self.error
        if self.side_effect:
            self.side_effect(cmd)
        return subprocess.CompletedProcess(cmd, self.returncode, stdout=self.stdout, stderr=self.stderr)


@pytest.fixture
def helm():
    return HelmCliSource(helm_bin="helm", timeout=5)


def test_get_values(monkeypatch, helm):
    run = RunRecorder(stdout="replicaCount: 1\nimage:\n  repository: nginx\n")
    monkeypatch.setattr(chart_source.subprocess, "run", run)

    values = helm.get_values("https://charts.example.com", "nginx", "1.0.0")

    assert values == {"replicaCount": 1, "image": {"repository": "nginx"}}
    assert run.commands == [[
        "helm", "show", "values", "nginx", "--repo", "https://charts.example.com", "--version", "1.0.0",
    ]]


def test_get_values_of_chart_without_values(monkeypatch, helm):
    monkeypatch.setattr(chart_source.subprocess, "run", RunRecorder(stdout=""))
    assert helm.get_values("https://charts.example.com", "nginx", "1.0.0") == {}


def test_non_zero_exit_is_upstream_failure(monkeypatch, helm):
    run = RunRecorder(returncode=1, stderr='Error: chart "nginx" version "9.9.9" not found')
    monkeypatch.setattr(chart_source.subprocess, "run", run)
    with pytest.raises(UpstreamFetchFailed, match="not found"):
        helm.get_values("https://charts.example.com", "nginx", "9.9.9")


def test_timeout_is_upstream_failure(monkeypatch, helm):
    run = RunRecorder(error=subprocess.TimeoutExpired(["helm"], 5))
    monkeypatch.setattr(chart_source.subprocess, "run", run)
    with pytest.raises(UpstreamFetchFailed, match="timed out"):
        helm.get_values("https://charts.example.com", "nginx", "1.0.0")


def test_missing_binary_is_upstream_failure(monkeypatch, helm):
    monkeypatch.setattr(chart_source.subprocess, "run", RunRecorder(error=FileNotFoundError("helm")))
    with pytest.raises(UpstreamFetchFailed):
        helm.get_values("https://charts.example.com", "nginx", "1.0.0")


def test_render_writes_overrides_to_values_file(monkeypatch, helm):
    captured = {}

    def read_values(cmd):
        path = cmd[cmd.index("--values") + 1]
        with open(path, "rb") as f:
            captured["values"] = f.read()

    run = RunRecorder(stdout="---\n# Source: nginx/templates/svc.yaml\nkind: Service\n", side_effect=read_values)
    monkeypatch.setattr(chart_source.subprocess, "run", run)

    out = helm.render("https://charts.example.com", "nginx", "1.0.0", b"replicaCount: 2\n")

    assert out.startswith("---\n# Source: nginx/templates/svc.yaml")
    assert captured["values"] == b"replicaCount: 2\n"
    assert run.commands[0][:3] == ["helm", "template", "nginx"]


def test_render_failure_is_render_failed(monkeypatch, helm):
    monkeypatch.setattr(chart_source.subprocess, "run", RunRecorder(returncode=1, stderr="parse error"))
    with pytest.raises(RenderFailed):
        helm.render("https://charts.example.com", "nginx", "1.0.0", b"")


def test_get_templates_reads_pulled_chart(monkeypatch, helm):
    def untar(cmd):
        chart_dir = chart_source.Path(cmd[cmd.index("--untardir") + 1]) / "nginx"
        (chart_dir / "templates" / "tests").mkdir(parents=True)
        (chart_dir / "Chart.yaml").write_text("name: nginx\n")
        (chart_dir / "templates" / "service.yaml").write_text("kind: Service\n")
        (chart_dir / "templates" / "tests" / "test-connection.yaml").write_text("kind: Pod\n")

    monkeypatch.setattr(chart_source.subprocess, "run", RunRecorder(side_effect=untar))

    templates = helm.get_templates("https://charts.example.com", "nginx", "1.0.0")

    assert [t.name for t in templates] == ["templates/service.yaml", "templates/tests/test-connection.yaml"]
    assert templates[0].content == "kind: Service\n"


def test_read_templates_requires_templates_dir(tmp_path):
    with pytest.raises(UpstreamFetchFailed):
        read_templates(tmp_path)
