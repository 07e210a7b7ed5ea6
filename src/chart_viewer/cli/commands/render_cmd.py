"""chart-viewer render <repo> <chart> <version> - Render with override values."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from chart_viewer.cli import runtime
from chart_viewer.cli.options import OutputOption, RedisHostOption, RedisPortOption, VerboseOption
from chart_viewer.output.formatters import output_manifests

app = typer.Typer(context_settings={"allow_interspersed_args": True})


@app.callback(invoke_without_command=True)
def render(
    repo: str = typer.Argument(help="Repository name"),
    chart: str = typer.Argument(help="Chart name"),
    version: str = typer.Argument(help="Chart version"),
    values_file: Optional[Path] = typer.Option(
        None, "--values", "-f", exists=True, dir_okay=False, readable=True,
        help="YAML file with override values (default: none)",
    ),
    output: str = OutputOption,
    redis_host: Optional[str] = RedisHostOption,
    redis_port: Optional[int] = RedisPortOption,
    verbose: bool = VerboseOption,
) -> None:
    """Render a chart version into Kubernetes manifests."""
    runtime.setup_logging(verbose)
    overrides = values_file.read_bytes() if values_file else b""
    with (
        runtime.exit_on_error("render manifest"),
        runtime.build_service(redis_host, redis_port) as svc,
    ):
        result = svc.render(repo, chart, version, overrides)
    output_manifests(result, output)
