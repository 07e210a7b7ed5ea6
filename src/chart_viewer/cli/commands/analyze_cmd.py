"""chart-viewer analyze <repo> <chart> <version> - Check API compatibility."""

from __future__ import annotations

from typing import Optional

import typer
from rich.console import Console

from chart_viewer.cli import runtime
from chart_viewer.cli.options import OutputOption, RedisHostOption, RedisPortOption, VerboseOption
from chart_viewer.output.formatters import output_analytics

app = typer.Typer(context_settings={"allow_interspersed_args": True})
console = Console()


@app.callback(invoke_without_command=True)
def analyze(
    repo: str = typer.Argument(help="Repository name"),
    chart: str = typer.Argument(help="Chart name"),
    version: str = typer.Argument(help="Chart version"),
    kube_version: str = typer.Option("", "--kube-version", "-k", help="Target Kubernetes version, e.g. 1.22"),
    output: str = OutputOption,
    redis_host: Optional[str] = RedisHostOption,
    redis_port: Optional[int] = RedisPortOption,
    verbose: bool = VerboseOption,
) -> None:
    """Flag templates whose apiVersion the target Kubernetes version does not serve."""
    runtime.setup_logging(verbose)
    with (
        runtime.exit_on_error(f"analyze the chart {repo}/{chart}:{version}"),
        runtime.build_service(redis_host, redis_port) as svc,
    ):
        detail = svc.get_chart(repo, chart, version)
        results = svc.analyze(detail.templates, kube_version)

    output_analytics(results, kube_version, output)
    if output == "table":
        unsupported = [r for r in results if not r.compatible]
        if unsupported:
            console.print(f"\n[red]{len(unsupported)} template(s) use unsupported API versions[/red]")
        else:
            console.print("\n[green]All templates are compatible[/green]")
