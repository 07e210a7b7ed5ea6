"""chart-viewer values <repo> <chart> <version> - Show default values."""

from __future__ import annotations

from typing import Optional

import typer

from chart_viewer.cli import runtime
from chart_viewer.cli.options import OutputOption, RedisHostOption, RedisPortOption, VerboseOption
from chart_viewer.output.formatters import output_values

app = typer.Typer(context_settings={"allow_interspersed_args": True})


@app.callback(invoke_without_command=True)
def values(
    repo: str = typer.Argument(help="Repository name"),
    chart: str = typer.Argument(help="Chart name"),
    version: str = typer.Argument(help="Chart version"),
    output: str = OutputOption,
    redis_host: Optional[str] = RedisHostOption,
    redis_port: Optional[int] = RedisPortOption,
    verbose: bool = VerboseOption,
) -> None:
    """Show the default values of a chart version."""
    runtime.setup_logging(verbose)
    with (
        runtime.exit_on_error(f"get values of {repo}/{chart}:{version}"),
        runtime.build_service(redis_host, redis_port) as svc,
    ):
        result = svc.get_values(repo, chart, version)
    output_values(result, f"{chart}-{version} values", output)
