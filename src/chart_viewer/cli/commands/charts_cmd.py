"""chart-viewer charts <repo> - List charts in a repository."""

from __future__ import annotations

from typing import Optional

import typer

from chart_viewer.cli import runtime
from chart_viewer.cli.options import OutputOption, RedisHostOption, RedisPortOption, VerboseOption
from chart_viewer.output.formatters import output_charts

app = typer.Typer(context_settings={"allow_interspersed_args": True})


@app.callback(invoke_without_command=True)
def charts(
    repo: str = typer.Argument(help="Repository name"),
    output: str = OutputOption,
    redis_host: Optional[str] = RedisHostOption,
    redis_port: Optional[int] = RedisPortOption,
    verbose: bool = VerboseOption,
) -> None:
    """List the charts of a repository with their versions."""
    runtime.setup_logging(verbose)
    with (
        runtime.exit_on_error(f"get charts from repo {repo}"),
        runtime.build_service(redis_host, redis_port) as svc,
    ):
        result = svc.list_charts(repo)
    output_charts(repo, result, output)
