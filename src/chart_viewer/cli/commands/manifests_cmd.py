"""chart-viewer manifests <repo> <chart> <version> <hash> - Print rendered output."""

from __future__ import annotations

from typing import Optional

import typer

from chart_viewer.cli import runtime
from chart_viewer.cli.options import RedisHostOption, RedisPortOption, VerboseOption

app = typer.Typer(context_settings={"allow_interspersed_args": True})


@app.callback(invoke_without_command=True)
def manifests(
    repo: str = typer.Argument(help="Repository name"),
    chart: str = typer.Argument(help="Chart name"),
    version: str = typer.Argument(help="Chart version"),
    digest: str = typer.Argument(help="Hash from the URL printed by 'render'"),
    redis_host: Optional[str] = RedisHostOption,
    redis_port: Optional[int] = RedisPortOption,
    verbose: bool = VerboseOption,
) -> None:
    """Print previously rendered manifests as one multi-document YAML stream."""
    runtime.setup_logging(verbose)
    with (
        runtime.exit_on_error("get manifest"),
        runtime.build_service(redis_host, redis_port) as svc,
    ):
        text = svc.get_rendered_text(repo, chart, version, digest)
    typer.echo(text, nl=False)
