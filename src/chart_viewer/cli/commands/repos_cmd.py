"""chart-viewer repos - List chart repositories."""

from __future__ import annotations

from typing import Optional

import typer

from chart_viewer.cli import runtime
from chart_viewer.cli.options import OutputOption, RedisHostOption, RedisPortOption, VerboseOption
from chart_viewer.output.formatters import output_repos

app = typer.Typer(context_settings={"allow_interspersed_args": True})


@app.callback(invoke_without_command=True)
def repos(
    output: str = OutputOption,
    redis_host: Optional[str] = RedisHostOption,
    redis_port: Optional[int] = RedisPortOption,
    verbose: bool = VerboseOption,
) -> None:
    """List the seeded chart repositories."""
    runtime.setup_logging(verbose)
    with (
        runtime.exit_on_error("get repos"),
        runtime.build_service(redis_host, redis_port) as svc,
    ):
        result = svc.list_repos()
    output_repos(result, output)
