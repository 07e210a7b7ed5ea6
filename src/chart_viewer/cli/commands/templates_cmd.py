"""chart-viewer templates <repo> <chart> <version> - List or show templates."""

from __future__ import annotations

from typing import Optional

import typer
from rich.console import Console
from rich.syntax import Syntax

from chart_viewer.cli import runtime
from chart_viewer.cli.options import OutputOption, RedisHostOption, RedisPortOption, VerboseOption
from chart_viewer.output.formatters import output_templates

app = typer.Typer(context_settings={"allow_interspersed_args": True})
console = Console()


@app.callback(invoke_without_command=True)
def templates(
    repo: str = typer.Argument(help="Repository name"),
    chart: str = typer.Argument(help="Chart name"),
    version: str = typer.Argument(help="Chart version"),
    show: Optional[str] = typer.Option(None, "--show", "-s", help="Print one template, e.g. templates/service.yaml"),
    output: str = OutputOption,
    redis_host: Optional[str] = RedisHostOption,
    redis_port: Optional[int] = RedisPortOption,
    verbose: bool = VerboseOption,
) -> None:
    """List the template files of a chart version."""
    runtime.setup_logging(verbose)
    with (
        runtime.exit_on_error(f"get templates of {repo}/{chart}:{version}"),
        runtime.build_service(redis_host, redis_port) as svc,
    ):
        result = svc.get_templates(repo, chart, version)

    if show is None:
        output_templates(result, output)
        return

    for t in result:
        if t.name == show:
            console.print(Syntax(t.content, "yaml", theme="monokai", line_numbers=True))
            return
    typer.echo(f"Template '{show}' not found in {chart}-{version}.", err=True)
    raise typer.Exit(code=1)
