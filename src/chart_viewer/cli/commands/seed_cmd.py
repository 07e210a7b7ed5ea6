"""chart-viewer seed - Populate the cache."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from chart_viewer.cli import runtime
from chart_viewer.cli.options import RedisHostOption, RedisPortOption, VerboseOption
from chart_viewer.config.settings import settings
from chart_viewer.core.exceptions import SeedError
from chart_viewer.core.seeder import seed_api_versions, seed_charts, seed_repos

app = typer.Typer(context_settings={"allow_interspersed_args": True})
console = Console()


@app.callback(invoke_without_command=True)
def seed(
    repo_seed: Optional[Path] = typer.Option(
        None, "--repo-seed", help="JSON file with the array of repositories (default: ./seed.json)",
    ),
    kube_version_seed: Optional[Path] = typer.Option(
        None, "--kube-version-seed",
        help="JSON file with the API versions of each Kubernetes version (default: ./api_versions.json)",
    ),
    skip_charts: bool = typer.Option(False, "--skip-charts", help="Only seed repositories and API versions"),
    redis_host: Optional[str] = RedisHostOption,
    redis_port: Optional[int] = RedisPortOption,
    verbose: bool = VerboseOption,
) -> None:
    """Seed the cache with repositories, Kubernetes API versions and chart details."""
    runtime.setup_logging(verbose)
    repo_seed = repo_seed or settings.repo_seed_file
    kube_version_seed = kube_version_seed or settings.kube_version_seed_file

    with (
        runtime.exit_on_error("seed the cache"),
        runtime.build_service(redis_host, redis_port) as svc,
    ):
        try:
            seed_api_versions(svc.store, kube_version_seed)
        except SeedError as e:
            # Analysis still works without a catalog, so keep going
            console.print(f"[yellow]failed to seed api version:[/yellow] {e}", highlight=False)
        seed_repos(svc.store, repo_seed)
        console.print("[green]Chart repositories seeded[/green]")
        if skip_charts:
            return

        with console.status("[bold cyan]Populating charts…") as status:
            def on_progress(repo: str, chart: str, version: str) -> None:
                status.update(f"[bold cyan]Populating charts… [dim]{repo}/{chart}:{version}[/dim]")

            report = seed_charts(svc, on_progress=on_progress)

    console.print(f"Seeded {report.charts} chart version(s) from {report.repos} repo(s)")
    if not report.ok:
        console.print(f"[yellow]{len(report.failures)} item(s) failed:[/yellow]")
        for failure in report.failures:
            console.print(f"  [dim]{failure}[/dim]", highlight=False)
        raise typer.Exit(code=1)
