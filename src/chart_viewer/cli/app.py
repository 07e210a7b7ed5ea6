"""Root Typer application, mounts sub-commands."""

from __future__ import annotations

import typer

app = typer.Typer(
    name="chart-viewer",
    help="Chart Viewer - Browse, render and analyze Helm charts from cached repositories.",
    no_args_is_help=True,
)


def _register_commands() -> None:
    from chart_viewer.cli.commands.repos_cmd import app as repos_app
    from chart_viewer.cli.commands.charts_cmd import app as charts_app
    from chart_viewer.cli.commands.values_cmd import app as values_app
    from chart_viewer.cli.commands.templates_cmd import app as templates_app
    from chart_viewer.cli.commands.render_cmd import app as render_app
    from chart_viewer.cli.commands.manifests_cmd import app as manifests_app
    from chart_viewer.cli.commands.analyze_cmd import app as analyze_app
    from chart_viewer.cli.commands.seed_cmd import app as seed_app

    app.add_typer(repos_app, name="repos", help="List chart repositories")
    app.add_typer(charts_app, name="charts", help="List charts in a repository")
    app.add_typer(values_app, name="values", help="Show a chart's default values")
    app.add_typer(templates_app, name="templates", help="List or show a chart's templates")
    app.add_typer(render_app, name="render", help="Render a chart with override values")
    app.add_typer(manifests_app, name="manifests", help="Print previously rendered manifests")
    app.add_typer(analyze_app, name="analyze", help="Check templates against a Kubernetes version")
    app.add_typer(seed_app, name="seed", help="Seed the cache with repositories and charts")


_register_commands()


def main() -> None:
    app()
