"""Shared CLI options."""

from __future__ import annotations

import typer

OutputOption = typer.Option("table", "--output", "-o", help="Output format: table, json, yaml")
RedisHostOption = typer.Option(None, "--redis-host", help="Redis host address (default: $CHART_VIEWER_REDIS_HOST)")
RedisPortOption = typer.Option(None, "--redis-port", help="Redis host port (default: $CHART_VIEWER_REDIS_PORT)")
VerboseOption = typer.Option(False, "--verbose", "-v", help="Enable debug logging")
