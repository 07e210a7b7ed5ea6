"""Wiring shared by every command: logging, the service graph, error exits."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from chart_viewer.core.analyzer import ApiVersionAnalyzer
from chart_viewer.core.cache_store import RedisStore
from chart_viewer.core.catalog_service import CatalogService
from chart_viewer.core.chart_source import HelmCliSource
from chart_viewer.core.exceptions import ChartViewerError
from chart_viewer.core.index_fetcher import HttpIndexFetcher

err_console = Console(stderr=True)


def setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def connect_store(redis_host: Optional[str], redis_port: Optional[int]) -> RedisStore:
    store = RedisStore(host=redis_host, port=redis_port)
    store.ping()
    return store


def build_service(redis_host: Optional[str], redis_port: Optional[int]) -> CatalogService:
    """Connect to Redis and assemble the service with the real collaborators.

    Use the result as a context manager so the HTTP client is closed.
    """
    return CatalogService(
        store=connect_store(redis_host, redis_port),
        fetcher=HttpIndexFetcher(),
        chart_source=HelmCliSource(),
        analyzer=ApiVersionAnalyzer(),
    )


@contextmanager
def exit_on_error(action: str) -> Iterator[None]:
    """Turn a ChartViewerError into a red message and exit code 1."""
    try:
        yield
    except ChartViewerError as e:
        err_console.print(f"[red]cannot {action}:[/red] {e}", markup=True, highlight=False)
        raise typer.Exit(code=1)
