"""Shared CLI decorators and utilities."""

from __future__ import annotations

import functools
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any

import click
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn

from repoman.exceptions import RepomanError


def common_options(f: Callable[..., Any]) -> Callable[..., Any]:
    """Add ``--quiet`` flag to any command."""
    @click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output")
    @functools.wraps(f)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        return f(*args, **kwargs)
    return wrapper


def diagram_options(f: Callable[..., Any]) -> Callable[..., Any]:
    """Add ``--type`` and ``--layout`` overrides for diagram commands.

    Both default to ``None`` so the configured values apply unless given.
    The Python parameter for ``--type`` is ``diagram_type``.
    """
    @click.option(
        "--type", "diagram_type",
        type=click.Choice(["size", "risk"]),
        default=None,
        help="Color by extension only (size) or shade by commit risk (risk)",
    )
    @click.option(
        "--layout",
        type=click.Choice(["folder", "flat"]),
        default=None,
        help="Nest files in folder rectangles or pack them in one row",
    )
    @functools.wraps(f)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        return f(*args, **kwargs)
    return wrapper


def format_option(
    choices: list[str] | None = None,
    default: str | None = None,
) -> Callable[..., Any]:
    """Add ``--format`` / ``-f`` option with configurable choices.

    The Python parameter is named ``output_format`` to avoid shadowing the
    built-in ``format``.
    """
    if choices is None:
        choices = ["table", "json", "csv"]
    if default is None:
        default = choices[0]

    def decorator(f: Callable[..., Any]) -> Callable[..., Any]:
        @click.option(
            "--format", "-f", "output_format",
            type=click.Choice(choices),
            default=default,
            help="Output format",
        )
        @functools.wraps(f)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            return f(*args, **kwargs)
        return wrapper
    return decorator


def handle_errors(f: Callable[..., Any]) -> Callable[..., Any]:
    """Turn :class:`RepomanError` into a click error (exit code 1)."""
    @functools.wraps(f)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return f(*args, **kwargs)
        except RepomanError as e:
            raise click.ClickException(str(e)) from e
    return wrapper


@contextmanager
def spinner(description: str = "Working...", quiet: bool = False) -> Iterator[None]:
    """Show a transient spinner on stderr while the block runs.

    Usage::

        with spinner("Crawling repository", quiet=quiet):
            tree = crawler.crawl()
    """
    if quiet:
        yield
        return

    progress = Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        TimeElapsedColumn(),
        console=Console(stderr=True),
        transient=True,
    )
    with progress:
        progress.add_task(description, total=None)
        yield
