"""Structured output formatting for CLI commands."""

from __future__ import annotations

import csv
import io
import json
from typing import Any

import click
from rich.console import Console
from rich.table import Table


class OutputFormatter:
    """Format command output as a rich table, JSON, or CSV.

    Usage::

        fmt = OutputFormatter(output_format, quiet)
        fmt.print_table(rows, columns=["path", "size", "commits"])
        fmt.print_success("Diagram written")
    """

    def __init__(self, output_format: str = "table", quiet: bool = False) -> None:
        self.format = output_format
        self.quiet = quiet

    def print_table(
        self,
        data: list[dict[str, Any]],
        columns: list[str] | None = None,
        title: str | None = None,
    ) -> None:
        """Print *data* in the configured format.

        Tables always get a header row even when *data* is empty so callers
        can tell the command succeeded.
        """
        if columns is None:
            columns = list(data[0].keys()) if data else []

        if self.format == "json":
            click.echo(json.dumps([{c: row.get(c) for c in columns} for row in data], indent=2, default=str))
            return

        if self.format == "csv":
            buf = io.StringIO()
            writer = csv.DictWriter(buf, fieldnames=columns, extrasaction="ignore", lineterminator="\n")
            writer.writeheader()
            writer.writerows(data)
            click.echo(buf.getvalue().rstrip("\n"))
            return

        if not columns:
            return

        table = Table(title=title)
        for column in columns:
            numeric = bool(data) and all(isinstance(row.get(column), (int, float)) for row in data)
            table.add_column(column.replace("_", " ").title(), justify="right" if numeric else "left")
        for row in data:
            table.add_row(*(str(row.get(c, "")) for c in columns))

        # Render through click so CliRunner and pipes capture it
        console = Console(file=io.StringIO(), width=120)
        console.print(table)
        click.echo(console.file.getvalue().rstrip("\n"))

    def print_success(self, message: str) -> None:
        """Print a success message (suppressed in quiet mode)."""
        if not self.quiet:
            click.echo(f"OK: {message}")

    def print_message(self, message: str) -> None:
        """Print an informational message (suppressed in quiet mode)."""
        if not self.quiet:
            click.echo(message)
