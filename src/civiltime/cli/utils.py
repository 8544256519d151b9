"""
CLI utility helpers: value parsing and output formatting.
"""

from __future__ import annotations

import json
from typing import Any, NoReturn

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from civiltime.core.errors import CivilTimeError, categorize_error
from civiltime.core.local_date import LocalDate
from civiltime.core.local_datetime import LocalDateTime
from civiltime.core.temporal import CivilValue

console = Console()
err_console = Console(stderr=True)


def parse_value(text: str) -> LocalDate | LocalDateTime:
    """ISO text with a ``T`` is a date-time, otherwise a date."""
    if "T" in text:
        return LocalDateTime.from_iso(text)
    return LocalDate.from_iso(text)


def fail(error: Exception, summary: str = "Error") -> NoReturn:
    """Print ``error`` with its category to stderr and exit with status 1."""
    category = categorize_error(error)
    message = error.message if isinstance(error, CivilTimeError) else str(error)
    err_console.print(f"[bold red]{summary}[/bold red] ({category.value}): {escape(message)}")
    raise typer.Exit(code=1)


def describe(value: CivilValue) -> dict[str, Any]:
    """Stored fields of ``value`` plus its ordering key. Bridge-free."""
    data: dict[str, Any] = {
        "type": type(value).__name__,
        "iso": value.as_iso(),
        "year": value.year,
        "month": value.month,
        "day": value.day,
    }
    if isinstance(value, LocalDateTime):
        data.update(hour=value.hour, minute=value.minute, second=value.second)
    data["linear_timestamp"] = value.linear_timestamp
    return data


def output_mapping(data: dict[str, Any], *, as_json: bool = False, title: str = "") -> None:
    """Render a flat mapping as JSON or a two-column table."""
    if as_json:
        console.print_json(json.dumps(data, default=str))
        return

    table = Table(title=title or None, show_header=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")
    for key, value in data.items():
        table.add_row(key, "" if value is None else str(value))
    console.print(table)
