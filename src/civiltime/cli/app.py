"""
Root Typer application for the civiltime CLI.

    civiltime parse 2022-05-07T23:59:59
    civiltime add 2022-01-31 month 1
    civiltime component 2021-01-01 week_of_year --calendar iso8601
    civiltime intersect 2022-01-01 2022-01-31 2022-01-15 2022-02-15
    civiltime today --at 09:30
"""

from __future__ import annotations

import typer
from typer import Typer

from civiltime.cli.utils import describe, fail, output_mapping, parse_value
from civiltime.core.bridge import AbsoluteTimeBridge, get_bridge
from civiltime.core.calendar import CalendarComponent, CalendarUnit, GregorianCalendar
from civiltime.core.errors import CivilTimeError, ParseError
from civiltime.core.iso import parse_date_time
from civiltime.core.local_date import LocalDate
from civiltime.core.local_datetime import LocalDateTime
from civiltime.core.logging import configure_logging, get_logger
from civiltime.core.ranges import LocalDateRange, LocalDateTimeRange
from civiltime.core.settings import CalendarKind, get_settings

logger = get_logger(__name__)

app = Typer(
    name="civiltime",
    help="civiltime: local date and time values.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# ── Version callback ─────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        from civiltime import __version__

        typer.echo(f"civiltime {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(  # noqa: UP007
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
    log_level: str | None = typer.Option(None, "--log-level", help="Override CIVILTIME_LOG_LEVEL."),
) -> None:
    """Parse, compare and shift civil dates and times."""
    try:
        settings = get_settings()
    except ValueError as exc:
        fail(exc, summary="Invalid configuration")
    configure_logging(level=log_level or settings.log_level, json_format=settings.json_logs)


def _bridge_for(calendar: CalendarKind | None) -> AbsoluteTimeBridge:
    bridge = get_bridge()
    if calendar is None:
        return bridge
    cal = GregorianCalendar.iso8601() if calendar == CalendarKind.ISO8601 else GregorianCalendar()
    return AbsoluteTimeBridge(
        timezone=bridge.timezone,
        date_timezone=bridge.date_timezone,
        calendar=cal,
        clock=bridge.clock,
    )


# ── Commands ─────────────────────────────────────────────────────────────


@app.command("parse")
def parse_cmd(
    text: str = typer.Argument(..., help="YYYY-MM-DD or YYYY-MM-DDTHH:MM:SS"),
    strict: bool = typer.Option(False, "--strict", help="Reject out-of-range fields."),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """Decode ISO text and show its fields, weekday and weekend flag."""
    try:
        value = parse_value(text)
        if strict:
            value.fields.validate()
        data = describe(value)
        data["weekday"] = value.weekday
        data["is_weekend"] = value.is_weekend
    except CivilTimeError as exc:
        logger.debug("cli.parse_failed", **exc.to_dict())
        fail(exc)
    output_mapping(data, as_json=json_out, title=text)


@app.command("add")
def add_cmd(
    text: str = typer.Argument(..., help="Starting value"),
    unit: CalendarUnit = typer.Argument(..., help="Calendar unit"),
    amount: int = typer.Argument(..., help="Amount (may be negative)"),
    calendar: CalendarKind | None = typer.Option(None, "--calendar"),
) -> None:
    """Calendar-aware addition (month ends clamp, years roll over)."""
    try:
        value = parse_value(text)
        result = value.add(unit, amount, bridge=_bridge_for(calendar))
    except CivilTimeError as exc:
        fail(exc)
    typer.echo(result.as_iso())


@app.command("component")
def component_cmd(
    text: str = typer.Argument(..., help="Value to inspect"),
    component: CalendarComponent = typer.Argument(..., help="Calendar component"),
    calendar: CalendarKind | None = typer.Option(None, "--calendar"),
) -> None:
    """Derive one calendar component (week of year, quarter, ...)."""
    try:
        value = parse_value(text)
        result = value.date_component(component, bridge=_bridge_for(calendar))
    except CivilTimeError as exc:
        fail(exc)
    typer.echo(str(result))


@app.command("intersect")
def intersect_cmd(
    start: str = typer.Argument(...),
    end: str = typer.Argument(...),
    other_start: str = typer.Argument(...),
    other_end: str = typer.Argument(...),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """Intersect [START, END] with [OTHER_START, OTHER_END]."""
    try:
        a_start, a_end, b_start, b_end = (parse_value(t) for t in (start, end, other_start, other_end))
    except CivilTimeError as exc:
        fail(exc)
    if len({type(a_start), type(a_end), type(b_start), type(b_end)}) != 1:
        fail(ParseError("all four endpoints must be dates, or all date-times"))

    range_type = LocalDateTimeRange if isinstance(a_start, LocalDateTime) else LocalDateRange
    result = range_type(a_start, a_end).intersect_with(range_type(b_start, b_end))
    if json_out:
        output_mapping({"intersection": result.to_dict() if result else None}, as_json=True)
        return
    typer.echo(result.as_iso() if result else "none")


@app.command("today")
def today_cmd(
    at: str | None = typer.Option(None, "--at", help="Time of day HH:MM[:SS]"),
    date_only: bool = typer.Option(False, "--date", help="Print only the date."),
) -> None:
    """Show the current civil date or date-time."""
    if date_only:
        typer.echo(LocalDate.today().as_iso())
        return
    if at is None:
        typer.echo(LocalDateTime.now().as_iso())
        return
    parts = at.split(":")
    if len(parts) == 2:
        parts.append("00")
    try:
        fields = parse_date_time("0000-01-01T" + ":".join(parts))
    except ParseError as exc:
        fail(exc)
    typer.echo(LocalDateTime.today_at(fields.hour, fields.minute, fields.second).as_iso())


def run() -> None:
    app()


__all__ = ["app", "run"]
