"""Tests for civiltime.core.local_date.LocalDate.

Covers:
- Total order, equality and hashing from stored fields
- ISO text in and out, including the non-raising constructor
- Calendar arithmetic and derived components through the bridge
- pydantic (de)serialization as a single ISO string
"""

import copy
import pickle
from datetime import UTC, datetime
from zoneinfo import ZoneInfo

import pydantic
import pytest

from civiltime import (
    AbsoluteTimeBridge,
    CalendarComponent,
    CalendarUnit,
    FixedClock,
    GregorianCalendar,
    LocalDate,
    LocalDateTime,
)
from civiltime.core.errors import CalendarRangeError, ParseError
from civiltime.core.formatting import DateStyle, set_formatting_service
from civiltime.core.result import Err, Ok


class TestOrdering:
    def test_total_order(self):
        dates = [LocalDate(2022, 5, 8), LocalDate(2021, 12, 31), LocalDate(2022, 5, 7), LocalDate(2022, 1, 1)]
        assert sorted(dates) == [
            LocalDate(2021, 12, 31),
            LocalDate(2022, 1, 1),
            LocalDate(2022, 5, 7),
            LocalDate(2022, 5, 8),
        ]

    def test_comparison_operators(self):
        a, b = LocalDate(2022, 5, 7), LocalDate(2022, 5, 8)
        assert a < b and a <= b and b > a and b >= a
        assert a <= LocalDate(2022, 5, 7) and a >= LocalDate(2022, 5, 7)
        assert not a < LocalDate(2022, 5, 7)

    def test_cross_year(self):
        assert LocalDate(2021, 12, 31) < LocalDate(2022, 1, 1)

    def test_equality_and_hash(self):
        assert LocalDate(2022, 5, 7) == LocalDate(2022, 5, 7)
        assert LocalDate(2022, 5, 7) != LocalDate(2022, 5, 8)
        assert len({LocalDate(2022, 5, 7), LocalDate(2022, 5, 7)}) == 1

    def test_not_equal_to_date_time_at_midnight(self):
        assert LocalDate(2022, 5, 7) != LocalDateTime(2022, 5, 7)

    def test_ordering_against_other_types_raises(self):
        with pytest.raises(TypeError):
            LocalDate(2022, 5, 7) < LocalDateTime(2022, 5, 8)
        with pytest.raises(TypeError):
            LocalDate(2022, 5, 7) < "2022-05-08"

    def test_out_of_range_fields_do_not_tie(self):
        overflow, conventional = LocalDate(2022, 1, 32), LocalDate(2022, 2, 1)
        assert overflow.linear_timestamp == conventional.linear_timestamp
        assert overflow != conventional
        assert overflow < conventional and conventional > overflow
        assert not (overflow <= conventional and conventional <= overflow)
        assert sorted([conventional, overflow]) == sorted([overflow, conventional]) == [overflow, conventional]

    def test_linear_timestamp(self):
        assert LocalDate(2022, 5, 7).linear_timestamp == 752346

    def test_is_same_day(self):
        assert LocalDate(2022, 5, 7).is_same_day(LocalDate(2022, 5, 7))
        assert LocalDate(2022, 5, 7).is_same_day(LocalDateTime(2022, 5, 7, 23, 59, 59))
        assert not LocalDate(2022, 5, 7).is_same_day(LocalDate(2023, 5, 7))


class TestValueSemantics:
    def test_immutable(self):
        d = LocalDate(2022, 5, 7)
        with pytest.raises(AttributeError):
            d.year = 2023
        with pytest.raises(AttributeError):
            d._fields = None

    def test_no_instance_dict(self):
        assert not hasattr(LocalDate(2022, 5, 7), "__dict__")

    def test_pickle_and_copy(self):
        d = LocalDate(2022, 5, 7)
        assert pickle.loads(pickle.dumps(d)) == d
        assert copy.deepcopy(d) == d

    def test_out_of_range_construction_is_permissive(self):
        assert LocalDate(2022, 2, 30).day == 30

    def test_rejects_non_int(self):
        with pytest.raises(TypeError):
            LocalDate("2022", 5, 7)


class TestIso:
    def test_as_iso_pads_year(self):
        assert LocalDate(5, 1, 2).as_iso() == "0005-01-02"

    def test_str_and_repr(self):
        d = LocalDate(2022, 12, 31)
        assert str(d) == "2022-12-31"
        assert repr(d) == "LocalDate('2022-12-31')"

    def test_from_iso_round_trip(self):
        for text in ("2022-12-31", "0005-01-02", "2024-02-29"):
            assert LocalDate.from_iso(text).as_iso() == text

    def test_from_iso_raises(self):
        with pytest.raises(ParseError):
            LocalDate.from_iso("2022-05")

    def test_from_iso_rejects_date_time_text(self):
        with pytest.raises(ParseError):
            LocalDate.from_iso("2022-05-07T00:00:00")

    def test_try_from_iso_ok(self):
        result = LocalDate.try_from_iso("2022-05-07")
        assert isinstance(result, Ok)
        assert result.unwrap() == LocalDate(2022, 5, 7)

    def test_try_from_iso_err(self):
        result = LocalDate.try_from_iso("2022-xx-07")
        assert isinstance(result, Err)
        assert isinstance(result.error, ParseError)
        assert result.unwrap_or(LocalDate(1970, 1, 1)) == LocalDate(1970, 1, 1)


class TestProjections:
    def test_start_and_end_of_year(self):
        d = LocalDate(2022, 5, 7)
        assert d.start_of_year() == LocalDate(2022, 1, 1)
        assert d.end_of_year() == LocalDate(2022, 12, 31)

    def test_at(self):
        assert LocalDate(2022, 5, 7).at(9, 30) == LocalDateTime(2022, 5, 7, 9, 30)


class TestCalendarOperations:
    def test_add_month_clamps(self, utc_bridge):
        assert LocalDate(2022, 1, 31).add(CalendarUnit.MONTH, 1) == LocalDate(2022, 2, 28)

    def test_add_day_crosses_year(self, utc_bridge):
        assert LocalDate(2022, 12, 31).add(CalendarUnit.DAY, 1) == LocalDate(2023, 1, 1)

    def test_add_negative(self, utc_bridge):
        assert LocalDate(2022, 3, 1).add(CalendarUnit.DAY, -1) == LocalDate(2022, 2, 28)

    def test_add_week(self, utc_bridge):
        assert LocalDate(2022, 5, 7).add(CalendarUnit.WEEK, 2) == LocalDate(2022, 5, 21)

    def test_add_with_explicit_bridge(self, fixed_clock):
        bridge = AbsoluteTimeBridge(timezone=UTC, clock=fixed_clock)
        assert LocalDate(2022, 2, 28).add(CalendarUnit.DAY, 1, bridge=bridge) == LocalDate(2022, 3, 1)

    def test_add_out_of_range(self, utc_bridge):
        with pytest.raises(CalendarRangeError):
            LocalDate(9999, 12, 31).add(CalendarUnit.DAY, 1)

    def test_days_until_is_inclusive(self, utc_bridge):
        days = list(LocalDate(2022, 2, 27).days_until(LocalDate(2022, 3, 2)))
        assert days == [LocalDate(2022, 2, 27), LocalDate(2022, 2, 28), LocalDate(2022, 3, 1), LocalDate(2022, 3, 2)]

    def test_days_until_earlier_date_is_empty(self, utc_bridge):
        assert list(LocalDate(2022, 3, 2).days_until(LocalDate(2022, 3, 1))) == []

    def test_days_until_stops_at_last_supported_day(self, utc_bridge):
        days = list(LocalDate(9999, 12, 30).days_until(LocalDate(9999, 12, 31)))
        assert days == [LocalDate(9999, 12, 30), LocalDate(9999, 12, 31)]

    def test_days_until_same_day(self, utc_bridge):
        assert list(LocalDate(9999, 12, 31).days_until(LocalDate(9999, 12, 31))) == [LocalDate(9999, 12, 31)]

    def test_weekday_and_weekend(self, utc_bridge):
        assert LocalDate(2022, 5, 7).weekday == 7
        assert LocalDate(2022, 5, 7).is_weekend
        assert LocalDate(2022, 5, 9).weekday == 2
        assert not LocalDate(2022, 5, 9).is_weekend

    def test_weekday_with_explicit_bridge(self, fixed_clock):
        friday_weekend = AbsoluteTimeBridge(
            timezone=UTC, calendar=GregorianCalendar(weekend_days=frozenset({6, 7})), clock=fixed_clock
        )
        sunday = LocalDate(2022, 5, 8)
        assert sunday.weekday_number(bridge=friday_weekend) == 1
        assert not sunday.falls_on_weekend(bridge=friday_weekend)
        assert LocalDate(2022, 5, 6).falls_on_weekend(bridge=friday_weekend)

    def test_date_component_with_calendar(self, utc_bridge):
        d = LocalDate(2021, 1, 1)
        assert d.date_component(CalendarComponent.WEEK_OF_YEAR) == 1
        assert d.date_component(CalendarComponent.WEEK_OF_YEAR, GregorianCalendar.iso8601()) == 53
        assert d.date_component(CalendarComponent.QUARTER) == 1

    def test_as_instant(self, utc_bridge):
        instant = LocalDate(2022, 5, 7).as_instant()
        assert instant.date().isoformat() == "2022-05-07"
        assert instant.tzinfo is UTC

    def test_as_instant_in_zone(self, utc_bridge):
        instant = LocalDate(2022, 5, 7).as_instant(ZoneInfo("Asia/Tokyo"))
        assert instant.utcoffset().total_seconds() == 9 * 3600


class TestCurrentDate:
    def test_today(self, utc_bridge):
        assert LocalDate.today() == LocalDate(2024, 3, 15)

    def test_today_in_zone_ahead_of_utc(self):
        late = AbsoluteTimeBridge(clock=FixedClock(datetime(2024, 3, 15, 20, tzinfo=UTC)))
        assert LocalDate.today(ZoneInfo("Asia/Tokyo"), bridge=late) == LocalDate(2024, 3, 16)

    def test_from_instant(self, utc_bridge):
        instant = datetime(2022, 5, 7, 23, 30, tzinfo=UTC)
        assert LocalDate.from_instant(instant) == LocalDate(2022, 5, 7)
        assert LocalDate.from_instant(instant, ZoneInfo("Europe/Berlin")) == LocalDate(2022, 5, 8)


class TestFormatted:
    def test_uses_formatting_service(self, utc_bridge, fake_formatting):
        text = LocalDate(2022, 5, 7).formatted("de_DE", DateStyle.LONG, service=fake_formatting)
        assert text == "de_DE|long|2022-05-07"

    def test_uses_default_service(self, utc_bridge, fake_formatting):
        set_formatting_service(fake_formatting)
        assert LocalDate(2022, 5, 7).formatted() == "None|short|2022-05-07"

    def test_configured_locale(self, utc_bridge, fake_formatting, monkeypatch):
        monkeypatch.setenv("CIVILTIME_LOCALE", "fr_FR")
        assert LocalDate(2022, 5, 7).formatted(service=fake_formatting) == "fr_FR|short|2022-05-07"
        assert LocalDate(2022, 5, 7).formatted("de_DE", service=fake_formatting) == "de_DE|short|2022-05-07"


class Deadline(pydantic.BaseModel):
    due: LocalDate
    starts_at: LocalDateTime | None = None


class TestPydantic:
    def test_validate_from_string(self, sample_payload):
        model = Deadline.model_validate(sample_payload)
        assert model.due == LocalDate(2022, 5, 7)
        assert model.starts_at == LocalDateTime(2022, 5, 7, 9, 30)

    def test_accepts_instance(self):
        assert Deadline(due=LocalDate(2022, 5, 7)).due == LocalDate(2022, 5, 7)

    def test_serializes_as_iso_string(self, sample_payload):
        model = Deadline.model_validate(sample_payload)
        assert model.model_dump(mode="json") == sample_payload
        assert model.model_dump_json() == '{"due":"2022-05-07","starts_at":"2022-05-07T09:30:00"}'

    def test_python_mode_keeps_value(self):
        model = Deadline(due=LocalDate(2022, 5, 7))
        assert model.model_dump()["due"] == LocalDate(2022, 5, 7)

    def test_invalid_string(self):
        with pytest.raises(pydantic.ValidationError, match="not a number"):
            Deadline.model_validate({"due": "2022-xx-07"})

    def test_wrong_type(self):
        with pytest.raises(pydantic.ValidationError):
            Deadline.model_validate({"due": 20220507})

    def test_json_schema(self):
        schema = Deadline.model_json_schema()
        assert schema["properties"]["due"]["type"] == "string"
        assert "pattern" in schema["properties"]["due"]
