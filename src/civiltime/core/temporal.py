"""
Shared behaviour of the civil value types.

``CivilValue`` is the common base of ``LocalDate`` and ``LocalDateTime``.
It owns the wrapped ``CivilFields`` and implements everything that depends
only on stored fields (ordering, equality, hashing, ISO text, pydantic
integration) once, plus the thin wrappers that route expensive work to the
absolute-time bridge.

Manifesto:
    Civil time is a value, not an instant. Two values compare by their
    fields and nothing else: no zone lookup, no calendar, no clock. Only
    the operations that genuinely need an instant pay for one, and they are
    marked as expensive.

Architecture:
    ::

        ┌──────────────────────────────────────────────────────────┐
        │                      CivilValue                           │
        ├────────────────────────────┬─────────────────────────────┤
        │  Cheap (fields only)       │  Expensive (via bridge)      │
        │  ───────────────────       │  ──────────────────────      │
        │  < <= > >= == hash         │  as_instant()                │
        │  linear_timestamp          │  date_component()            │
        │  is_same_day()             │  weekday / is_weekend        │
        │  as_iso() / from_iso()     │  formatted()                 │
        │  pydantic (de)serialize    │                              │
        └────────────────────────────┴─────────────────────────────┘
                   ▲                              ▲
                   │                              │
              LocalDate                     LocalDateTime

Performance:
    - **Comparison / hash:** O(1), integer arithmetic on stored fields
    - **Bridge calls:** a clock read, a zone conversion and datetime
      arithmetic per call; do not use them inside sort keys

Tags:
    temporal, value-object, ordering, civil-time, civiltime
"""

from __future__ import annotations

from datetime import datetime, tzinfo
from typing import Any, Callable, ClassVar

from pydantic import GetCoreSchemaHandler, GetJsonSchemaHandler
from pydantic.json_schema import JsonSchemaValue
from pydantic_core import core_schema

from civiltime.core.bridge import AbsoluteTimeBridge, get_bridge
from civiltime.core.calendar import CalendarComponent
from civiltime.core.errors import ParseError
from civiltime.core.fields import CivilFields, FieldSet
from civiltime.core.formatting import DateStyle, get_formatting_service
from civiltime.core.iso import format_fields
from civiltime.core.logging import get_logger
from civiltime.core.protocols import CalendarSystem, FormattingService, LocalDateLike
from civiltime.core.result import Err, Ok, Result
from civiltime.core.settings import get_settings

logger = get_logger(__name__)


class CivilValue:
    """
    Immutable civil value wrapping a complete ``CivilFields``.

    Subclasses set ``_kind`` (which field set they wrap), ``_parse`` (the
    ISO decoder for that set) and ``_json_pattern``.
    """

    __slots__ = ("_fields",)

    _kind: ClassVar[FieldSet]
    _parse: ClassVar[Callable[[str], CivilFields]]
    _json_pattern: ClassVar[str]

    _fields: CivilFields

    @classmethod
    def _from_fields(cls, fields: CivilFields) -> Any:
        if fields.kind != cls._kind:
            fields = fields.date_only() if cls._kind == FieldSet.DATE else CivilFields.date_time(*fields.as_tuple())
        value = object.__new__(cls)
        object.__setattr__(value, "_fields", fields)
        return value

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __reduce__(self) -> tuple[Any, ...]:
        return (type(self), self._fields.as_tuple())

    # ------------------------------------------------------------------ #
    # Stored fields
    # ------------------------------------------------------------------ #

    @property
    def fields(self) -> CivilFields:
        return self._fields

    @property
    def year(self) -> int:
        return self._fields.year

    @property
    def month(self) -> int:
        return self._fields.month

    @property
    def day(self) -> int:
        return self._fields.day

    @property
    def linear_timestamp(self) -> int:
        """This timestamp has only "ordered" semantics."""
        return self._fields.linear_timestamp

    def is_same_day(self, other: LocalDateLike) -> bool:
        """Compare calendar days only, ignoring any time of day."""
        return (self.year, self.month, self.day) == (other.year, other.month, other.day)

    # ------------------------------------------------------------------ #
    # Ordering / equality
    # ------------------------------------------------------------------ #

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._fields == other._fields

    def __hash__(self) -> int:
        return hash(self._fields)

    def __lt__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._fields.sort_key < other._fields.sort_key

    def __le__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._fields.sort_key <= other._fields.sort_key

    def __gt__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._fields.sort_key > other._fields.sort_key

    def __ge__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._fields.sort_key >= other._fields.sort_key

    # ------------------------------------------------------------------ #
    # Compact ISO coding, e.g. "2022-12-08T07:15:00"
    # ------------------------------------------------------------------ #

    def as_iso(self) -> str:
        return format_fields(self._fields)

    def __str__(self) -> str:
        return self.as_iso()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.as_iso()!r})"

    @classmethod
    def from_iso(cls, text: str) -> Any:
        """Decode ISO text.

        Raises:
            ParseError: On malformed text (wrong token count, non-numeric token)
        """
        return cls._from_fields(cls._parse(text))

    @classmethod
    def try_from_iso(cls, text: str) -> Result[Any]:
        """Decode ISO text into ``Ok(value)`` or ``Err(ParseError)``."""
        try:
            return Ok(cls.from_iso(text))
        except ParseError as exc:
            logger.debug("iso.parse_failed", value_type=cls.__name__, **exc.to_dict())
            return Err(exc)

    # ------------------------------------------------------------------ #
    # Expensive: routed through the absolute-time bridge
    # ------------------------------------------------------------------ #

    def as_instant(
        self,
        timezone: tzinfo | None = None,
        *,
        calendar: CalendarSystem | None = None,
        bridge: AbsoluteTimeBridge | None = None,
    ) -> datetime:
        """Expensive computation! Resolve to an aware datetime."""
        return (bridge or get_bridge()).to_absolute(self._fields, timezone, calendar)

    def date_component(
        self,
        component: CalendarComponent,
        calendar: CalendarSystem | None = None,
        *,
        bridge: AbsoluteTimeBridge | None = None,
    ) -> int:
        """Expensive computation! ``calendar`` may change the result (e.g. week numbers)."""
        return (bridge or get_bridge()).component(self._fields, component, calendar=calendar)

    @property
    def weekday(self) -> int:
        """Expensive computation! 1 = Sunday ... 7 = Saturday."""
        return self.weekday_number()

    @property
    def is_weekend(self) -> bool:
        """Expensive computation!"""
        return self.falls_on_weekend()

    def weekday_number(self, *, bridge: AbsoluteTimeBridge | None = None) -> int:
        """``weekday`` resolved through an explicit bridge."""
        return (bridge or get_bridge()).weekday(self._fields)

    def falls_on_weekend(self, *, bridge: AbsoluteTimeBridge | None = None) -> bool:
        return (bridge or get_bridge()).is_weekend(self._fields)

    def formatted(
        self,
        locale: str | None = None,
        style: DateStyle = DateStyle.SHORT,
        *,
        service: FormattingService | None = None,
        bridge: AbsoluteTimeBridge | None = None,
    ) -> str:
        """Expensive computation! Localized date text."""
        if locale is None:
            locale = get_settings().locale
        if service is None:
            service = get_formatting_service()
        return service.localized_date_string(self.as_instant(bridge=bridge), locale, style)

    # ------------------------------------------------------------------ #
    # pydantic: a single ISO string field
    # ------------------------------------------------------------------ #

    @classmethod
    def _validate(cls, value: Any) -> Any:
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls.from_iso(value)
            except ParseError as exc:
                raise ValueError(exc.message) from exc
        raise ValueError(f"expected {cls.__name__} or ISO string, got {type(value).__name__}")

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            cls._validate,
            serialization=core_schema.to_string_ser_schema(),
        )

    @classmethod
    def __get_pydantic_json_schema__(
        cls, schema: core_schema.CoreSchema, handler: GetJsonSchemaHandler
    ) -> JsonSchemaValue:
        return {"type": "string", "pattern": cls._json_pattern}


__all__ = ["CivilValue"]
