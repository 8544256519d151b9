"""
Compact ISO-8601 text codec.

Encoding is bit-exact and fixed width::

    DATE       YYYY-MM-DD            "%04d-%02d-%02d"
    DATE_TIME  YYYY-MM-DDTHH:MM:SS   "%04d-%02d-%02dT%02d:%02d:%02d"

Decoding splits strictly on ``T`` (date-time only), then ``-`` and ``:``.
A wrong token count or a token that is not a run of ASCII digits raises
``ParseError``; nothing is guessed or defaulted. Values are not range
checked, so ``"2022-13-01"`` decodes to month 13 just as the explicit
constructor would accept it. Negative years have no text form because the
leading ``-`` is a separator.

Examples:
    >>> format_fields(CivilFields.date(5, 1, 2))
    '0005-01-02'
    >>> parse_date_time("2022-12-08T07:15:00").as_tuple()
    (2022, 12, 8, 7, 15, 0)
    >>> parse_date("ab-01-01")
    Traceback (most recent call last):
        ...
    civiltime.core.errors.ParseError: token 0 of date part 'ab-01-01' is not a number: 'ab'
"""

from __future__ import annotations

from civiltime.core.errors import ParseError
from civiltime.core.fields import CivilFields, FieldSet


def format_fields(fields: CivilFields) -> str:
    text = f"{fields.year:04d}-{fields.month:02d}-{fields.day:02d}"
    if fields.kind == FieldSet.DATE:
        return text
    return f"{text}T{fields.hour:02d}:{fields.minute:02d}:{fields.second:02d}"


def _split(text: str, separator: str, expected: int, part: str, source_text: str) -> list[int]:
    tokens = text.split(separator)
    if len(tokens) != expected:
        raise ParseError(
            f"expected {expected} tokens separated by {separator!r} in {part} {text!r}, got {len(tokens)}",
            text=source_text,
            expected_tokens=expected,
            actual_tokens=len(tokens),
        )
    numbers = []
    for position, token in enumerate(tokens):
        # isdigit() alone would admit non-ASCII digits such as '²'
        if not (token.isascii() and token.isdigit()):
            raise ParseError(
                f"token {position} of {part} {text!r} is not a number: {token!r}",
                text=source_text,
                expected_tokens=expected,
                actual_tokens=len(tokens),
                position=position,
                token=token,
            )
        numbers.append(int(token))
    return numbers


def parse_date(text: str) -> CivilFields:
    """Decode ``YYYY-MM-DD``.

    Raises:
        ParseError: On a wrong token count or a non-numeric token
    """
    if not isinstance(text, str):
        raise TypeError(f"expected str, got {type(text).__name__}")
    year, month, day = _split(text, "-", 3, "date part", text)
    return CivilFields.date(year, month, day)


def parse_date_time(text: str) -> CivilFields:
    """Decode ``YYYY-MM-DDTHH:MM:SS``.

    Raises:
        ParseError: On a wrong token count or a non-numeric token
    """
    if not isinstance(text, str):
        raise TypeError(f"expected str, got {type(text).__name__}")
    parts = text.split("T")
    if len(parts) != 2:
        raise ParseError(
            f"expected date and time separated by 'T' in {text!r}, got {len(parts)} part(s)",
            text=text,
            expected_tokens=2,
            actual_tokens=len(parts),
        )
    year, month, day = _split(parts[0], "-", 3, "date part", text)
    hour, minute, second = _split(parts[1], ":", 3, "time part", text)
    return CivilFields.date_time(year, month, day, hour, minute, second)


__all__ = ["format_fields", "parse_date", "parse_date_time"]
