"""Nullable points in time."""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone
from typing import Any, ClassVar

from .base import NULL_BYTES, Nullable
from .convert import Kind, format_rfc3339_nano

_RFC3339 = re.compile(
    r"(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2})"
    r"(?:\.(\d{1,9}))?"
    r"(Z|[+-]\d{2}:\d{2})",
    re.ASCII,
)


def _parse_rfc3339(text: str) -> datetime:
    match = _RFC3339.fullmatch(text)
    if match is None:
        raise ValueError(f"parsing time {text!r} as RFC 3339: invalid format")
    year, month, day, hour, minute, second = (int(g) for g in match.groups()[:6])
    fraction = match.group(7) or ""
    microsecond = int(fraction.ljust(6, "0")[:6]) if fraction else 0
    zone = match.group(8)
    if zone == "Z":
        tz = timezone.utc
    else:
        hours, minutes = int(zone[1:3]), int(zone[4:6])
        if hours >= 24 or minutes >= 60:
            raise ValueError(f"parsing time {text!r}: time zone offset out of range")
        offset = timedelta(hours=hours, minutes=minutes)
        tz = timezone(-offset if zone[0] == "-" else offset)
    try:
        return datetime(year, month, day, hour, minute, second, microsecond, tzinfo=tz)
    except ValueError as exc:
        raise ValueError(f"parsing time {text!r}: {exc}") from exc


class Time(Nullable):
    """A nullable datetime, written as RFC 3339 text."""

    _zero: ClassVar[Any] = datetime(1, 1, 1, tzinfo=timezone.utc)
    _kind: ClassVar[Kind] = Kind.TIME

    def marshal_text(self) -> bytes:
        if not self.valid:
            return NULL_BYTES
        return self._encode_text(self.value)

    def scan(self, value) -> None:
        """Load a database value; only datetimes and None are accepted."""
        if value is None:
            self.valid = False
            self.set = False
            return
        if not isinstance(value, datetime):
            raise TypeError(
                f"null: cannot scan type {type(value).__name__} into Time: {value!r}"
            )
        self.value = value
        self.valid = True
        self.set = True

    def _decode_json(self, data: bytes) -> datetime:
        if len(data) < 2 or data[:1] != b'"' or data[-1:] != b'"':
            raise ValueError("Time.unmarshal_json: input is not a JSON string")
        return _parse_rfc3339(data[1:-1].decode("utf-8"))

    def _encode_json(self, value: Any) -> bytes:
        return b'"' + format_rfc3339_nano(value).encode("ascii") + b'"'

    def _decode_text(self, text: bytes) -> datetime:
        return _parse_rfc3339(text.decode("utf-8"))

    def _encode_text(self, value: Any) -> bytes:
        return format_rfc3339_nano(value).encode("ascii")