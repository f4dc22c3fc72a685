"""Conversion of raw database values into the types the nullable wrappers hold."""

from __future__ import annotations

import json
import math
import re
import struct
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any


class Kind(Enum):
    """The destination type of a conversion."""

    ANY = "any"
    STRING = "string"
    BYTES = "bytes"
    BOOL = "bool"
    TIME = "time"
    INT = "int"
    INT8 = "int8"
    INT16 = "int16"
    INT32 = "int32"
    INT64 = "int64"
    UINT = "uint"
    UINT8 = "uint8"
    UINT16 = "uint16"
    UINT32 = "uint32"
    UINT64 = "uint64"
    FLOAT32 = "float32"
    FLOAT64 = "float64"


class ConversionError(ValueError):
    """Raised when a value cannot be converted without losing information."""


_SIGNED_BITS = {
    Kind.INT: 64,
    Kind.INT8: 8,
    Kind.INT16: 16,
    Kind.INT32: 32,
    Kind.INT64: 64,
}
_UNSIGNED_BITS = {
    Kind.UINT: 64,
    Kind.UINT8: 8,
    Kind.UINT16: 16,
    Kind.UINT32: 32,
    Kind.UINT64: 64,
}

_SIGNED_RE = re.compile(r"[+-]?[0-9]+", re.ASCII)
_UNSIGNED_RE = re.compile(r"[0-9]+", re.ASCII)
_FLOAT_RE = re.compile(
    r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?", re.ASCII
)
_SPECIAL_FLOAT_RE = re.compile(r"[+-]?(?:inf|infinity|nan)", re.ASCII | re.IGNORECASE)

_TRUE_WORDS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_WORDS = frozenset({"0", "f", "F", "FALSE", "false", "False"})


def format_rfc3339_nano(moment: datetime) -> str:
    """Format a datetime as RFC 3339 with trailing zeros of the fraction dropped.

    Naive datetimes are taken to be in UTC.
    """
    text = (
        f"{moment.year:04d}-{moment.month:02d}-{moment.day:02d}"
        f"T{moment.hour:02d}:{moment.minute:02d}:{moment.second:02d}"
    )
    if moment.microsecond:
        text += "." + f"{moment.microsecond:06d}".rstrip("0")
    offset = moment.utcoffset()
    if not offset:
        return text + "Z"
    seconds = int(offset.total_seconds())
    sign = "-" if seconds < 0 else "+"
    minutes = abs(seconds) // 60
    return f"{text}{sign}{minutes // 60:02d}:{minutes % 60:02d}"


def _format_general(value: float) -> str:
    """Shortest decimal form, switching to exponent form outside [1e-4, 1e6)."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    sign, digit_tuple, exponent = Decimal(repr(value)).normalize().as_tuple()
    digits = "".join(str(d) for d in digit_tuple)
    point = len(digits) + exponent
    exp = point - 1
    prefix = "-" if sign else ""
    if exp < -4 or exp >= 6:
        mantissa = digits[0] + ("." + digits[1:] if len(digits) > 1 else "")
        exp_sign = "-" if exp < 0 else "+"
        return f"{prefix}{mantissa}e{exp_sign}{abs(exp):02d}"
    if point <= 0:
        return f"{prefix}0.{'0' * -point}{digits}"
    if point >= len(digits):
        return prefix + digits + "0" * (point - len(digits))
    return f"{prefix}{digits[:point]}.{digits[point:]}"


def _as_string(src: Any) -> str:
    if isinstance(src, str):
        return src
    if isinstance(src, bytes):
        return src.decode("utf-8", "surrogateescape")
    if isinstance(src, bool):
        return "true" if src else "false"
    if isinstance(src, int):
        return str(src)
    if isinstance(src, float):
        return _format_general(src)
    if src is None:
        return "<nil>"
    return str(src)


def _quote(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


def _number_error(kind: Kind, src: Any, text: str, reason: str) -> ConversionError:
    return ConversionError(
        f"converting value of type {type(src).__name__} ({_quote(text)}) "
        f"to a {kind.value}: {reason}"
    )


def _unsupported(kind: Kind, src: Any) -> ConversionError:
    return ConversionError(
        f"unsupported Scan, storing value of type {type(src).__name__} "
        f"into type {kind.value}"
    )


def _parse_int(kind: Kind, src: Any, text: str) -> int:
    if kind in _SIGNED_BITS:
        bits = _SIGNED_BITS[kind]
        pattern = _SIGNED_RE
        low, high = -(1 << (bits - 1)), (1 << (bits - 1)) - 1
    else:
        bits = _UNSIGNED_BITS[kind]
        pattern = _UNSIGNED_RE
        low, high = 0, (1 << bits) - 1
    if not pattern.fullmatch(text):
        raise _number_error(kind, src, text, "invalid syntax")
    number = int(text)
    if not low <= number <= high:
        raise _number_error(kind, src, text, "value out of range")
    return number


def _parse_float(kind: Kind, src: Any, text: str) -> float:
    special = _SPECIAL_FLOAT_RE.fullmatch(text) is not None
    if not special and not _FLOAT_RE.fullmatch(text):
        raise _number_error(kind, src, text, "invalid syntax")
    result = float(text)
    if math.isinf(result) and not special:
        raise _number_error(kind, src, text, "value out of range")
    if kind is Kind.FLOAT32:
        try:
            result = struct.unpack("<f", struct.pack("<f", result))[0]
        except OverflowError:
            raise _number_error(kind, src, text, "value out of range") from None
    return result


def _to_bool(src: Any) -> bool:
    if isinstance(src, bool):
        return src
    if isinstance(src, (str, bytes)):
        text = _as_string(src)
        if text in _TRUE_WORDS:
            return True
        if text in _FALSE_WORDS:
            return False
        raise ConversionError(f"couldn't convert {_quote(text)} into type bool")
    if isinstance(src, int):
        if src == 1:
            return True
        if src == 0:
            return False
        raise ConversionError(f"couldn't convert {src} into type bool")
    raise ConversionError(
        f"couldn't convert {src!r} ({type(src).__name__}) into type bool"
    )


def convert_assign(kind: Kind | str, src: Any) -> Any:
    """Convert ``src`` to the type named by ``kind``.

    Raises ConversionError when the conversion is not possible or would lose
    information.
    """
    kind = Kind(kind)
    if isinstance(src, (bytearray, memoryview)):
        src = bytes(src)

    if kind is Kind.ANY:
        return src
    if kind is Kind.STRING:
        if isinstance(src, datetime):
            return format_rfc3339_nano(src)
        if isinstance(src, (str, bytes, int, float)):
            return _as_string(src)
        raise _unsupported(kind, src)
    if kind is Kind.BYTES:
        if src is None:
            return None
        if isinstance(src, bytes):
            return src
        if isinstance(src, datetime):
            return format_rfc3339_nano(src).encode("utf-8")
        if isinstance(src, (str, int, float)):
            return _as_string(src).encode("utf-8", "surrogateescape")
        raise _unsupported(kind, src)
    if kind is Kind.BOOL:
        return _to_bool(src)
    if kind is Kind.TIME:
        if isinstance(src, datetime):
            return src
        raise _unsupported(kind, src)

    text = _as_string(src)
    if kind in _SIGNED_BITS or kind in _UNSIGNED_BITS:
        return _parse_int(kind, src, text)
    return _parse_float(kind, src, text)