"""Nullable single and double precision floating point numbers."""

from __future__ import annotations

import json
import math
import struct
from decimal import Decimal
from typing import Any, ClassVar

from .base import Nullable
from .convert import Kind, convert_assign


def _to_float32(value: float) -> float:
    """Round a float to the nearest single precision value."""
    try:
        return struct.unpack("<f", struct.pack("<f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def _special(value: float) -> str | None:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    return None


def _plain(text: str) -> str:
    """Write a decimal number without an exponent and without trailing zeros."""
    return format(Decimal(text).normalize(), "f")


def _format_float64(value: float) -> str:
    special = _special(value)
    if special is not None:
        return special
    return _plain(repr(value))


def _format_float32(value: float) -> str:
    special = _special(value)
    if special is not None:
        return special
    target = _to_float32(value)
    for digits in range(1, 10):
        text = f"{target:.{digits - 1}e}"
        if _to_float32(float(text)) == target:
            return _plain(text)
    return _plain(repr(target))


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid character in numeric literal: {name}")


def _decode_json_float(data: bytes) -> float:
    number = json.loads(data, parse_constant=_reject_constant)
    if isinstance(number, bool) or not isinstance(number, (int, float)):
        raise ValueError(
            f"json: cannot unmarshal {type(number).__name__} "
            "into a value of type float64"
        )
    try:
        result = float(number)
    except OverflowError:
        result = math.inf
    if math.isinf(result):
        raise ValueError(
            f"json: cannot unmarshal number {data.decode('utf-8', 'replace')} "
            "into a value of type float64"
        )
    return result


class _Float(Nullable):
    """Shared behaviour of the floating point wrappers."""

    _zero: ClassVar[Any] = 0.0
    _kind: ClassVar[Kind] = Kind.FLOAT64

    def __post_init__(self) -> None:
        super().__post_init__()
        self.value = self._coerce(self.value)

    def set_valid(self, value) -> None:
        super().set_valid(self._coerce(value))

    def _coerce(self, value: Any) -> float:
        return float(value)

    def _decode_text(self, text: bytes) -> float:
        return convert_assign(self._kind, text)

    def _to_db(self, value: Any) -> float:
        return float(value)


class Float32(_Float):
    """A nullable single precision float."""

    _kind = Kind.FLOAT32

    def _coerce(self, value: Any) -> float:
        return _to_float32(float(value))

    def _decode_json(self, data: bytes) -> float:
        return _to_float32(_decode_json_float(data))

    def _encode_json(self, value: Any) -> bytes:
        return _format_float32(float(value)).encode("ascii")

    def _encode_text(self, value: Any) -> bytes:
        return _format_float32(float(value)).encode("ascii")


class Float64(_Float):
    """A nullable double precision float."""

    _kind = Kind.FLOAT64

    def _decode_json(self, data: bytes) -> float:
        return _decode_json_float(data)

    def _encode_json(self, value: Any) -> bytes:
        return _format_float64(float(value)).encode("ascii")

    def _encode_text(self, value: Any) -> bytes:
        return _format_float64(float(value)).encode("ascii")