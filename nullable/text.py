"""Nullable strings and single bytes."""

from __future__ import annotations

import json
from typing import Any, ClassVar

from .base import Nullable
from .convert import Kind

_JSON_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def _encode_json_string(text: str) -> bytes:
    encoded = json.dumps(text, ensure_ascii=False)
    for raw, escaped in _JSON_ESCAPES.items():
        encoded = encoded.replace(raw, escaped)
    return encoded.encode("utf-8", "surrogateescape")


def _decode_json_string(data: bytes, target: str) -> str:
    decoded = json.loads(data)
    if not isinstance(decoded, str):
        raise ValueError(
            f"json: cannot unmarshal {type(decoded).__name__} "
            f"into a value of type {target}"
        )
    return decoded


class String(Nullable):
    """A nullable string."""

    _zero: ClassVar[Any] = ""
    _kind: ClassVar[Kind] = Kind.STRING

    def _decode_json(self, data: bytes) -> str:
        return _decode_json_string(data, "string")

    def _encode_json(self, value: Any) -> bytes:
        return _encode_json_string(value)

    def _decode_text(self, text: bytes) -> str:
        return text.decode("utf-8", "surrogateescape")

    def _encode_text(self, value: Any) -> bytes:
        return str(value).encode("utf-8", "surrogateescape")


class Byte(Nullable):
    """A nullable single byte, held as an int from 0 to 255."""

    _zero: ClassVar[Any] = 0
    _kind: ClassVar[Kind] = Kind.UINT8

    def unmarshal_json(self, data) -> None:
        if len(data) == 0:
            self.set = True
            self.valid = False
            self.value = self._zero
            return
        super().unmarshal_json(data)

    def _decode_json(self, data: bytes) -> int:
        raw = _decode_json_string(data, "byte").encode("utf-8", "surrogateescape")
        if len(raw) > 1:
            raise ValueError(
                "json: cannot convert to byte, text len is greater than one"
            )
        if not raw:
            raise ValueError("json: cannot convert to byte, text is empty")
        return raw[0]

    def _encode_json(self, value: Any) -> bytes:
        return b'"' + bytes([value]) + b'"'

    def _decode_text(self, text: bytes) -> int:
        if len(text) > 1:
            raise ValueError(
                "text: cannot convert to byte, text len is greater than one"
            )
        return text[0]

    def _encode_text(self, value: Any) -> bytes:
        return bytes([value])

    def scan(self, value) -> None:
        """Load the first byte of a database string; empty or None is NULL."""
        if value is None:
            raw = b""
        elif isinstance(value, str):
            raw = value.encode("utf-8", "surrogateescape")
        elif isinstance(value, (bytes, bytearray, memoryview)):
            raw = bytes(value)
        else:
            raise TypeError(f"cannot scan type {type(value).__name__} into Byte")
        if not raw:
            self.value, self.valid, self.set = self._zero, False, False
            return
        self.value, self.valid, self.set = raw[0], True, True

    def db_value(self):
        """The byte as a one-byte bytes object, None for NULL."""
        if not self.valid:
            return None
        return bytes([self.value])