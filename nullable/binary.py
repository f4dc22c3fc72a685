"""Nullable byte strings and nullable raw JSON documents."""

from __future__ import annotations

import base64
import binascii
import json
from typing import Any, ClassVar

from .base import NULL_BYTES, Nullable
from .convert import Kind

_JSON_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def _dump_json(obj: Any) -> bytes:
    """Encode ``obj`` compactly, escaping characters that are unsafe in HTML."""
    encoded = json.dumps(obj, ensure_ascii=False, separators=(",", ":"), allow_nan=False)
    for raw, escaped in _JSON_ESCAPES.items():
        encoded = encoded.replace(raw, escaped)
    return encoded.encode("utf-8")


class _ByteSequence(Nullable):
    """Shared behaviour of the wrappers that hold a byte string."""

    _zero: ClassVar[Any] = None
    _kind: ClassVar[Kind] = Kind.BYTES

    def __post_init__(self) -> None:
        super().__post_init__()
        if isinstance(self.value, (bytearray, memoryview)):
            self.value = bytes(self.value)

    @classmethod
    def from_value(cls, value):
        """Create an instance that is null only when ``value`` is None."""
        return cls.new(value, value is not None)

    def unmarshal_text(self, text) -> None:
        self.set = True
        data = bytes(text.encode("utf-8") if isinstance(text, str) else text)
        if not data:
            self.value = None
            self.valid = False
            return
        self.value = data
        self.valid = True

    def _encode_text(self, value: Any) -> bytes:
        return value if value is not None else b""

    def _to_db(self, value: Any) -> Any:
        return value


class Bytes(_ByteSequence):
    """A nullable byte string, carried in JSON as base64 text."""

    def marshal_json(self) -> bytes:
        if not self.value:
            return NULL_BYTES
        return self._encode_json(self.value)

    def _decode_json(self, data: bytes) -> bytes:
        decoded = json.loads(data)
        if isinstance(decoded, str):
            try:
                return base64.b64decode(decoded, validate=True)
            except binascii.Error as exc:
                raise ValueError(f"illegal base64 data: {exc}") from exc
        if isinstance(decoded, list) and all(
            isinstance(item, int) and not isinstance(item, bool) and 0 <= item <= 255
            for item in decoded
        ):
            return bytes(decoded)
        raise ValueError(
            f"json: cannot unmarshal {type(decoded).__name__} "
            "into a value of type bytes"
        )

    def _encode_json(self, value: Any) -> bytes:
        return b'"' + base64.b64encode(value) + b'"'


class JSON(_ByteSequence):
    """A nullable raw JSON document.

    SQL nullness lives in ``valid``; a JSON ``null`` given to
    ``unmarshal_json`` is taken as SQL null rather than stored as a value.
    """

    def marshal(self, obj) -> None:
        """Encode ``obj`` as JSON and store the result."""
        self.unmarshal_json(_dump_json(obj))

    def unmarshal(self):
        """Decode the stored document; an empty document decodes to None."""
        return json.loads(self.marshal_json())

    def unmarshal_json(self, data) -> None:
        if data is None:
            raise TypeError("null: cannot unmarshal None into a JSON value")
        raw = data.encode("utf-8") if isinstance(data, str) else bytes(data)
        self.set = True
        if raw == NULL_BYTES:
            self.value = None
            self.valid = False
            return
        self.valid = True
        self.value = raw

    def marshal_json(self) -> bytes:
        if not self.value:
            return NULL_BYTES
        return self.value