"""Common behaviour of the nullable value types."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Callable, ClassVar

from .convert import Kind, convert_assign

NULL_BYTES = b"null"


def _as_bytes(data: bytes | bytearray | str) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    return bytes(data)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _decode_json_as(data: bytes, accept: Callable[[Any], bool], target: str) -> Any:
    """Decode a JSON document and reject it unless ``accept`` approves it."""
    decoded = json.loads(data)
    if not accept(decoded):
        raise ValueError(
            f"json: cannot unmarshal {type(decoded).__name__} "
            f"into a value of type {target}"
        )
    return decoded


@dataclass
class Nullable:
    """A value that may be null and that records whether it was given at all.

    ``valid`` is false for null; ``set`` tells whether a value (null included)
    was explicitly supplied. Subclasses adjust ``_zero``, ``_kind`` and the
    ``_decode_json``, ``_encode_json``, ``_decode_text``, ``_encode_text`` and
    ``_to_db`` hooks.
    """

    value: Any = None
    valid: bool = False
    set: bool = False

    _zero: ClassVar[Any] = None
    _kind: ClassVar[Kind] = Kind.ANY

    def __post_init__(self) -> None:
        if self.value is None:
            self.value = self._zero

    @classmethod
    def new(cls, value, valid):
        """Create an explicitly set instance."""
        return cls(value, valid, True)

    @classmethod
    def from_value(cls, value):
        """Create an instance that is always valid."""
        return cls.new(value, True)

    @classmethod
    def from_optional(cls, value):
        """Create an instance that is null when ``value`` is None."""
        if value is None:
            return cls.new(cls._zero, False)
        return cls.new(value, True)

    def is_valid(self) -> bool:
        """True if a value was set and it is not null."""
        return self.set and self.valid

    def is_set(self) -> bool:
        """True if a value was set, null included."""
        return self.set

    def is_zero(self) -> bool:
        """True for null values."""
        return not self.valid

    def ptr(self):
        """The held value, or None when null."""
        return self.value if self.valid else None

    def set_valid(self, value) -> None:
        """Store ``value`` and mark this as set and not null."""
        self.value = value
        self.valid = True
        self.set = True

    def _become_null(self, set_: bool) -> None:
        self.value = self._zero
        self.valid = False
        self.set = set_

    def marshal_json(self) -> bytes:
        return self._encode_json(self.value) if self.valid else NULL_BYTES

    def unmarshal_json(self, data) -> None:
        data = _as_bytes(data)
        self.set = True
        if data == NULL_BYTES:
            self._become_null(True)
            return
        self.value = self._decode_json(data)
        self.valid = True

    def marshal_text(self) -> bytes:
        return self._encode_text(self.value) if self.valid else b""

    def unmarshal_text(self, text) -> None:
        text = _as_bytes(text)
        self.set = True
        self.valid = False
        if text:
            self.value = self._decode_text(text)
            self.valid = True

    def scan(self, value) -> None:
        """Load a value read from a database; None means SQL NULL."""
        if value is None:
            self._become_null(False)
            return
        self.valid = True
        self.set = True
        self.value = convert_assign(self._kind, value)

    def db_value(self):
        """The value to hand to a database driver, None for NULL."""
        return self._to_db(self.value) if self.valid else None

    def _decode_json(self, data: bytes) -> Any:
        return json.loads(data)

    def _encode_json(self, value: Any) -> bytes:
        return json.dumps(value, separators=(",", ":")).encode("utf-8")

    def _decode_text(self, text: bytes) -> Any:
        return text.decode("utf-8")

    def _encode_text(self, value: Any) -> bytes:
        if isinstance(value, bytes):
            return value
        return str(value).encode("utf-8")

    def _to_db(self, value: Any) -> Any:
        return value


class _Integer(Nullable):
    """Shared behaviour of the integer wrappers."""

    _zero: ClassVar[Any] = 0

    def _decode_json(self, data: bytes) -> int:
        return self._fit_json(_decode_json_as(data, _is_int, self._kind.value))

    def _fit_json(self, number: int) -> int:
        """Check a decoded JSON integer against the width of this type."""
        return number

    def _decode_text(self, text: bytes) -> int:
        return convert_assign(self._kind, text)

    def _encode_text(self, value: Any) -> bytes:
        return str(int(value)).encode("ascii")

    _encode_json = _encode_text

    def _to_db(self, value: Any) -> int:
        return int(value)