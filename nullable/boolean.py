"""Nullable booleans."""

from __future__ import annotations

from typing import Any, ClassVar

from .base import Nullable, _decode_json_as
from .convert import Kind

_TEXT = {b"true": True, b"false": False}


class Bool(Nullable):
    """A nullable bool."""

    _zero: ClassVar[Any] = False
    _kind: ClassVar[Kind] = Kind.BOOL

    def _decode_json(self, data: bytes) -> bool:
        return _decode_json_as(data, lambda value: isinstance(value, bool), "bool")

    def _decode_text(self, text: bytes) -> bool:
        try:
            return _TEXT[text]
        except KeyError:
            raise ValueError(
                "invalid input:" + text.decode("utf-8", "replace")
            ) from None

    def _encode_text(self, value: Any) -> bytes:
        return b"true" if value else b"false"

    _encode_json = _encode_text

    def _to_db(self, value: Any) -> bool:
        return bool(value)