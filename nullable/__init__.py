"""Nullable value types that distinguish unset, null and valid values."""

__version__ = "9.0.0"

__all__ = [
    "base",
    "binary",
    "boolean",
    "convert",
    "floats",
    "text",
    "timestamp",
]