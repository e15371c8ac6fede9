"""Adapters around the GELF message engine."""

from __future__ import annotations

from .codec import GelfDecodeError, GelfEncodeError, GelfFieldTypeError, decode_message, encode_message
from .stdlib import GelfFormatter

__all__ = [
    "GelfDecodeError",
    "GelfEncodeError",
    "GelfFieldTypeError",
    "GelfFormatter",
    "decode_message",
    "encode_message",
]
