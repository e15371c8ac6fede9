"""JSON codec for :class:`GelfMessage`.

Purpose
-------
Serialise a message into one flat GELF JSON object, with the fixed schema
fields and the extra fields as siblings, and parse received GELF JSON back
into a message.

Contents
--------
* :class:`GelfEncodeError`, :class:`GelfDecodeError`, :class:`GelfFieldTypeError`.
* :func:`encode_message` / :func:`decode_message`.

System Role
-----------
Last stage of the write path; the bytes returned by :func:`encode_message`
go to a transport unchanged. :func:`decode_message` serves readers and tests.
"""

from __future__ import annotations

import json
import logging
import math
from typing import Any

from lib_log_gelf.domain.message import SCHEMA_FIELDS, GelfMessage

logger = logging.getLogger(__name__)

_TEXT_FIELDS = {
    "version": "version",
    "host": "host",
    "short_message": "short",
    "full_message": "full",
    "facility": "facility",
}


class GelfEncodeError(ValueError):
    """Raised when a message cannot be serialised to JSON."""


class GelfDecodeError(ValueError):
    """Raised when a payload is not a JSON object."""


class GelfFieldTypeError(TypeError):
    """Raised when a fixed GELF field carries the wrong JSON type."""

    def __init__(self, field: str) -> None:
        super().__init__(f"invalid type for field {field}")
        self.field = field


def _raw_extra_members(raw_extra: str | bytes) -> tuple[str, set[str]]:
    """Return the member text of ``raw_extra`` without its braces, and its keys.

    The fragment is parsed only to validate it; its members are written out
    exactly as given.
    """
    try:
        text = raw_extra.decode("utf-8") if isinstance(raw_extra, (bytes, bytearray)) else raw_extra
        fields = json.loads(text)
    except (ValueError, RecursionError) as exc:
        raise GelfEncodeError("raw extra is not valid JSON") from exc
    if not isinstance(fields, dict):
        raise GelfEncodeError("raw extra must be a JSON object")
    shadowed = sorted(key for key in fields if key in SCHEMA_FIELDS)
    if shadowed:
        raise GelfEncodeError(f"raw extra shadows GELF schema fields: {', '.join(shadowed)}")
    return text.strip()[1:-1].strip(), set(fields)


def _merge_extra(data: dict[str, Any], fields: dict[str, Any], skip: set[str]) -> None:
    for key in sorted(fields):
        if key in skip:
            continue
        if key in SCHEMA_FIELDS:
            logger.warning("dropping extra field %r shadowing a GELF schema field", key)
            continue
        data[key] = fields[key]


def encode_message(message: GelfMessage) -> bytes:
    """Serialise ``message`` to compact UTF-8 JSON.

    The schema fields come first, then the extra fields sorted by key, then
    the members of ``raw_extra`` spliced in verbatim. An extra field whose key
    also appears in ``raw_extra`` is left out, so the raw member wins. Extra
    fields shadowing a schema field are dropped; a ``raw_extra`` shadowing
    one is rejected.

    Raises
    ------
    GelfEncodeError
        When a value is not JSON serialisable or ``raw_extra`` is not a JSON
        object free of schema field names.

    Examples
    --------
    >>> encode_message(GelfMessage(host="api01", short="hi", timestamp=1.5, level=6, extra={"_id": "0a1"}))
    b'{"version":"1.1","host":"api01","short_message":"hi","timestamp":1.5,"level":6,"_id":"0a1"}'
    >>> encode_message(GelfMessage(host="h", short="s", timestamp=1.0, raw_extra='{"_big": 1e400}'))
    b'{"version":"1.1","host":"h","short_message":"s","timestamp":1.0,"_big": 1e400}'
    """
    raw_members, raw_keys = _raw_extra_members(message.raw_extra) if message.raw_extra else ("", set())

    data = message.schema_fields()
    if message.extra:
        _merge_extra(data, message.extra, raw_keys)

    try:
        text = json.dumps(data, ensure_ascii=False, separators=(",", ":"), allow_nan=False)
    except (TypeError, ValueError) as exc:
        raise GelfEncodeError(f"cannot serialise GELF message: {exc}") from exc
    if raw_members:
        # schema fields always precede the splice
        text = f"{text[:-1]},{raw_members}}}"
    return text.encode("utf-8")


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def decode_message(data: bytes | str) -> GelfMessage:
    """Parse GELF JSON into a :class:`GelfMessage`.

    Underscore-prefixed keys are collected into ``extra``; any other unknown
    key is ignored. Absent fixed fields stay empty or zero, including
    ``version``. Decoding stops at the first fixed field with the wrong type.

    Raises
    ------
    GelfDecodeError
        When ``data`` cannot be parsed as JSON or is not a JSON object.
    GelfFieldTypeError
        When a fixed field has the wrong JSON type.

    Examples
    --------
    >>> message = decode_message(b'{"host":"api01","short_message":"hi","timestamp":1.5,"level":6.9,"_id":"0a1","x":1}')
    >>> message.level, message.extra
    (6, {'_id': '0a1'})
    """
    try:
        payload = json.loads(data)
    except (ValueError, RecursionError) as exc:
        raise GelfDecodeError(f"invalid GELF JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise GelfDecodeError("GELF payload must be a JSON object")

    values: dict[str, Any] = {"version": "", "host": "", "short": "", "timestamp": 0.0}
    extra: dict[str, Any] = {}
    for key, value in payload.items():
        if key.startswith("_"):
            extra[key] = value
        elif key in _TEXT_FIELDS:
            if not isinstance(value, str):
                raise GelfFieldTypeError(key)
            values[_TEXT_FIELDS[key]] = value
        elif key == "timestamp":
            if not _is_number(value):
                raise GelfFieldTypeError(key)
            values["timestamp"] = float(value)
        elif key == "level":
            if not _is_number(value):
                raise GelfFieldTypeError(key)
            values["level"] = int(value)

    return GelfMessage(extra=extra, **values)


__all__ = ["GelfDecodeError", "GelfEncodeError", "GelfFieldTypeError", "decode_message", "encode_message"]
