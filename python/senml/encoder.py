"""Encode resolved records back to SenML JSON.

Resolved records are written with the short keys in a fixed order:

  n, u, v|vs|vb|vd, s, t, ut, bver, <extra fields>

Absent optional fields are omitted.  ``bver`` is only written when the
pack used a version other than the default 10 (RFC 8428 section 4.6).
"""

from __future__ import annotations

import base64
import json
from typing import Any, Iterable

from .records import DEFAULT_VERSION, ResolvedRecord
from .values import ValueField, FloatingPoint, OpaqueValue

# Largest magnitude below which every integral float is an exact int
_EXACT_INT_LIMIT = 2 ** 53


def format_number(x: float) -> int | float:
    """Return the JSON-friendly form of a number.

    Integral floats become ints so they encode as ``42`` rather than
    ``42.0``; json writes the remaining floats with the shortest repr that
    round-trips.
    """
    if isinstance(x, float) and x.is_integer() and abs(x) <= _EXACT_INT_LIMIT:
        return int(x)
    return x


def encode_data(data: bytes) -> str:
    """URL-safe base64 without padding, as used by ``vd``."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def encode_value(value: ValueField) -> tuple[str, Any]:
    """Return the (key, JSON value) pair for a value field."""
    if isinstance(value, FloatingPoint):
        return value.key, format_number(value.value)
    if isinstance(value, OpaqueValue):
        return value.key, encode_data(value.value)
    return value.key, value.value


def encode_record(record: ResolvedRecord) -> dict[str, Any]:
    out: dict[str, Any] = {"n": record.name}
    if record.unit is not None:
        out["u"] = record.unit
    if record.value is not None:
        key, raw = encode_value(record.value)
        out[key] = raw
    if record.sum is not None:
        out["s"] = format_number(record.sum)
    out["t"] = format_number(record.time.seconds)
    if record.update_time is not None:
        out["ut"] = format_number(record.update_time)
    if record.base_version != DEFAULT_VERSION:
        out["bver"] = record.base_version
    for key, raw in record.extra_fields.items():
        out.setdefault(key, raw)
    return out


def encode_pack(records: Iterable[ResolvedRecord]) -> list[dict[str, Any]]:
    return [encode_record(r) for r in records]


def dumps(records: Iterable[ResolvedRecord], indent: int | None = None) -> str:
    """Serialise resolved records to SenML JSON text."""
    separators = (",", ":") if indent is None else None
    return json.dumps(encode_pack(records), indent=indent,
                      separators=separators, ensure_ascii=False)
