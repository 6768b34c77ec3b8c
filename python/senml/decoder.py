"""Decode SenML JSON packs into RawRecord lists."""

from __future__ import annotations

import base64
import binascii
import json
import logging
import math
from typing import Any

from .errors import DecodeError, MultipleValueKinds
from .records import BASE_KEYS, RECORD_KEYS, RawRecord, ResolvedRecord
from .resolver import resolve_records
from .values import (
    VALUE_KEYS, ValueField, FloatingPoint, StringValue, BooleanValue, OpaqueValue,
)

logger = logging.getLogger(__name__)

# JSON short key -> RawRecord attribute
_KEY_ATTRS = {key: attr for attr, key in {**BASE_KEYS, **RECORD_KEYS}.items()}

_STRING_KEYS = {"bn", "bu", "n", "u"}
_NUMBER_KEYS = {"bt", "bv", "bs", "s", "t", "ut"}


def _number(raw: Any, key: str, index: int) -> float:
    """Return *raw* as a finite float, or raise DecodeError."""
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise DecodeError(f"{key} must be a number, got {raw!r}", index)
    try:
        value = float(raw)
    except OverflowError as exc:
        raise DecodeError(f"{key} is out of range", index) from exc
    if not math.isfinite(value):
        raise DecodeError(f"{key} is out of range: {raw!r}", index)
    return value


def decode_data(text: str, index: int | None = None) -> bytes:
    """Decode a ``vd`` payload.

    RFC 8428 uses URL-safe base64 without padding; the standard alphabet
    and padded input are accepted too.
    """
    stripped = text.rstrip("=").replace("-", "+").replace("_", "/")
    padded = stripped + "=" * (-len(stripped) % 4)
    try:
        return base64.b64decode(padded, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise DecodeError(f"invalid base64 in vd: {text!r}", index) from exc


def _decode_value(obj: dict[str, Any], index: int) -> ValueField | None:
    present = [key for key in VALUE_KEYS if key in obj]
    if len(present) > 1:
        raise MultipleValueKinds(present, index)
    if not present:
        return None

    key = present[0]
    raw = obj[key]
    if key == "v":
        return FloatingPoint(_number(raw, key, index))
    if key == "vs":
        if not isinstance(raw, str):
            raise DecodeError(f"vs must be a string, got {raw!r}", index)
        return StringValue(raw)
    if key == "vb":
        if not isinstance(raw, bool):
            raise DecodeError(f"vb must be a boolean, got {raw!r}", index)
        return BooleanValue(raw)
    if not isinstance(raw, str):
        raise DecodeError(f"vd must be a base64 string, got {raw!r}", index)
    return OpaqueValue(decode_data(raw, index))


def decode_record(obj: Any, index: int = 0) -> RawRecord:
    """Decode one pack element (a JSON object) into a RawRecord.

    Recognised keys are type-checked; unknown keys are kept verbatim in
    ``extra_fields``.
    """
    if not isinstance(obj, dict):
        raise DecodeError(f"record must be a JSON object, got {type(obj).__name__}", index)

    record = RawRecord(value=_decode_value(obj, index))

    for key, raw in obj.items():
        if key in VALUE_KEYS:
            continue
        attr = _KEY_ATTRS.get(key)
        if attr is None:
            record.extra_fields[key] = raw
            continue

        if key in _STRING_KEYS:
            if not isinstance(raw, str):
                raise DecodeError(f"{key} must be a string, got {raw!r}", index)
        elif key in _NUMBER_KEYS:
            raw = _number(raw, key, index)
        elif key == "bver":
            if isinstance(raw, bool) or not isinstance(raw, int):
                raise DecodeError(f"bver must be an integer, got {raw!r}", index)
        setattr(record, attr, raw)

    return record


def decode_pack(obj: Any) -> list[RawRecord]:
    """Decode an already-parsed JSON pack (a list of objects)."""
    if not isinstance(obj, list):
        raise DecodeError(f"pack must be a JSON array, got {type(obj).__name__}")
    return [decode_record(item, i) for i, item in enumerate(obj)]


def _reject_constant(name: str):
    raise DecodeError(f"non-standard JSON number {name}")


def loads(text: str | bytes) -> list[RawRecord]:
    """Parse SenML JSON text into raw records."""
    try:
        obj = json.loads(text, parse_constant=_reject_constant)
    except DecodeError:
        raise
    except ValueError as exc:
        raise DecodeError(f"invalid JSON: {exc}") from exc
    records = decode_pack(obj)
    logger.debug("decoded pack of %d records", len(records))
    return records


def parse_json(text: str | bytes, strict_names: bool = True,
               emit_base_records: bool = False) -> list[ResolvedRecord]:
    """Decode and resolve SenML JSON text in one step."""
    return resolve_records(loads(text), strict_names=strict_names,
                           emit_base_records=emit_base_records)
