"""senml - SenML (RFC 8428) JSON pack decoder and resolver."""

from .values import (
    ValueKind, ValueField, FloatingPoint, StringValue, BooleanValue, OpaqueValue,
    value_field,
)
from .records import RawRecord, ResolvedRecord, SenMLTime, TimeKind, DEFAULT_VERSION
from .errors import (
    SenMLError, DecodeError, MultipleValueKinds, ResolveError, VersionConflict,
    InvalidVersion, EmptyName, InvalidName, InvalidTime, IncompatibleBaseValue,
)
from .resolver import ResolutionState, Resolver, resolve_records
from .decoder import decode_record, decode_pack, loads, parse_json
from .encoder import encode_record, encode_pack, dumps, format_number
from .time import to_datetime, from_datetime
from .names import validate_name
from .capture import Capture

__all__ = [
    "ValueKind", "ValueField", "FloatingPoint", "StringValue", "BooleanValue",
    "OpaqueValue", "value_field",
    "RawRecord", "ResolvedRecord", "SenMLTime", "TimeKind", "DEFAULT_VERSION",
    "SenMLError", "DecodeError", "MultipleValueKinds", "ResolveError",
    "VersionConflict", "InvalidVersion", "EmptyName", "InvalidName",
    "InvalidTime", "IncompatibleBaseValue",
    "ResolutionState", "Resolver", "resolve_records",
    "decode_record", "decode_pack", "loads", "parse_json",
    "encode_record", "encode_pack", "dumps", "format_number",
    "to_datetime", "from_datetime",
    "validate_name",
    "Capture",
]
