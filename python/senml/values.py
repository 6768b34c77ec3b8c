"""SenML value model: the four kinds of measurement payload."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, ClassVar


class ValueKind(IntEnum):
    FLOAT = 0
    STRING = 1
    BOOL = 2
    DATA = 3

    @property
    def key(self) -> str:
        return _KIND_KEYS[self]


# JSON short keys indexed by ValueKind
_KIND_KEYS = {
    ValueKind.FLOAT: "v",
    ValueKind.STRING: "vs",
    ValueKind.BOOL: "vb",
    ValueKind.DATA: "vd",
}

VALUE_KEYS = tuple(_KIND_KEYS.values())


class ValueField:
    """Base of the closed set of value variants.

    Only the four subclasses below are valid; callers match on the
    concrete class or on ``kind``.
    """

    __slots__ = ()
    kind: ClassVar[ValueKind]
    value: Any

    @property
    def key(self) -> str:
        return self.kind.key

    @property
    def is_numeric(self) -> bool:
        return self.kind == ValueKind.FLOAT


@dataclass(frozen=True)
class FloatingPoint(ValueField):
    value: float
    kind: ClassVar[ValueKind] = ValueKind.FLOAT

    def __post_init__(self):
        if isinstance(self.value, bool) or not isinstance(self.value, (int, float)):
            raise TypeError(f"FloatingPoint needs a number, got {type(self.value).__name__}")
        object.__setattr__(self, "value", float(self.value))

    def __str__(self) -> str:
        return repr(self.value)


@dataclass(frozen=True)
class StringValue(ValueField):
    value: str
    kind: ClassVar[ValueKind] = ValueKind.STRING

    def __post_init__(self):
        if not isinstance(self.value, str):
            raise TypeError(f"StringValue needs a str, got {type(self.value).__name__}")

    def __str__(self) -> str:
        return repr(self.value)


@dataclass(frozen=True)
class BooleanValue(ValueField):
    value: bool
    kind: ClassVar[ValueKind] = ValueKind.BOOL

    def __post_init__(self):
        if not isinstance(self.value, bool):
            raise TypeError(f"BooleanValue needs a bool, got {type(self.value).__name__}")

    def __str__(self) -> str:
        return "true" if self.value else "false"


@dataclass(frozen=True)
class OpaqueValue(ValueField):
    value: bytes
    kind: ClassVar[ValueKind] = ValueKind.DATA

    def __post_init__(self):
        if not isinstance(self.value, (bytes, bytearray)):
            raise TypeError(f"OpaqueValue needs bytes, got {type(self.value).__name__}")
        object.__setattr__(self, "value", bytes(self.value))

    def __str__(self) -> str:
        return f"<{len(self.value)} bytes>"


_KIND_CLASSES: dict[ValueKind, type[ValueField]] = {
    ValueKind.FLOAT: FloatingPoint,
    ValueKind.STRING: StringValue,
    ValueKind.BOOL: BooleanValue,
    ValueKind.DATA: OpaqueValue,
}


def value_field(kind: ValueKind, payload: Any) -> ValueField:
    """Build the variant for *kind* around *payload*."""
    return _KIND_CLASSES[ValueKind(kind)](payload)
