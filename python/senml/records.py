"""Raw and resolved SenML record types."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Sequence

from .values import (
    ValueField, FloatingPoint, StringValue, BooleanValue, OpaqueValue,
)

DEFAULT_VERSION = 10

# RawRecord attribute name -> JSON short key
BASE_KEYS = {
    "base_name": "bn",
    "base_time": "bt",
    "base_unit": "bu",
    "base_value": "bv",
    "base_sum": "bs",
    "base_version": "bver",
}

RECORD_KEYS = {
    "name": "n",
    "unit": "u",
    "sum": "s",
    "time": "t",
    "update_time": "ut",
}


@dataclass
class RawRecord:
    """One element of a pack as decoded, before any base field is applied.

    Every attribute is optional; None always means "absent", never zero.
    A hand-built record may carry a sequence of values; resolution rejects
    more than one with MultipleValueKinds.
    """

    base_name: str | None = None
    base_time: float | None = None
    base_unit: str | None = None
    base_value: float | None = None
    base_sum: float | None = None
    base_version: int | None = None
    name: str | None = None
    unit: str | None = None
    value: ValueField | Sequence[ValueField] | None = None
    sum: float | None = None
    time: float | None = None
    update_time: float | None = None
    extra_fields: dict[str, Any] = field(default_factory=dict)

    def has_base_fields(self) -> bool:
        return any(getattr(self, attr) is not None for attr in BASE_KEYS)

    def has_own_fields(self) -> bool:
        if self.value is not None or self.extra_fields:
            return True
        return any(getattr(self, attr) is not None for attr in RECORD_KEYS)

    def is_base_only(self) -> bool:
        """True for records that only carry base fields (or nothing)."""
        return not self.has_own_fields()


class TimeKind(IntEnum):
    ABSOLUTE = 0   # seconds since the Unix epoch
    RELATIVE = 1   # seconds relative to the moment of consumption


@dataclass(frozen=True)
class SenMLTime:
    """A resolved time: a number of seconds plus how to interpret it.

    Relative times are kept as offsets; turning them into a wall-clock
    value needs a clock and is done by senml.time.to_datetime().
    """

    seconds: float
    kind: TimeKind = TimeKind.ABSOLUTE

    @classmethod
    def from_seconds(cls, seconds: float) -> SenMLTime:
        kind = TimeKind.RELATIVE if seconds < 0 else TimeKind.ABSOLUTE
        return cls(float(seconds), kind)

    @property
    def is_relative(self) -> bool:
        return self.kind == TimeKind.RELATIVE

    def __float__(self) -> float:
        return self.seconds


@dataclass(frozen=True)
class ResolvedRecord:
    """A record with every base field applied.

    ``name`` is never empty. ``base_version`` is the version of the pack the
    record came from (10 unless the pack said otherwise).
    """

    name: str
    time: SenMLTime = SenMLTime(0.0)
    unit: str | None = None
    value: ValueField | None = None
    sum: float | None = None
    update_time: float | None = None
    base_version: int = DEFAULT_VERSION
    extra_fields: dict[str, Any] = field(default_factory=dict, hash=False)

    @property
    def float_value(self) -> float | None:
        return self.value.value if isinstance(self.value, FloatingPoint) else None

    @property
    def string_value(self) -> str | None:
        return self.value.value if isinstance(self.value, StringValue) else None

    @property
    def bool_value(self) -> bool | None:
        return self.value.value if isinstance(self.value, BooleanValue) else None

    @property
    def data_value(self) -> bytes | None:
        return self.value.value if isinstance(self.value, OpaqueValue) else None

    def to_raw(self) -> RawRecord:
        """Re-express this record as a raw record with no base fields."""
        version = None if self.base_version == DEFAULT_VERSION else self.base_version
        return RawRecord(
            base_version=version,
            name=self.name,
            unit=self.unit,
            value=self.value,
            sum=self.sum,
            time=self.time.seconds,
            update_time=self.update_time,
            extra_fields=dict(self.extra_fields),
        )
