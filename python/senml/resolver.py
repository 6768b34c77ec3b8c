"""Resolve a pack of raw SenML records into self-contained records.

Base fields accumulate across the pack in the order records appear:

  bn    appended to the current base name
  bt    added to the current base time
  bu    replaces the current base unit
  bv    added to the current base value (applied to every later numeric v)
  bs    added to the current base sum (applied to every later s)
  bver  locks the pack version; a different later value is an error

Records that carry nothing but base fields update that state and are not
emitted unless the resolver is built with ``emit_base_records=True``.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterable, Sequence

from .errors import (
    DecodeError, MultipleValueKinds, VersionConflict, InvalidVersion,
    EmptyName, InvalidName, InvalidTime, IncompatibleBaseValue,
)
from .names import validate_name
from .records import DEFAULT_VERSION, RawRecord, ResolvedRecord, SenMLTime
from .values import ValueField, FloatingPoint

logger = logging.getLogger(__name__)


@dataclass
class ResolutionState:
    """Base context carried through one pack.  Never shared between packs."""

    base_name: str = ""
    base_time: float = 0.0
    base_unit: str | None = None
    base_value: float = 0.0
    base_sum: float = 0.0
    version: int | None = None

    @property
    def resolved_version(self) -> int:
        return self.version if self.version is not None else DEFAULT_VERSION

    def apply(self, record: RawRecord, index: int) -> None:
        """Fold the base fields of *record* into the state."""
        if record.base_version is not None:
            self._lock_version(record.base_version, index)

        if record.base_name is not None:
            self.base_name += record.base_name
        if record.base_time is not None:
            self.base_time += record.base_time
        if record.base_unit is not None:
            self.base_unit = record.base_unit
        if record.base_value is not None:
            self.base_value += record.base_value
        if record.base_sum is not None:
            self.base_sum += record.base_sum

    def _lock_version(self, version: int, index: int) -> None:
        if isinstance(version, bool) or not isinstance(version, int) or version <= 0:
            raise InvalidVersion(version, index)
        if self.version is None:
            self.version = version
        elif self.version != version:
            raise VersionConflict(self.version, version, index)


def _single_value(value: ValueField | Sequence[ValueField] | None,
                  index: int) -> ValueField | None:
    """Return the record's value, enforcing one value kind per record.

    Raw records built by hand may carry a sequence of values; more than
    one is the same error the decoder raises for several value keys.
    """
    if value is None or isinstance(value, ValueField):
        return value
    if isinstance(value, (list, tuple)) and all(isinstance(v, ValueField) for v in value):
        if len(value) > 1:
            raise MultipleValueKinds([v.key for v in value], index)
        return value[0] if value else None
    raise DecodeError(f"unsupported value type {type(value).__name__}", index)


class Resolver:
    """Folds packs of RawRecord into lists of ResolvedRecord.

    Options:
      strict_names       also enforce the RFC 8428 name character rules
                         (an empty name is always rejected)
      emit_base_records  emit records that only carry base fields instead
                         of eliding them

    The resolver holds no per-pack state; one instance may resolve any
    number of packs, concurrently or not.
    """

    def __init__(self, strict_names: bool = True, emit_base_records: bool = False):
        self.strict_names = strict_names
        self.emit_base_records = emit_base_records

    def resolve(self, records: Iterable[RawRecord]) -> list[ResolvedRecord]:
        """Resolve a whole pack.  Any error aborts with no partial result."""
        state = ResolutionState()
        results: list[ResolvedRecord] = []
        elided = 0

        for index, record in enumerate(records):
            state.apply(record, index)

            if record.is_base_only() and not self.emit_base_records:
                logger.debug("record %d only carries base fields, not emitted", index)
                elided += 1
                continue

            # the first emitted record fixes the pack version
            if state.version is None:
                state.version = DEFAULT_VERSION
            results.append(self._resolve_record(record, state, index))

        logger.debug("resolved %d records (%d base-only elided), version %d",
                     len(results), elided, state.resolved_version)
        return results

    def _resolve_record(self, record: RawRecord, state: ResolutionState,
                        index: int) -> ResolvedRecord:
        name = state.base_name + (record.name or "")
        if not name:
            raise EmptyName(index)
        if self.strict_names and not validate_name(name):
            raise InvalidName(name, index)

        seconds = state.base_time + (record.time if record.time is not None else 0.0)
        if not math.isfinite(seconds):
            raise InvalidTime(seconds, index)

        unit = record.unit if record.unit is not None else state.base_unit

        value = _single_value(record.value, index)
        if value is not None:
            if value.is_numeric:
                value = FloatingPoint(value.value + state.base_value)
            elif state.base_value != 0:
                raise IncompatibleBaseValue(value.kind.name.lower(), state.base_value, index)

        total = None
        if record.sum is not None:
            total = record.sum + state.base_sum

        return ResolvedRecord(
            name=name,
            time=SenMLTime.from_seconds(seconds),
            unit=unit,
            value=value,
            sum=total,
            update_time=record.update_time,
            base_version=state.resolved_version,
            extra_fields=dict(record.extra_fields),
        )


def resolve_records(records: Sequence[RawRecord] | Iterable[RawRecord],
                    strict_names: bool = True,
                    emit_base_records: bool = False) -> list[ResolvedRecord]:
    """Resolve one pack with a throwaway Resolver."""
    resolver = Resolver(strict_names=strict_names, emit_base_records=emit_base_records)
    return resolver.resolve(records)
