"""numpy time-series extraction from resolved records.

Capture groups a resolved pack by name and hands out per-name arrays:

  series(name)  -> (times, values)   float64, numeric values only
  table(name)   -> {"_time", "v", "s"} with NaN where a field is absent
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Iterable

import numpy as np

from .records import ResolvedRecord
from .values import FloatingPoint

logger = logging.getLogger(__name__)

_FIELDS = ("v", "s")


class Capture:
    """Per-name numeric views over a list of resolved records.

    Times are the resolved seconds as-is. Now-relative records are skipped
    by default; with ``relative=True`` they are kept and share one seconds
    axis with the absolute ones, so a series may hold both kinds.
    """

    def __init__(self, records: Iterable[ResolvedRecord], relative: bool = False):
        self._by_name: dict[str, list[ResolvedRecord]] = defaultdict(list)
        skipped = 0
        for r in records:
            if r.time.is_relative and not relative:
                skipped += 1
                continue
            self._by_name[r.name].append(r)
        if skipped:
            logger.debug("skipped %d now-relative records", skipped)

    def names(self) -> list[str]:
        return list(self._by_name)

    def series(self, name: str, field: str = "v",
               t0: float | None = None,
               t1: float | None = None) -> tuple[np.ndarray, np.ndarray]:
        """Times and numeric values (``field="v"``) or sums (``"s"``) of *name*.

        ``t0``/``t1`` bound the time range, both inclusive.  Records without
        a numeric entry for the field are left out.
        """
        if field not in _FIELDS:
            raise ValueError(f"field must be one of {_FIELDS}, got {field!r}")
        if name not in self._by_name:
            raise KeyError(name)

        times: list[float] = []
        values: list[float] = []
        for r in self._by_name[name]:
            t = r.time.seconds
            if t0 is not None and t < t0:
                continue
            if t1 is not None and t > t1:
                continue
            if field == "v":
                if not isinstance(r.value, FloatingPoint):
                    continue
                values.append(r.value.value)
            else:
                if r.sum is None:
                    continue
                values.append(r.sum)
            times.append(t)

        return (np.asarray(times, dtype=np.float64),
                np.asarray(values, dtype=np.float64))

    def table(self, name: str) -> dict[str, np.ndarray]:
        """All records of *name* as columns; NaN marks an absent v or s."""
        if name not in self._by_name:
            raise KeyError(name)
        rows = self._by_name[name]
        return {
            "_time": np.array([r.time.seconds for r in rows], dtype=np.float64),
            "v": np.array([r.float_value if r.float_value is not None else np.nan
                           for r in rows], dtype=np.float64),
            "s": np.array([r.sum if r.sum is not None else np.nan
                           for r in rows], dtype=np.float64),
        }

    def time_range(self) -> tuple[float, float] | None:
        times = [r.time.seconds for rows in self._by_name.values() for r in rows]
        if not times:
            return None
        return min(times), max(times)

    def close(self) -> None:
        self._by_name.clear()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
