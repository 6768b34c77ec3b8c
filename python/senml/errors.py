"""Exceptions raised while decoding and resolving SenML packs."""

from __future__ import annotations


class SenMLError(Exception):
    """Base class for every senml failure.

    ``index`` is the position of the offending record in the pack, or None
    when the failure is not tied to one record.
    """

    def __init__(self, message: str, index: int | None = None):
        if index is not None:
            message = f"{message} (record {index})"
        super().__init__(message)
        self.index = index


class DecodeError(SenMLError, ValueError):
    """Input is not a well-formed SenML JSON pack."""


class MultipleValueKinds(DecodeError):
    """A record carries more than one of v, vs, vb and vd."""

    def __init__(self, keys: list[str] | tuple[str, ...], index: int | None = None):
        super().__init__(
            f"only one value per record allowed, got {', '.join(keys)}", index)
        self.keys = tuple(keys)


class ResolveError(SenMLError, ValueError):
    """A decoded pack violates the resolution rules."""


class VersionConflict(ResolveError):
    def __init__(self, locked: int, found: int, index: int | None = None):
        super().__init__(
            f"all records must share one version: bver {found} "
            f"conflicts with {locked}", index)
        self.locked = locked
        self.found = found


class InvalidVersion(ResolveError):
    def __init__(self, version, index: int | None = None):
        super().__init__(
            f"bver must be a positive integer, got {version!r}", index)
        self.version = version


class EmptyName(ResolveError):
    def __init__(self, index: int | None = None):
        super().__init__("resolved name is empty", index)


class InvalidName(ResolveError):
    def __init__(self, name: str, index: int | None = None):
        super().__init__(f"invalid name {name!r}", index)
        self.name = name


class InvalidTime(ResolveError):
    def __init__(self, seconds: float, index: int | None = None):
        super().__init__(f"invalid time {seconds!r}", index)
        self.seconds = seconds


class IncompatibleBaseValue(ResolveError):
    """A non-numeric value meets a non-zero accumulated base value."""

    def __init__(self, kind: str, base_value: float, index: int | None = None):
        super().__init__(
            f"cannot apply base value {base_value!r} to a {kind} value", index)
        self.kind = kind
        self.base_value = base_value
