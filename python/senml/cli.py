"""senml command-line tool."""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import datetime, timezone

from .decoder import parse_json
from .encoder import dumps, format_number
from .errors import SenMLError
from .records import ResolvedRecord
from .time import to_datetime


def _read_input(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    with open(path, encoding="utf-8") as f:
        return f.read()


def _load(args: argparse.Namespace) -> list[ResolvedRecord]:
    return parse_json(
        _read_input(args.file),
        strict_names=not getattr(args, "lax_names", False),
        emit_base_records=getattr(args, "keep_base_records", False),
    )


def _format_time(record: ResolvedRecord, now: datetime | None) -> str:
    if now is not None:
        return to_datetime(record.time, now).isoformat()
    if record.time.is_relative:
        return f"now{record.time.seconds:+.3f}s"
    return f"{record.time.seconds:.3f}"


def _format_record(record: ResolvedRecord, now: datetime | None = None) -> str:
    parts = [f"[{_format_time(record, now)}] {record.name}"]
    if record.value is not None:
        parts.append(f"= {record.value}")
    if record.unit:
        parts.append(record.unit)
    if record.sum is not None:
        parts.append(f"sum={format_number(record.sum)}")
    if record.update_time is not None:
        parts.append(f"ut={format_number(record.update_time)}")
    for key, value in record.extra_fields.items():
        parts.append(f"{key}={value!r}")
    return " ".join(parts)


def cmd_resolve(args: argparse.Namespace) -> None:
    """Print the resolved pack as SenML JSON."""
    print(dumps(_load(args), indent=args.indent))


def cmd_dump(args: argparse.Namespace) -> None:
    """Print one line per resolved record."""
    now = datetime.now(timezone.utc) if args.now else None
    for record in _load(args):
        print(_format_record(record, now))


def cmd_info(args: argparse.Namespace) -> None:
    """Print a summary of a pack."""
    records = _load(args)

    counts: dict[str, int] = {}
    for r in records:
        counts[r.name] = counts.get(r.name, 0) + 1
    absolute = [r.time.seconds for r in records if not r.time.is_relative]
    relative = len(records) - len(absolute)

    print(f"File:       {args.file}")
    print(f"Records:    {len(records)}")
    versions = sorted({r.base_version for r in records})
    print(f"Version:    {', '.join(map(str, versions)) or '-'}")
    if absolute:
        print(f"Time range: {min(absolute):.3f} - {max(absolute):.3f}")
    else:
        print("Time range: (no absolute times)")
    if relative:
        print(f"Relative:   {relative}")

    print(f"\nNames ({len(counts)}):")
    for name, count in counts.items():
        print(f"  {count:6d}  {name}")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="senml", description="SenML pack resolver")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Enable debug logging")
    sub = parser.add_subparsers(dest="command")

    # resolve
    p_resolve = sub.add_parser("resolve", help="Print the resolved pack as JSON")
    p_resolve.add_argument("file", help="SenML JSON file, or - for stdin")
    p_resolve.add_argument("--indent", type=int, default=None, help="JSON indent")
    p_resolve.add_argument("--keep-base-records", action="store_true",
                           help="Emit records that only carry base fields")
    p_resolve.add_argument("--lax-names", action="store_true",
                           help="Only reject empty names")

    # dump
    p_dump = sub.add_parser("dump", help="Print one line per resolved record")
    p_dump.add_argument("file", help="SenML JSON file, or - for stdin")
    p_dump.add_argument("--now", action="store_true",
                        help="Show times as UTC datetimes, relative ones against the clock")
    p_dump.add_argument("--lax-names", action="store_true",
                        help="Only reject empty names")

    # info
    p_info = sub.add_parser("info", help="Show a summary of a pack")
    p_info.add_argument("file", help="SenML JSON file, or - for stdin")

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    commands = {"resolve": cmd_resolve, "dump": cmd_dump, "info": cmd_info}
    if args.command not in commands:
        parser.print_help()
        return 1

    try:
        commands[args.command](args)
    except SenMLError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
