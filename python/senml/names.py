"""RFC 8428 section 4.5.1 name rules.

The concatenated name must consist only of "A"-"Z", "a"-"z", "0"-"9",
"-", ":", ".", "/" and "_", and must start with a letter or digit.
"""

from __future__ import annotations

import re

_NAME_RE = re.compile(r"[A-Za-z0-9][A-Za-z0-9\-:./_]*")


def validate_name(name: str) -> bool:
    """Return True if *name* is a valid resolved SenML name."""
    return _NAME_RE.fullmatch(name) is not None
