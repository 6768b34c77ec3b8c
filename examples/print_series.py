#!/usr/bin/env python3
"""Resolve a SenML pack and print the numeric series of every sensor.

    python examples/print_series.py pack.json
"""

import sys

from senml.capture import Capture
from senml.decoder import parse_json

with open(sys.argv[1], encoding="utf-8") as f:
    records = parse_json(f.read())

with Capture(records) as cap:
    for name in cap.names():
        ts, values = cap.series(name)
        if len(values) == 0:
            continue
        print(f"{name}: {len(values)} samples, "
              f"min={values.min():g} max={values.max():g} mean={values.mean():g}")
