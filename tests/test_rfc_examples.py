"""Resolve the SenML examples of RFC 8428 section 5.

Base names accumulate by concatenation and base times by addition across
a pack, so packs that set bn or bt more than once resolve differently from
the RFC text; those cases are noted below.

Run from the repo root:
    python3 tests/test_rfc_examples.py
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "python"))

import json

from senml.decoder import parse_json
from senml.encoder import encode_pack

SINGLE_DATAPOINT = """
[
 {"n":"urn:dev:ow:10e2073a01080063","u":"Cel","v":23.1}
]
"""

MULTIPLE_DATAPOINT = """
[
    {"bn":"urn:dev:ow:10e2073a01080063:","n":"voltage","u":"V","v":120.1},
    {"n":"current","u":"A","v":1.2}
]
"""

MULTIPLE_DATAPOINT_AND_TIME = """
[
    {"bn":"urn:dev:ow:10e2073a0108006:","bt":1.276020076001e+09,
    "bu":"A","bver":5,
    "n":"voltage","u":"V","v":120.1},
    {"n":"current","t":-5,"v":1.2},
    {"n":"current","t":-4,"v":1.3},
    {"n":"current","t":-3,"v":1.4},
    {"n":"current","t":-2,"v":1.5},
    {"n":"current","t":-1,"v":1.6},
    {"n":"current","v":1.7}
]
"""

MULTIPLE_MEASUREMENTS = """
[
    {"bn":"urn:dev:ow:10e2073a01080063","bt":1.320067464e+09,
    "bu":"%RH","v":20},
    {"u":"lon","v":24.30621},
    {"u":"lat","v":60.07965},
    {"t":60,"v":20.3},
    {"u":"lon","t":60,"v":24.30622},
    {"u":"lat","t":60,"v":60.07965},
    {"t":120,"v":20.7},
    {"u":"lon","t":120,"v":24.30623},
    {"u":"lat","t":120,"v":60.07966},
    {"u":"%EL","t":150,"v":98},
    {"t":180,"v":21.2},
    {"u":"lon","t":180,"v":24.30628},
    {"u":"lat","t":180,"v":60.07967}
]
"""

RESOLVED_DATA = """
[
    {"n":"urn:dev:ow:10e2073a01080063","u":"%RH","t":1.320067464e+09,
    "v":20},
    {"n":"urn:dev:ow:10e2073a01080063","u":"lon","t":1.320067464e+09,
    "v":24.30621},
    {"n":"urn:dev:ow:10e2073a01080063","u":"lat","t":1.320067464e+09,
    "v":60.07965},
    {"n":"urn:dev:ow:10e2073a01080063","u":"%RH","t":1.320067524e+09,
    "v":20.3},
    {"n":"urn:dev:ow:10e2073a01080063","u":"lon","t":1.320067524e+09,
    "v":24.30622},
    {"n":"urn:dev:ow:10e2073a01080063","u":"lat","t":1.320067524e+09,
    "v":60.07965},
    {"n":"urn:dev:ow:10e2073a01080063","u":"%RH","t":1.320067584e+09,
    "v":20.7},
    {"n":"urn:dev:ow:10e2073a01080063","u":"lon","t":1.320067584e+09,
    "v":24.30623},
    {"n":"urn:dev:ow:10e2073a01080063","u":"lat","t":1.320067584e+09,
    "v":60.07966},
    {"n":"urn:dev:ow:10e2073a01080063","u":"%EL","t":1.320067614e+09,
    "v":98},
    {"n":"urn:dev:ow:10e2073a01080063","u":"%RH","t":1.320067644e+09,
    "v":21.2},
    {"n":"urn:dev:ow:10e2073a01080063","u":"lon","t":1.320067644e+09,
    "v":24.30628},
    {"n":"urn:dev:ow:10e2073a01080063","u":"lat","t":1.320067644e+09,
    "v":60.07967}
]
"""

MULTIPLE_DATATYPES = """
[
    {"bn":"urn:dev:ow:10e2073a01080063:","n":"temp","u":"Cel","v":23.1},
    {"n":"label","vs":"Machine Room"},
    {"n":"open","vb":false},
    {"n":"nfc-reader","vd":"aGkgCg"}
]
"""

COLLECTION_OF_RESOURCES = """
[
    {"bn":"2001:db8::2/","bt":1.320078429e+09,
    "n":"temperature","u":"Cel","v":25.2},
    {"n":"humidity","u":"%RH","v":30},
    {"bn":"2001:db8::1/","n":"temperature","u":"Cel","v":12.3},
    {"n":"humidity","u":"%RH","v":67}
]
"""

SETTING_ACTUATOR = """
[
    {"bn":"urn:dev:ow:10e2073a01080063:"},
    {"n":"temp","u":"Cel","v":23.1},
    {"n":"heat","u":"/","v":1},
    {"n":"fan","u":"/","v":0}
]
"""

SYNCHRONIZED_LIGHTS_OFF = """
[
    {"bt":1.320078429e+09,"bu":"/","n":"2001:db8::3","v":0.5},
    {"n":"2001:db8::4","v":0.5},
    {"n":"2001:db8::3","t":0.1,"v":0},
    {"n":"2001:db8::4","t":0.1,"v":0}
]
"""


def close(a, b, tol=1e-3):
    return abs(a - b) <= tol


def test_single_datapoint():
    print("test_single_datapoint...", end="")

    result = parse_json(SINGLE_DATAPOINT)
    assert len(result) == 1
    assert result[0].name == "urn:dev:ow:10e2073a01080063"
    assert result[0].unit == "Cel"
    assert result[0].float_value == 23.1
    assert result[0].time.seconds == 0.0

    print(" OK")


def test_multiple_datapoints():
    print("test_multiple_datapoints...", end="")

    result = parse_json(MULTIPLE_DATAPOINT)
    assert len(result) == 2
    assert result[0].name == "urn:dev:ow:10e2073a01080063:voltage"
    assert result[0].unit == "V"
    assert result[0].float_value == 120.1
    assert result[1].name == "urn:dev:ow:10e2073a01080063:current"
    assert result[1].unit == "A"
    assert result[1].float_value == 1.2

    print(" OK")


def test_multiple_datapoints_and_time():
    print("test_multiple_datapoints_and_time...", end="")

    base = 1.276020076001e9
    result = parse_json(MULTIPLE_DATAPOINT_AND_TIME)
    assert len(result) == 7
    assert all(r.base_version == 5 for r in result)
    assert result[0].name == "urn:dev:ow:10e2073a0108006:voltage"
    assert result[0].unit == "V"
    assert result[1].unit == "A"
    for i, offset in enumerate([0, -5, -4, -3, -2, -1, 0]):
        assert not result[i].time.is_relative
        assert close(result[i].time.seconds, base + offset)
    assert result[6].float_value == 1.7

    print(" OK")


def test_multiple_measurements():
    print("test_multiple_measurements...", end="")

    base = 1.320067464e9
    result = parse_json(MULTIPLE_MEASUREMENTS)
    assert len(result) == 13
    assert {r.name for r in result} == {"urn:dev:ow:10e2073a01080063"}
    assert [r.unit for r in result[:4]] == ["%RH", "lon", "lat", "%RH"]
    assert result[9].unit == "%EL"
    assert result[3].time.seconds == base + 60
    assert result[12].time.seconds == base + 180
    assert result[12].float_value == 60.07967

    print(" OK")


def test_measurements_match_resolved_form():
    """The shorthand pack resolves to the RFC's resolved example."""
    print("test_measurements_match_resolved_form...", end="")

    expected = json.loads(RESOLVED_DATA)
    assert encode_pack(parse_json(MULTIPLE_MEASUREMENTS)) == expected
    assert encode_pack(parse_json(RESOLVED_DATA)) == expected

    print(" OK")


def test_multiple_datatypes():
    print("test_multiple_datatypes...", end="")

    result = parse_json(MULTIPLE_DATATYPES)
    assert len(result) == 4
    assert result[1].name == "urn:dev:ow:10e2073a01080063:label"
    assert result[1].string_value == "Machine Room"
    assert result[2].bool_value is False
    assert result[3].name == "urn:dev:ow:10e2073a01080063:nfc-reader"
    assert result[3].data_value == bytes([0x68, 0x69, 0x20, 0x0A])

    print(" OK")


def test_collection_of_resources():
    """The second bn is appended to the first."""
    print("test_collection_of_resources...", end="")

    result = parse_json(COLLECTION_OF_RESOURCES)
    assert [r.name for r in result] == [
        "2001:db8::2/temperature",
        "2001:db8::2/humidity",
        "2001:db8::2/2001:db8::1/temperature",
        "2001:db8::2/2001:db8::1/humidity",
    ]
    assert all(r.time.seconds == 1.320078429e9 for r in result)
    assert result[3].float_value == 67.0

    print(" OK")


def test_setting_actuator():
    """The leading base-only record is not emitted."""
    print("test_setting_actuator...", end="")

    result = parse_json(SETTING_ACTUATOR)
    assert len(result) == 3
    assert [r.name for r in result] == [
        "urn:dev:ow:10e2073a01080063:temp",
        "urn:dev:ow:10e2073a01080063:heat",
        "urn:dev:ow:10e2073a01080063:fan",
    ]
    assert [r.float_value for r in result] == [23.1, 1.0, 0.0]

    print(" OK")


def test_synchronized_lights_off():
    print("test_synchronized_lights_off...", end="")

    base = 1.320078429e9
    result = parse_json(SYNCHRONIZED_LIGHTS_OFF)
    assert len(result) == 4
    assert [r.unit for r in result] == ["/"] * 4
    assert result[1].time.seconds == base
    assert close(result[2].time.seconds, base + 0.1)
    assert result[3].float_value == 0.0

    print(" OK")


if __name__ == "__main__":
    print("senml RFC 8428 example tests")
    print("============================\n")

    test_single_datapoint()
    test_multiple_datapoints()
    test_multiple_datapoints_and_time()
    test_multiple_measurements()
    test_measurements_match_resolved_form()
    test_multiple_datatypes()
    test_collection_of_resources()
    test_setting_actuator()
    test_synchronized_lights_off()

    print("\nAll tests passed.")
