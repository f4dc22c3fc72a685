import struct
from datetime import datetime, timedelta, timezone

import pytest

from nullable.convert import ConversionError, Kind, convert_assign, format_rfc3339_nano

UTC = timezone.utc
SOME_TIME = datetime.fromtimestamp(123, UTC)
MICRO_TIME = datetime(1970, 1, 1, 0, 0, 1, 2, tzinfo=UTC)

CONVERSIONS = [
    # exact conversions
    (Kind.STRING, "foo", "foo"),
    (Kind.INT, 123, 123),
    (Kind.TIME, SOME_TIME, SOME_TIME),
    # to strings
    (Kind.STRING, "string", "string"),
    (Kind.STRING, b"byteslice", "byteslice"),
    (Kind.STRING, 123, "123"),
    (Kind.STRING, 1.5, "1.5"),
    # from datetimes
    (Kind.STRING, datetime.fromtimestamp(1, UTC), "1970-01-01T00:00:01Z"),
    (
        Kind.STRING,
        datetime.fromtimestamp(1453874597, timezone(timedelta(hours=-8), "here")),
        "2016-01-26T22:03:17-08:00",
    ),
    (Kind.STRING, MICRO_TIME, "1970-01-01T00:00:01.000002Z"),
    (Kind.STRING, datetime(1, 1, 1, tzinfo=UTC), "0001-01-01T00:00:00Z"),
    (Kind.BYTES, MICRO_TIME, b"1970-01-01T00:00:01.000002Z"),
    (Kind.ANY, MICRO_TIME, MICRO_TIME),
    # to bytes
    (Kind.BYTES, None, None),
    (Kind.BYTES, "string", b"string"),
    (Kind.BYTES, b"byteslice", b"byteslice"),
    (Kind.BYTES, bytearray(b"byteslice"), b"byteslice"),
    (Kind.BYTES, 123, b"123"),
    (Kind.BYTES, 1.5, b"1.5"),
    # strings to integers
    (Kind.INT8, "127", 127),
    (Kind.INT16, "32767", 32767),
    (Kind.INT32, "2147483647", 2147483647),
    (Kind.UINT8, "255", 255),
    (Kind.UINT16, "256", 256),
    (Kind.INT, "-1", -1),
    # integers to smaller integers
    (Kind.UINT8, 5, 5),
    (Kind.UINT16, 256, 256),
    # true bools
    (Kind.BOOL, True, True),
    (Kind.BOOL, "True", True),
    (Kind.BOOL, "TRUE", True),
    (Kind.BOOL, "1", True),
    (Kind.BOOL, 1, True),
    # false bools
    (Kind.BOOL, False, False),
    (Kind.BOOL, "false", False),
    (Kind.BOOL, "FALSE", False),
    (Kind.BOOL, "0", False),
    (Kind.BOOL, 0, False),
    # floats
    (Kind.FLOAT64, 1.5, 1.5),
    (Kind.FLOAT64, 1, 1.0),
    (Kind.FLOAT32, 1.5, 1.5),
    (Kind.FLOAT32, "1.5", 1.5),
    (Kind.FLOAT64, "1.5", 1.5),
    # to any
    (Kind.ANY, 1.5, 1.5),
    (Kind.ANY, 1, 1),
    (Kind.ANY, "str", "str"),
    (Kind.ANY, b"byteslice", b"byteslice"),
    (Kind.ANY, True, True),
    (Kind.ANY, None, None),
]


@pytest.mark.parametrize(("kind", "src", "expected"), CONVERSIONS)
def test_conversions(kind, src, expected):
    assert convert_assign(kind, src) == expected


@pytest.mark.parametrize(
    ("kind", "src", "message"),
    [
        (Kind.INT8, "128", 'converting value of type str ("128") to a int8: value out of range'),
        (Kind.INT16, "32768", 'converting value of type str ("32768") to a int16: value out of range'),
        (
            Kind.INT32,
            "2147483648",
            'converting value of type str ("2147483648") to a int32: value out of range',
        ),
        (Kind.UINT8, "256", 'converting value of type str ("256") to a uint8: value out of range'),
        (Kind.INT, "foo", 'converting value of type str ("foo") to a int: invalid syntax'),
        (Kind.UINT8, 256, 'converting value of type int ("256") to a uint8: value out of range'),
        (Kind.UINT16, 65536, 'converting value of type int ("65536") to a uint16: value out of range'),
        (Kind.UINT, "-1", 'converting value of type str ("-1") to a uint: invalid syntax'),
        (Kind.FLOAT32, "1e39", 'converting value of type str ("1e39") to a float32: value out of range'),
        (Kind.BOOL, "yup", 'couldn\'t convert "yup" into type bool'),
        (Kind.BOOL, 2, "couldn't convert 2 into type bool"),
        (
            Kind.STRING,
            complex(1, 2),
            "unsupported Scan, storing value of type complex into type string",
        ),
    ],
)
def test_conversion_errors(kind, src, message):
    with pytest.raises(ConversionError) as excinfo:
        convert_assign(kind, src)
    assert str(excinfo.value) == message


@pytest.mark.parametrize(
    ("src", "expected"),
    [
        (12345678, b"12345678"),
        (1234, b"1234"),
        (12, b"12"),
        (1, b"1"),
        (123, b"123"),
        (1.5, b"1.5"),
        (64.0, b"64"),
        (False, b"false"),
    ],
)
def test_scalars_to_bytes(src, expected):
    assert convert_assign(Kind.BYTES, src) == expected


@pytest.mark.parametrize(
    ("src", "expected"),
    [(1e21, "1e+21"), (1e-05, "1e-05"), (0.0001, "0.0001"), (1234567.0, "1.234567e+06")],
)
def test_float_formatting(src, expected):
    assert convert_assign(Kind.STRING, src) == expected


def test_float32_is_rounded_to_single_precision():
    result = convert_assign(Kind.FLOAT32, "1.2345")
    assert struct.unpack("<f", struct.pack("<f", result))[0] == result
    assert abs(result - 1.2345) < 1e-6
    assert result != convert_assign(Kind.FLOAT64, "1.2345")


def test_kind_may_be_given_by_name():
    assert convert_assign("int8", "5") == 5


def test_time_rejects_non_datetime():
    with pytest.raises(ConversionError, match="unsupported Scan"):
        convert_assign(Kind.TIME, 42)


def test_format_naive_datetime_as_utc():
    assert format_rfc3339_nano(datetime(2012, 12, 21, 21, 21, 21)) == "2012-12-21T21:21:21Z"