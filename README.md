# nullable

Nullable value types for data that passes between JSON documents, plain text
and database rows.

Each value is in one of three states:

* **unset**: nothing was ever given for it;
* **set but null**: a value was given explicitly and it was null;
* **valid**: a real value is present.

This lets you tell a missing field apart from an explicit `null`, for example
in a partial update that should leave a column alone in one case and clear it
in the other.

## Installation

```
pip install nullable
```

## Types

| Module                | Types                |
|-----------------------|----------------------|
| `nullable.floats`     | `Float32`, `Float64` |
| `nullable.boolean`    | `Bool`               |
| `nullable.text`       | `String`, `Byte`     |
| `nullable.binary`     | `Bytes`, `JSON`      |
| `nullable.timestamp`  | `Time`               |

All of them derive from `nullable.base.Nullable`, a dataclass with the fields
`value`, `valid` and `set`, and share its interface.

## Creating values

```python
from nullable.text import String

name = String.from_value("test")     # always valid
name.is_valid()                      # True

missing = String.from_optional(None) # null when given None
missing.is_valid()                   # False
missing.is_set()                     # True: null was given explicitly

explicit = String.new("", False)     # value and validity given directly
explicit.set_valid("hello")          # now valid, holding "hello"
explicit.ptr()                       # "hello", or None while the value is null
```

`is_zero()` is true exactly when the value is null.

`Bytes.from_value` and `JSON.from_value` are the exception: they give a null
value when passed `None` and a valid one otherwise, an empty byte string
included.

## JSON and text

```python
from nullable.text import String

name = String.from_value("test")
name.marshal_json()      # b'"test"'
name.marshal_text()      # b'test'

name.unmarshal_json(b"null")
name.is_valid()          # False
name.is_set()            # True
```

* `marshal_json()` returns `b"null"` for a null value.
* `unmarshal_json(data)` accepts `null`, which makes the value set but null;
  any other input must be JSON of the right type.
* `marshal_text()` returns `b""` for a null value (`Time` returns `b"null"`).
* `unmarshal_text(text)` treats empty text as null and parses anything else.

Both `unmarshal_*` methods take `bytes` or `str`. Input that cannot be read
raises `ValueError`.

Notes on particular types:

* `Bool` reads and writes `true` and `false`; text other than those is
  refused.
* `Float32` rounds what it holds to single precision and writes the shortest
  decimal that reads back to the same value; `Float64` writes the shortest
  decimal form without an exponent.
* `Byte` holds one byte as an int from 0 to 255 and is written in JSON as a
  one-character string; longer input is refused.
* `Bytes` is written in JSON as base64 text, and reads either base64 text or
  a list of byte values. An empty `Bytes` is written as `null`.
* `Time` holds a `datetime` and reads and writes RFC 3339 text, fractions of
  a second included.

### Holding raw JSON

`nullable.binary.JSON` keeps a JSON document as bytes. It can encode an
object into itself and decode itself back:

```python
from nullable.binary import JSON

document = JSON.new(None, False)
document.marshal({"Name": "hello", "Age": 15})
document.value           # b'{"Name":"hello","Age":15}'
document.is_valid()      # True
document.unmarshal()     # {'Name': 'hello', 'Age': 15}
```

Marshalling `None` makes the value set but null, and `unmarshal()` of an
empty document gives `None`.

## Databases

`scan(value)` fills a nullable from a value read from a database driver;
`None` makes it unset and null. `db_value()` gives the value to hand back to
a driver, or `None` when null.

```python
from nullable.floats import Float64
from nullable.timestamp import Time

price = Float64.new(0.0, False)
price.scan("1.5")        # text from the driver is converted
price.db_value()         # 1.5

moment = Time.new(None, False)
moment.scan(42)          # raises TypeError: only datetimes are accepted
```

`Byte.scan` takes the first byte of a string or byte string and treats an
empty one as unset; its `db_value()` is a one-byte `bytes` object.

The conversions that `scan` relies on are available directly in
`nullable.convert`. `convert_assign(kind, src)` converts a driver value to the
target `Kind` (given as a member or by its name, such as `"int16"`) and raises
`ConversionError` when the conversion would lose information or is not
supported:

```python
from nullable.convert import Kind, convert_assign

convert_assign(Kind.INT16, "32767")   # 32767
convert_assign("bool", "TRUE")        # True
convert_assign(Kind.INT8, "128")      # raises ConversionError: value out of range
```

`format_rfc3339_nano(moment)` formats a datetime the way time values are
rendered as text, treating naive datetimes as UTC.

## What this package does not provide

There are no nullable integer wrappers. Whole numbers can be converted with
`convert_assign` and the integer members of `Kind`, but no `Nullable` type
holds them.

## Running the tests

```
pip install "nullable[test]"
pytest
```