# Copyright 2025 Hathor Labs
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

r"""
Lists of booleans, sized integers, floats, doubles, dates and enums.

Each typed list is a string list (see `compound_encoding.list`) whose elements are the canonical text of the values:

- booleans: `true` and `false`
- integers: decimal, checked against the range of their width
- floats and doubles: the shortest decimal that reads back to the same value, `NaN`, `Infinity` and `-Infinity`
- dates: milliseconds since the unix epoch, as a long list
- enums: the ordinal of the variant, as an int list

`None` elements are kept as `None`.

>>> se = Serializer.build_bytes_serializer()
>>> encode_int_list(se, [1, None, -20], '|')
>>> encode_bool_list(se, [True, False], '|')
>>> encode_double_list(se, [0.5, float('-inf'), -0.0], '|')
>>> de = Deserializer.build_bytes_deserializer(se.finalize())
>>> decode_int_list(de, '|')
Ok([1, None, -20])
>>> decode_bool_list(de, '|')
Ok([True, False])
>>> decode_double_list(de, '|')
Ok([0.5, -inf, -0.0])
>>> de.finalize()
Ok(None)

The text form is readable on its own:

>>> serialize_typed_list_to_readable_string([1.5, float('nan'), None], DOUBLE_ELEMENT, '|')
Ok('3|3|1.53|NaN-1|')

32-bit floats get the shortest text of their single precision value:

>>> serialize_typed_list_to_readable_string([0.1, 1 / 3], FLOAT_ELEMENT, '|')
Ok('2|3|0.110|0.33333334')

Values that don't fit the element type are rejected:

>>> encode_byte_list(Serializer.build_bytes_serializer(), [128], '|')
Traceback (most recent call last):
...
ValueError: 128 is out of range for byte
"""

import math
import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Generic, Iterable, Optional, TypeVar

from flatcodec.serialization import BadDataError, Deserializer, SerializationError, Serializer, UnknownVariantError
from flatcodec.serialization.compound_encoding.list import decode_string_list, encode_string_list
from flatcodec.serialization.compound_encoding.readable_list import serialize_list_to_readable_string
from flatcodec.serialization.consts import BYTE, INT, LONG, SHORT, USE_SETTINGS, UseSettings
from flatcodec.serialization.encoding.enum import ordinal_of, resolve_strict, variant_at
from flatcodec.serialization.encoding.float import bits_to_float, float_to_bits
from flatcodec.serialization.encoding.int import max_value, min_value
from flatcodec.utils.result import Err, Ok, Result, propagate_result

T = TypeVar('T')

Separator = Optional[str] | UseSettings
MaxLength = Optional[int] | UseSettings


@dataclass(frozen=True, slots=True)
class TextElement(Generic[T]):
    """How to turn one list element into its canonical text and back.

    `to_text` raises TypeError/ValueError for a value it cannot represent, `from_text` raises ValueError for a text
    that isn't canonical for the element type.
    """
    name: str
    to_text: Callable[[T], str]
    from_text: Callable[[str], T]


_INTEGER_RE = re.compile(r'-?[0-9]+')
_DECIMAL_RE = re.compile(r'-?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][-+]?[0-9]+)?')
_SPECIAL_FLOATS = {'NaN': math.nan, 'Infinity': math.inf, '-Infinity': -math.inf}


def _bool_to_text(value: bool) -> str:
    if not isinstance(value, bool):
        raise TypeError(f'expected bool, got {type(value).__name__}')
    return 'true' if value else 'false'


def _bool_from_text(text: str) -> bool:
    if text == 'true':
        return True
    if text == 'false':
        return False
    raise ValueError(f'{text!r} is not a boolean')


def _sized_int_element(name: str, length: int) -> TextElement[int]:
    lower, upper = min_value(length), max_value(length)

    def check_range(value: int) -> int:
        if not lower <= value <= upper:
            raise ValueError(f'{value} is out of range for {name}')
        return value

    def to_text(value: int) -> str:
        if not isinstance(value, int) or isinstance(value, bool):
            raise TypeError(f'expected int, got {type(value).__name__}')
        return str(check_range(value))

    def from_text(text: str) -> int:
        if not _INTEGER_RE.fullmatch(text):
            raise ValueError(f'{text!r} is not an integer')
        return check_range(int(text))

    return TextElement(name, to_text, from_text)


def _check_number(value: float) -> float:
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        raise TypeError(f'expected float, got {type(value).__name__}')
    try:
        return float(value)
    except OverflowError as e:
        raise ValueError(f'{value} is out of range for a double') from e


def _special_text(value: float) -> Optional[str]:
    if math.isnan(value):
        return 'NaN'
    if math.isinf(value):
        return 'Infinity' if value > 0 else '-Infinity'
    return None


def _double_to_text(value: float) -> str:
    value = _check_number(value)
    return _special_text(value) or repr(value)


def _float_to_text(value: float) -> str:
    """Shortest decimal that reads back to the same single precision value, `repr` would give the widened double."""
    value = _round_to_float32(_check_number(value))
    special = _special_text(value)
    if special is not None:
        return special
    # 9 significant digits always identify a float32
    for precision in range(1, 10):
        text = repr(float(f'{value:.{precision}g}'))
        try:
            if _round_to_float32(float(text)) == value:
                return text
        except ValueError:
            continue
    return repr(value)


def _double_from_text(text: str) -> float:
    if text in _SPECIAL_FLOATS:
        return _SPECIAL_FLOATS[text]
    if not _DECIMAL_RE.fullmatch(text):
        raise ValueError(f'{text!r} is not a decimal number')
    return float(text)


def _round_to_float32(value: float) -> float:
    return bits_to_float(float_to_bits(value))


BOOL_ELEMENT: TextElement[bool] = TextElement('boolean', _bool_to_text, _bool_from_text)
BYTE_ELEMENT = _sized_int_element('byte', BYTE)
SHORT_ELEMENT = _sized_int_element('short', SHORT)
INT_ELEMENT = _sized_int_element('int', INT)
LONG_ELEMENT = _sized_int_element('long', LONG)
FLOAT_ELEMENT: TextElement[float] = TextElement(
    'float',
    _float_to_text,
    lambda text: _round_to_float32(_double_from_text(text)),
)
DOUBLE_ELEMENT: TextElement[float] = TextElement('double', _double_to_text, _double_from_text)


@propagate_result
def serialize_typed_list_to_readable_string(
    values: Iterable[Optional[T]],
    element: TextElement[T],
    pre: str,
    post: Optional[str] = '',
) -> Result[str, SerializationError]:
    """ Readable text form of a typed list, without the byte-buffer envelope.
    """
    texts = [None if value is None else element.to_text(value) for value in values]
    return serialize_list_to_readable_string(texts, pre, post)


def encode_typed_list(
    serializer: Serializer,
    values: Iterable[Optional[T]],
    element: TextElement[T],
    separator: Separator = USE_SETTINGS,
) -> None:
    """ Encodes a list converting every non-None value to text with `element`.
    """
    texts = [None if value is None else element.to_text(value) for value in values]
    encode_string_list(serializer, texts, separator)


@propagate_result
def decode_typed_list(
    deserializer: Deserializer,
    element: TextElement[T],
    separator: Separator = USE_SETTINGS,
    *,
    max_length: MaxLength = USE_SETTINGS,
) -> Result[list[Optional[T]], SerializationError]:
    """ Decodes a list written with `encode_typed_list` and the same `element`.
    """
    texts = decode_string_list(deserializer, separator, max_length=max_length).unwrap_or_propagate()
    values: list[Optional[T]] = []
    for index, text in enumerate(texts):
        if text is None:
            values.append(None)
            continue
        try:
            values.append(element.from_text(text))
        except ValueError as e:
            return Err(BadDataError(f'element {index} is not a valid {element.name}: {text!r}'), e)
    return Ok(values)


def encode_bool_list(serializer: Serializer, values: Iterable[Optional[bool]], separator: Separator = USE_SETTINGS,
                     ) -> None:
    encode_typed_list(serializer, values, BOOL_ELEMENT, separator)


def decode_bool_list(deserializer: Deserializer, separator: Separator = USE_SETTINGS, *,
                     max_length: MaxLength = USE_SETTINGS) -> Result[list[Optional[bool]], SerializationError]:
    return decode_typed_list(deserializer, BOOL_ELEMENT, separator, max_length=max_length)


def encode_byte_list(serializer: Serializer, values: Iterable[Optional[int]], separator: Separator = USE_SETTINGS,
                     ) -> None:
    encode_typed_list(serializer, values, BYTE_ELEMENT, separator)


def decode_byte_list(deserializer: Deserializer, separator: Separator = USE_SETTINGS, *,
                     max_length: MaxLength = USE_SETTINGS) -> Result[list[Optional[int]], SerializationError]:
    return decode_typed_list(deserializer, BYTE_ELEMENT, separator, max_length=max_length)


def encode_short_list(serializer: Serializer, values: Iterable[Optional[int]], separator: Separator = USE_SETTINGS,
                      ) -> None:
    encode_typed_list(serializer, values, SHORT_ELEMENT, separator)


def decode_short_list(deserializer: Deserializer, separator: Separator = USE_SETTINGS, *,
                      max_length: MaxLength = USE_SETTINGS) -> Result[list[Optional[int]], SerializationError]:
    return decode_typed_list(deserializer, SHORT_ELEMENT, separator, max_length=max_length)


def encode_int_list(serializer: Serializer, values: Iterable[Optional[int]], separator: Separator = USE_SETTINGS,
                    ) -> None:
    encode_typed_list(serializer, values, INT_ELEMENT, separator)


def decode_int_list(deserializer: Deserializer, separator: Separator = USE_SETTINGS, *,
                    max_length: MaxLength = USE_SETTINGS) -> Result[list[Optional[int]], SerializationError]:
    return decode_typed_list(deserializer, INT_ELEMENT, separator, max_length=max_length)


def encode_long_list(serializer: Serializer, values: Iterable[Optional[int]], separator: Separator = USE_SETTINGS,
                     ) -> None:
    encode_typed_list(serializer, values, LONG_ELEMENT, separator)


def decode_long_list(deserializer: Deserializer, separator: Separator = USE_SETTINGS, *,
                     max_length: MaxLength = USE_SETTINGS) -> Result[list[Optional[int]], SerializationError]:
    return decode_typed_list(deserializer, LONG_ELEMENT, separator, max_length=max_length)


def encode_float_list(serializer: Serializer, values: Iterable[Optional[float]], separator: Separator = USE_SETTINGS,
                      ) -> None:
    encode_typed_list(serializer, values, FLOAT_ELEMENT, separator)


def decode_float_list(deserializer: Deserializer, separator: Separator = USE_SETTINGS, *,
                      max_length: MaxLength = USE_SETTINGS) -> Result[list[Optional[float]], SerializationError]:
    return decode_typed_list(deserializer, FLOAT_ELEMENT, separator, max_length=max_length)


def encode_double_list(serializer: Serializer, values: Iterable[Optional[float]], separator: Separator = USE_SETTINGS,
                       ) -> None:
    encode_typed_list(serializer, values, DOUBLE_ELEMENT, separator)


def decode_double_list(deserializer: Deserializer, separator: Separator = USE_SETTINGS, *,
                       max_length: MaxLength = USE_SETTINGS) -> Result[list[Optional[float]], SerializationError]:
    return decode_typed_list(deserializer, DOUBLE_ELEMENT, separator, max_length=max_length)


_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_MILLISECOND = timedelta(milliseconds=1)


def date_to_millis(value: datetime) -> int:
    """ Milliseconds since the unix epoch, naive datetimes are taken as UTC.

    >>> date_to_millis(datetime(2001, 9, 9, 1, 46, 40, 123000, tzinfo=timezone.utc))
    1000000000123
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return (value - _EPOCH) // _MILLISECOND


def millis_to_date(millis: int) -> datetime:
    """ Timezone-aware UTC datetime for the given milliseconds since the unix epoch.

    >>> millis_to_date(1000000000123)
    datetime.datetime(2001, 9, 9, 1, 46, 40, 123000, tzinfo=datetime.timezone.utc)
    """
    try:
        return _EPOCH + millis * _MILLISECOND
    except OverflowError as e:
        raise ValueError(f'{millis} milliseconds is out of range for a date') from e


def encode_date_list(serializer: Serializer, values: Iterable[Optional[datetime]],
                     separator: Separator = USE_SETTINGS) -> None:
    """ Encodes the dates as a long list of epoch milliseconds, precision below a millisecond is dropped.
    """
    encode_long_list(serializer, [None if value is None else date_to_millis(value) for value in values], separator)


@propagate_result
def decode_date_list(deserializer: Deserializer, separator: Separator = USE_SETTINGS, *,
                     max_length: MaxLength = USE_SETTINGS) -> Result[list[Optional[datetime]], SerializationError]:
    millis_list = decode_long_list(deserializer, separator, max_length=max_length).unwrap_or_propagate()
    dates: list[Optional[datetime]] = []
    for index, millis in enumerate(millis_list):
        if millis is None:
            dates.append(None)
            continue
        try:
            dates.append(millis_to_date(millis))
        except ValueError as e:
            return Err(BadDataError(f'element {index} is not a valid date: {millis}'), e)
    return Ok(dates)


def encode_enum_list(serializer: Serializer, values: Iterable[Optional[T]], variants: Iterable[T],
                     separator: Separator = USE_SETTINGS) -> None:
    """ Encodes the variants as an int list of their ordinals.
    """
    variants = list(variants)
    encode_int_list(serializer, [None if value is None else ordinal_of(value, variants) for value in values],
                    separator)


@propagate_result
def decode_enum_list(
    deserializer: Deserializer,
    variants: Iterable[T],
    separator: Separator = USE_SETTINGS,
    *,
    strict: bool | UseSettings = USE_SETTINGS,
    max_length: MaxLength = USE_SETTINGS,
) -> Result[list[Optional[T]], SerializationError]:
    """ Decodes an enum list, ordinals with no variant follow the same `strict` policy as `decode_enum`.
    """
    variants = list(variants)
    ordinals = decode_int_list(deserializer, separator, max_length=max_length).unwrap_or_propagate()
    values: list[Optional[T]] = []
    for ordinal in ordinals:
        if ordinal is None:
            values.append(None)
            continue
        variant = variant_at(ordinal, variants)
        if variant is None and resolve_strict(strict):
            return Err(UnknownVariantError(ordinal, len(variants)))
        values.append(variant)
    return Ok(values)
