import math
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Callable, Optional

import pytest

from flatcodec.serialization import (
    BadDataError,
    UnknownVariantError,
    decode_from_bytes,
    encode_to_bytes,
)
from flatcodec.serialization.compound_encoding.list import encode_string_list
from flatcodec.serialization.compound_encoding.readable_list import deserialize_list_from_readable_string
from flatcodec.serialization.compound_encoding.typed_list import (
    DOUBLE_ELEMENT,
    FLOAT_ELEMENT,
    decode_bool_list,
    decode_byte_list,
    decode_date_list,
    decode_double_list,
    decode_enum_list,
    decode_float_list,
    decode_int_list,
    decode_long_list,
    decode_short_list,
    encode_bool_list,
    encode_byte_list,
    encode_date_list,
    encode_double_list,
    encode_enum_list,
    encode_float_list,
    encode_int_list,
    encode_long_list,
    encode_short_list,
    millis_to_date,
    serialize_typed_list_to_readable_string,
)
from flatcodec.serialization.encoding.float import float_to_bits
from flatcodec.serialization.encoding.string import decode_string


class Level(Enum):
    LOW = 1
    MID = 2
    HIGH = 3


@pytest.mark.parametrize(
    ['encoder', 'decoder', 'values'],
    [
        (encode_bool_list, decode_bool_list, [True, None, False]),
        (encode_byte_list, decode_byte_list, [-128, 0, None, 127]),
        (encode_short_list, decode_short_list, [-32768, 32767, None]),
        (encode_int_list, decode_int_list, [-2**31, None, 2**31 - 1]),
        (encode_long_list, decode_long_list, [-2**63, 2**63 - 1, None, 0]),
        (encode_float_list, decode_float_list, [0.5, None, -1.25, math.inf]),
        (encode_double_list, decode_double_list, [0.1, 1e300, -5e-324, None, -math.inf]),
        (encode_bool_list, decode_bool_list, []),
    ]
)
def test_round_trip(encoder: Callable[..., None], decoder: Callable[..., Any], values: list[Any]) -> None:
    data = encode_to_bytes(encoder, values, '|')
    assert decode_from_bytes(decoder, data, separator='|').unwrap() == values


def test_canonical_text() -> None:
    data = encode_to_bytes(encode_bool_list, [True, False, None], '|')
    assert decode_from_bytes(decode_string, data).unwrap() == '3|4|true5|false-1|'
    data = encode_to_bytes(encode_long_list, [-7, 10], '|')
    assert decode_from_bytes(decode_string, data).unwrap() == '2|2|-72|10'


def test_special_doubles() -> None:
    text = serialize_typed_list_to_readable_string([math.nan, math.inf, -math.inf, -0.0], DOUBLE_ELEMENT, '|')
    assert text.unwrap() == '4|3|NaN8|Infinity9|-Infinity4|-0.0'

    data = encode_to_bytes(encode_double_list, [math.nan, -0.0], '|')
    nan, zero = decode_from_bytes(decode_double_list, data, separator='|').unwrap()
    assert math.isnan(nan)
    assert zero == 0.0 and math.copysign(1.0, zero) == -1.0


def test_float_list_rounds_to_single_precision() -> None:
    data = encode_to_bytes(encode_float_list, [0.1], '|')
    assert decode_from_bytes(decode_float_list, data, separator='|').unwrap() == [0.10000000149011612]


@pytest.mark.parametrize(
    ['encoder', 'value'],
    [
        (encode_byte_list, 128),
        (encode_byte_list, -129),
        (encode_short_list, 2**15),
        (encode_int_list, 2**31),
        (encode_long_list, -2**63 - 1),
        (encode_float_list, 1e300),
    ]
)
def test_encode_out_of_range(encoder: Callable[..., None], value: Any) -> None:
    with pytest.raises(ValueError):
        encode_to_bytes(encoder, [value], '|')


def test_encode_wrong_type() -> None:
    with pytest.raises(TypeError):
        encode_to_bytes(encode_int_list, [True], '|')
    with pytest.raises(TypeError):
        encode_to_bytes(encode_bool_list, [1], '|')


@pytest.mark.parametrize(
    ['decoder', 'items'],
    [
        (decode_bool_list, ['True']),
        (decode_bool_list, ['1']),
        (decode_byte_list, ['128']),
        (decode_short_list, ['1.0']),
        (decode_int_list, [' 1']),
        (decode_int_list, ['0x10']),
        (decode_long_list, ['9223372036854775808']),
        (decode_double_list, ['nan']),
        (decode_double_list, ['1,5']),
        (decode_float_list, ['1e39']),
    ]
)
def test_decode_rejects_non_canonical_text(decoder: Callable[..., Any], items: list[Optional[str]]) -> None:
    data = encode_to_bytes(encode_string_list, items, '|')
    error = decode_from_bytes(decoder, data, separator='|').unwrap_err()
    assert isinstance(error, BadDataError)
    assert str(error).startswith('element 0 ')


def test_date_list() -> None:
    dates = [
        datetime(1970, 1, 1, tzinfo=timezone.utc),
        None,
        datetime(2024, 2, 29, 12, 30, 15, 250000, tzinfo=timezone.utc),
        datetime(1969, 12, 31, 23, 59, 59, 999000, tzinfo=timezone.utc),
    ]
    data = encode_to_bytes(encode_date_list, dates, '|')
    assert decode_from_bytes(decode_long_list, data, separator='|').unwrap() == [0, None, 1709209815250, -1]
    assert decode_from_bytes(decode_date_list, data, separator='|').unwrap() == dates


def test_date_list_naive_is_utc_and_loses_microseconds() -> None:
    naive = datetime(2000, 1, 1, 0, 0, 0, 123456)
    data = encode_to_bytes(encode_date_list, [naive], '|')
    [decoded] = decode_from_bytes(decode_date_list, data, separator='|').unwrap()
    assert decoded == datetime(2000, 1, 1, 0, 0, 0, 123000, tzinfo=timezone.utc)


def test_date_list_other_timezone() -> None:
    local = datetime(2000, 1, 1, 3, 0, tzinfo=timezone(timedelta(hours=3)))
    data = encode_to_bytes(encode_date_list, [local], '|')
    assert decode_from_bytes(decode_long_list, data, separator='|').unwrap() == [946684800000]


def test_date_out_of_range() -> None:
    with pytest.raises(ValueError):
        millis_to_date(2**62)
    data = encode_to_bytes(encode_long_list, [2**62], '|')
    assert isinstance(decode_from_bytes(decode_date_list, data, separator='|').unwrap_err(), BadDataError)


def test_enum_list() -> None:
    data = encode_to_bytes(encode_enum_list, [Level.HIGH, None, Level.LOW], Level, '|')
    assert decode_from_bytes(decode_int_list, data, separator='|').unwrap() == [2, None, 0]
    assert decode_from_bytes(decode_enum_list, data, variants=Level, separator='|').unwrap() == [
        Level.HIGH, None, Level.LOW,
    ]


def test_enum_list_unknown_ordinal() -> None:
    data = encode_to_bytes(encode_int_list, [0, 5], '|')
    decoded = decode_from_bytes(decode_enum_list, data, variants=Level, separator='|', strict=False).unwrap()
    assert decoded == [Level.LOW, None]
    error = decode_from_bytes(decode_enum_list, data, variants=Level, separator='|', strict=True).unwrap_err()
    assert isinstance(error, UnknownVariantError)
    assert error.ordinal == 5


@pytest.mark.parametrize(
    ['value', 'text'],
    [
        (0.1, '0.1'),
        (1 / 3, '0.33333334'),
        (1.0, '1.0'),
        (-0.0, '-0.0'),
        (16777216.0, '16777216.0'),
        (1e-45, '1e-45'),
        (3.4028234663852886e38, '3.4028235e+38'),
        (math.nan, 'NaN'),
        (-math.inf, '-Infinity'),
    ]
)
def test_float_text_is_the_shortest_single_precision_decimal(value: float, text: str) -> None:
    [element_text] = deserialize_list_from_readable_string(
        serialize_typed_list_to_readable_string([value], FLOAT_ELEMENT, '|').unwrap(), '|',
    ).unwrap()
    assert element_text == text

    data = encode_to_bytes(encode_float_list, [value], '|')
    [decoded] = decode_from_bytes(decode_float_list, data, separator='|').unwrap()
    assert float_to_bits(decoded) == float_to_bits(value)


@pytest.mark.parametrize('encoder', [encode_float_list, encode_double_list])
@pytest.mark.parametrize('value', ['1.5', True, b'1'])
def test_float_lists_reject_non_numbers(encoder: Callable[..., None], value: Any) -> None:
    with pytest.raises(TypeError):
        encode_to_bytes(encoder, [value], '|')


def test_float_lists_accept_ints() -> None:
    data = encode_to_bytes(encode_double_list, [2], '|')
    assert decode_from_bytes(decode_double_list, data, separator='|').unwrap() == [2.0]
