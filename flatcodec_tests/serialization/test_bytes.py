from typing import Optional

import pytest

from flatcodec.serialization import (
    BadDataError,
    Deserializer,
    OutOfDataError,
    Serializer,
    TooLongError,
    decode_from_bytes,
    encode_to_bytes,
)
from flatcodec.serialization.encoding.bytes import decode_bytes, decode_frame, encode_bytes
from flatcodec.serialization.encoding.int import decode_int, encode_int
from flatcodec.serialization.encoding.nullable_int import decode_nullable_int, encode_nullable_int
from flatcodec.serialization.encoding.string import decode_string, encode_string


def test_int_five() -> None:
    data = encode_to_bytes(encode_int, 5, length=4)
    assert data == bytes([0x00, 0x00, 0x00, 0x05])
    de = Deserializer.build_bytes_deserializer(data)
    assert decode_int(de, length=4).unwrap() == 5
    assert de.cur_pos() == 4


def test_nullable_int_null() -> None:
    data = encode_to_bytes(encode_nullable_int, None, length=4)
    assert data == bytes([0x80, 0x00, 0x00, 0x00, 0x00])
    assert decode_from_bytes(decode_nullable_int, data, length=4).unwrap() is None


def test_nullable_int_minimum_is_not_null() -> None:
    data = encode_to_bytes(encode_nullable_int, -2**31, length=4)
    assert data == bytes([0x80, 0x00, 0x00, 0x00, 0x01])
    assert decode_from_bytes(decode_nullable_int, data, length=4).unwrap() == -2**31


def test_string_ab() -> None:
    data = encode_to_bytes(encode_string, 'ab')
    assert data == b'\x00\x00\x00\x02ab'
    de = Deserializer.build_bytes_deserializer(data)
    assert decode_string(de).unwrap() == 'ab'
    assert de.cur_pos() == 6


@pytest.mark.parametrize('value', [None, '', 'a', 'ação', '\U0001f600', 'x' * 1000])
def test_string_values(value: Optional[str]) -> None:
    assert decode_from_bytes(decode_string, encode_to_bytes(encode_string, value)).unwrap() == value


def test_length_counts_utf8_bytes() -> None:
    assert encode_to_bytes(encode_string, 'é')[:4] == b'\x00\x00\x00\x02'


@pytest.mark.parametrize('value', [None, b'', b'\x00', bytes(range(256))])
def test_bytes_values(value: Optional[bytes]) -> None:
    assert decode_from_bytes(decode_bytes, encode_to_bytes(encode_bytes, value)).unwrap() == value


def test_null_string_and_null_bytes_share_the_marker() -> None:
    assert encode_to_bytes(encode_string, None) == b'\xff\xff\xff\xff'
    assert encode_to_bytes(encode_bytes, None) == b'\xff\xff\xff\xff'


def test_empty_is_not_null() -> None:
    assert encode_to_bytes(encode_bytes, b'') == b'\x00\x00\x00\x00'
    assert decode_from_bytes(decode_string, b'\x00\x00\x00\x00').unwrap() == ''


@pytest.mark.parametrize('length', [-2, -100, -2**31])
def test_negative_length_other_than_null(length: int) -> None:
    data = encode_to_bytes(encode_int, length, length=4)
    de = Deserializer.build_bytes_deserializer(data + b'payload')
    assert isinstance(decode_bytes(de).unwrap_err(), BadDataError)


def test_truncated_payload_consumes_nothing() -> None:
    de = Deserializer.build_bytes_deserializer(b'\x00\x00\x00\x08abc')
    assert isinstance(decode_string(de).unwrap_err(), OutOfDataError)
    assert de.cur_pos() == 0
    assert de.remaining() == 7


def test_truncated_length_field() -> None:
    de = Deserializer.build_bytes_deserializer(b'\x00\x00')
    assert isinstance(decode_bytes(de).unwrap_err(), OutOfDataError)
    assert de.cur_pos() == 0


def test_max_length() -> None:
    data = encode_to_bytes(encode_bytes, b'12345')
    assert decode_from_bytes(decode_bytes, data, max_length=5).unwrap() == b'12345'
    assert isinstance(decode_from_bytes(decode_bytes, data, max_length=4).unwrap_err(), TooLongError)
    assert decode_from_bytes(decode_bytes, data, max_length=None).unwrap() == b'12345'


def test_max_length_from_settings() -> None:
    # the test settings cap frames at 1 MiB
    de = Deserializer.build_bytes_deserializer(encode_to_bytes(encode_int, 2**20 + 1, length=4))
    assert isinstance(decode_bytes(de).unwrap_err(), TooLongError)


def test_frame_is_a_view() -> None:
    de = Deserializer.build_bytes_deserializer(b'\x00\x00\x00\x02hi!')
    frame = decode_frame(de).unwrap()
    assert isinstance(frame, memoryview)
    assert bytes(frame) == b'hi'
    assert de.remaining() == 1


def test_non_nullable_frame() -> None:
    de = Deserializer.build_bytes_deserializer(b'\xff\xff\xff\xff')
    assert isinstance(decode_frame(de, nullable=False).unwrap_err(), BadDataError)


def test_invalid_utf8() -> None:
    result = decode_from_bytes(decode_string, b'\x00\x00\x00\x02\xc3\x28')
    assert isinstance(result.unwrap_err(), BadDataError)
    assert isinstance(result.unwrap_err().__cause__, UnicodeDecodeError)


@pytest.mark.parametrize('value', [b'ab', 1, ['a']])
def test_encode_string_requires_a_str(value: object) -> None:
    with pytest.raises(TypeError):
        encode_string(Serializer.build_bytes_serializer(), value)  # type: ignore[arg-type]


def test_encode_bytes_accepts_buffers() -> None:
    assert encode_to_bytes(encode_bytes, bytearray(b'ab')) == b'\x00\x00\x00\x02ab'
    with pytest.raises(TypeError):
        encode_bytes(Serializer.build_bytes_serializer(), 'ab')  # type: ignore[arg-type]
