import copyreg
import json
import pickle as stdlib_pickle
import re
from dataclasses import dataclass
from typing import Any

import pytest
from structlog.testing import capture_logs

from flatcodec.serialization import (
    BadDataError,
    Deserializer,
    ExternalCapabilityError,
    OutOfDataError,
    TooLongError,
    decode_from_bytes,
    encode_to_bytes,
)
from flatcodec.serialization.encoding.object import (
    decode_object,
    encode_object,
    object_from_string,
    object_to_string,
)
from flatcodec.utils import pickle
from flatcodec.utils.pickle import register_custom_pickler


class JsonCodec:
    def dumps(self, obj: object) -> bytes:
        return json.dumps(obj).encode()

    def loads(self, data: bytes) -> object:
        return json.loads(data)


@dataclass(frozen=True)
class Point:
    x: int
    y: int


def _point_to_bytes(point: Point) -> bytes:
    return f'{point.x},{point.y}'.encode()


def _point_from_bytes(data: bytes) -> Point:
    x, y = data.decode().split(',')
    return Point(int(x), int(y))


@pytest.mark.parametrize('obj', [None, 0, 'text', b'\x00\xff', [1, [2, (3,)]], {'k': {1.5, 2.5}}])
def test_default_codec_round_trip(obj: Any) -> None:
    assert decode_from_bytes(decode_object, encode_to_bytes(encode_object, obj)).unwrap() == obj


def test_frame_is_length_plus_payload() -> None:
    codec = JsonCodec()
    data = encode_to_bytes(encode_object, [1, 2], codec)
    assert data == b'\x00\x00\x00\x06[1, 2]'
    assert decode_from_bytes(decode_object, data, codec).unwrap() == [1, 2]


def test_capability_failure_is_an_error() -> None:
    data = b'\x00\x00\x00\x03{{{'
    de = Deserializer.build_bytes_deserializer(data)
    with capture_logs() as logs:
        result = decode_object(de, JsonCodec())
    error = result.unwrap_err()
    assert isinstance(error, ExternalCapabilityError)
    assert isinstance(error.__cause__, json.JSONDecodeError)
    assert de.is_empty()
    assert [log['event'] for log in logs] == ['object capability failed']
    assert logs[0]['size'] == 3


def test_null_length_is_not_an_object() -> None:
    assert isinstance(decode_from_bytes(decode_object, b'\xff\xff\xff\xff').unwrap_err(), BadDataError)


def test_truncated_payload() -> None:
    de = Deserializer.build_bytes_deserializer(b'\x00\x00\x00\x10abc')
    assert isinstance(decode_object(de).unwrap_err(), OutOfDataError)
    assert de.cur_pos() == 0


def test_max_length() -> None:
    data = encode_to_bytes(encode_object, 'x' * 100)
    assert isinstance(decode_from_bytes(decode_object, data, max_length=10).unwrap_err(), TooLongError)


def test_text_form() -> None:
    text = object_to_string({'a': [1, 2]})
    assert isinstance(text, str)
    assert object_from_string(text).unwrap() == {'a': [1, 2]}
    assert object_to_string([1], JsonCodec()) == '[1]'


def test_text_form_rejects_non_byte_characters() -> None:
    assert isinstance(object_from_string('€').unwrap_err(), BadDataError)


def test_register_custom_pickler() -> None:
    register_custom_pickler(Point, serializer=_point_to_bytes, deserializer=_point_from_bytes)
    data = pickle.dumps(Point(3, -4))
    assert b'3,-4' in data
    assert pickle.loads(data) == Point(3, -4)
    assert decode_from_bytes(decode_object, encode_to_bytes(encode_object, [Point(1, 2)])).unwrap() == [Point(1, 2)]


def test_default_codec_keeps_copyreg_reducers() -> None:
    pattern = re.compile('a+', re.IGNORECASE)
    decoded = decode_from_bytes(decode_object, encode_to_bytes(encode_object, pattern)).unwrap()
    assert decoded == pattern
    assert decoded.match('AAa')


def test_custom_reducers_stay_local() -> None:
    register_custom_pickler(Point, serializer=_point_to_bytes, deserializer=_point_from_bytes)
    assert Point not in copyreg.dispatch_table
    assert b'3,4' not in stdlib_pickle.dumps(Point(3, 4))
