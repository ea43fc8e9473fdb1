from datetime import datetime, timezone
from enum import Enum

from flatcodec.serialization import Deserializer, concat, encode_to_bytes
from flatcodec.serialization.compound_encoding.list import decode_string_list, encode_string_list
from flatcodec.serialization.compound_encoding.typed_list import decode_date_list, encode_date_list
from flatcodec.serialization.encoding.bool import decode_nullable_bool, encode_nullable_bool
from flatcodec.serialization.encoding.bytes import decode_bytes, encode_bytes
from flatcodec.serialization.encoding.enum import decode_enum, encode_enum
from flatcodec.serialization.encoding.float import decode_nullable_double, encode_nullable_double
from flatcodec.serialization.encoding.int import decode_int, encode_int
from flatcodec.serialization.encoding.nullable_int import decode_nullable_int, encode_nullable_int
from flatcodec.serialization.encoding.object import decode_object, encode_object
from flatcodec.serialization.encoding.string import decode_string, encode_string


class Mode(Enum):
    OFF = 0
    ON = 1


def test_buffers_decode_in_call_order() -> None:
    when = datetime(2020, 5, 17, 8, 0, tzinfo=timezone.utc)
    message = concat(
        encode_to_bytes(encode_int, -5, length=2),
        encode_to_bytes(encode_nullable_int, None, length=8),
        None,
        encode_to_bytes(encode_string, 'héllo'),
        encode_to_bytes(encode_nullable_bool, None),
        encode_to_bytes(encode_bytes, None),
        encode_to_bytes(encode_nullable_double, -0.0),
        encode_to_bytes(encode_enum, Mode.ON, Mode),
        encode_to_bytes(encode_string_list, ['a', None], '|'),
        encode_to_bytes(encode_date_list, [when], '|'),
        encode_to_bytes(encode_object, {'nested': (1, 2)}),
        encode_to_bytes(encode_nullable_int, -2**63, length=8),
    )

    de = Deserializer.build_bytes_deserializer(message)
    assert decode_int(de, length=2).unwrap() == -5
    assert decode_nullable_int(de, length=8).unwrap() is None
    assert decode_string(de).unwrap() == 'héllo'
    assert decode_nullable_bool(de).unwrap() is None
    assert decode_bytes(de).unwrap() is None
    assert str(decode_nullable_double(de).unwrap()) == '-0.0'
    assert decode_enum(de, Mode).unwrap() is Mode.ON
    assert decode_string_list(de, '|').unwrap() == ['a', None]
    assert decode_date_list(de, '|').unwrap() == [when]
    assert decode_object(de).unwrap() == {'nested': (1, 2)}
    assert decode_nullable_int(de, length=8).unwrap() == -2**63

    assert de.cur_pos() == len(message)
    assert de.finalize().is_ok()
