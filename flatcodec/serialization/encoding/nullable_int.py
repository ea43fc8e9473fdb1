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
This module implements nullable fixed-size signed integers.

The minimum value of each width is reserved as a sentinel. When the sentinel bytes are written, one extra boolean byte
follows to tell the two meanings apart:

- any value other than the minimum: the fixed-size bytes only
- the minimum value itself: the fixed-size bytes of the minimum, then `b'\x01'`
- `None`: the fixed-size bytes of the minimum, then `b'\x00'`

>>> se = Serializer.build_bytes_serializer()
>>> encode_nullable_int(se, 5, length=4)  # writes 00000005
>>> encode_nullable_int(se, None, length=4)  # writes 80000000 00
>>> encode_nullable_int(se, -2**31, length=4)  # writes 80000000 01
>>> bytes(se.finalize()).hex()
'0000000580000000008000000001'

The sentinel is decided per width, -128 is only special for 1-byte values:

>>> se = Serializer.build_bytes_serializer()
>>> encode_nullable_int(se, -128, length=1)  # writes 80 01
>>> encode_nullable_int(se, -128, length=2)  # writes ff80
>>> bytes(se.finalize()).hex()
'8001ff80'

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('00000005 8000000000 8000000001'))
>>> decode_nullable_int(de, length=4)
Ok(5)
>>> decode_nullable_int(de, length=4)
Ok(None)
>>> decode_nullable_int(de, length=4)
Ok(-2147483648)
>>> de.finalize()
Ok(None)
"""

from dataclasses import dataclass
from typing import Optional, TypeAlias

from flatcodec.serialization import Deserializer, SerializationError, Serializer
from flatcodec.serialization.encoding.bool import decode_bool, encode_bool
from flatcodec.serialization.encoding.int import decode_int, encode_int, min_value
from flatcodec.utils.result import Ok, Result, propagate_result


@dataclass(frozen=True, slots=True)
class _Absent:
    pass


@dataclass(frozen=True, slots=True)
class _Minimum:
    pass


@dataclass(frozen=True, slots=True)
class _Present:
    value: int


# what a nullable int slot holds on the wire, the sentinel handling never leaves this module
_Slot: TypeAlias = _Absent | _Minimum | _Present


def _to_slot(value: Optional[int], length: int) -> _Slot:
    if value is None:
        return _Absent()
    if value == min_value(length):
        return _Minimum()
    return _Present(value)


def _from_slot(slot: _Slot, length: int) -> Optional[int]:
    match slot:
        case _Absent():
            return None
        case _Minimum():
            return min_value(length)
        case _Present(value):
            return value


def encode_nullable_int(serializer: Serializer, value: Optional[int], *, length: int) -> None:
    """ Encode a signed int or None using `length` bytes, plus one byte when the sentinel is written.

    This modules's docstring has more details and examples.
    """
    match _to_slot(value, length):
        case _Absent():
            encode_int(serializer, min_value(length), length=length)
            encode_bool(serializer, False)
        case _Minimum():
            encode_int(serializer, min_value(length), length=length)
            encode_bool(serializer, True)
        case _Present(number):
            encode_int(serializer, number, length=length)


@propagate_result
def decode_nullable_int(deserializer: Deserializer, *, length: int) -> Result[Optional[int], SerializationError]:
    """ Decode a signed int or None that was encoded with `encode_nullable_int`.

    This modules's docstring has more details and examples.
    """
    number = decode_int(deserializer, length=length).unwrap_or_propagate()
    slot: _Slot
    if number != min_value(length):
        slot = _Present(number)
    elif decode_bool(deserializer).unwrap_or_propagate():
        slot = _Minimum()
    else:
        slot = _Absent()
    return Ok(_from_slot(slot, length))
