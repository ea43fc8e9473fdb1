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
This module implements encoding a boolean value using 1 byte, with or without support for `None`.

The format is trivial and extremely simple:

- `False` maps to `b'\x00'`
- `True` maps to `b'\x01'`
- `None` maps to `b'\xff'` (the byte -1), only for the nullable variant
- any other byte value is invalid

>>> se = Serializer.build_bytes_serializer()
>>> encode_bool(se, False)
>>> encode_bool(se, True)
>>> encode_nullable_bool(se, None)
>>> bytes(se.finalize())
b'\x00\x01\xff'

>>> de = Deserializer.build_bytes_deserializer(b'\x00\x01\xff')
>>> decode_bool(de)
Ok(False)
>>> decode_nullable_bool(de)
Ok(True)
>>> decode_nullable_bool(de)
Ok(None)
>>> de.finalize()
Ok(None)

>>> de = Deserializer.build_bytes_deserializer(b'\x02')
>>> decode_bool(de)
Err(BadDataError("b'\\x02' is not a valid boolean"))

>>> de = Deserializer.build_bytes_deserializer(b'\xff')
>>> decode_bool(de)
Err(BadDataError("b'\\xff' is not a valid boolean"))
"""

from typing import Optional

from flatcodec.serialization import BadDataError, Deserializer, SerializationError, Serializer
from flatcodec.utils.result import Err, Ok, Result, propagate_result

_FALSE = 0x00
_TRUE = 0x01
_NULL = 0xff


def encode_bool(serializer: Serializer, value: bool) -> None:
    """ Encodes a boolean value using 1 byte.
    """
    if not isinstance(value, bool):
        raise TypeError(f'expected bool, got {type(value).__name__}')
    serializer.write_byte(_TRUE if value else _FALSE)


@propagate_result
def decode_bool(deserializer: Deserializer) -> Result[bool, SerializationError]:
    """ Decodes a boolean value from 1 byte.
    """
    i = deserializer.peek_byte().unwrap_or_propagate()
    if i == _FALSE:
        value = False
    elif i == _TRUE:
        value = True
    else:
        raw = bytes([i])
        return Err(BadDataError(f'{raw!r} is not a valid boolean'))
    deserializer.advance(1).unwrap_or_propagate()
    return Ok(value)


def encode_nullable_bool(serializer: Serializer, value: Optional[bool]) -> None:
    """ Encodes a boolean or None using 1 byte.
    """
    if value is None:
        serializer.write_byte(_NULL)
    else:
        encode_bool(serializer, value)


@propagate_result
def decode_nullable_bool(deserializer: Deserializer) -> Result[Optional[bool], SerializationError]:
    """ Decodes a boolean or None from 1 byte.
    """
    i = deserializer.peek_byte().unwrap_or_propagate()
    if i == _NULL:
        deserializer.advance(1).unwrap_or_propagate()
        return Ok(None)
    return decode_bool(deserializer)
