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
This module implements encoding of byte sequences by prefixing them with their length as a 4-byte signed int.

A `None` value is encoded as the length `-1` with no payload. Any other negative length is invalid.

>>> se = Serializer.build_bytes_serializer()
>>> encode_bytes(se, b'test')  # writes 00000004 74657374
>>> encode_bytes(se, b'')  # writes 00000000
>>> encode_bytes(se, None)  # writes ffffffff
>>> encoded_data = bytes(se.finalize())
>>> encoded_data.hex()
'000000047465737400000000ffffffff'

>>> de = Deserializer.build_bytes_deserializer(encoded_data + b'foo')
>>> decode_bytes(de)
Ok(b'test')
>>> decode_bytes(de)
Ok(b'')
>>> decode_bytes(de)
Ok(None)
>>> bytes(de.read_all().unwrap())
b'foo'

The length is checked before any payload byte is read:

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('00000010') + b'short')
>>> decode_bytes(de)
Err(OutOfDataError('frame of 16 bytes but only 5 bytes left'))
>>> de.remaining()
5

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('fffffffe'))
>>> decode_bytes(de)
Err(BadDataError('invalid length: -2'))

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('00000004') + b'test')
>>> decode_bytes(de, max_length=3)
Err(TooLongError('frame of 4 bytes is above the maximum of 3 bytes'))
"""

from typing import Optional

from flatcodec.conf import get_global_settings
from flatcodec.serialization import (
    BadDataError,
    Deserializer,
    OutOfDataError,
    SerializationError,
    Serializer,
    TooLongError,
)
from flatcodec.serialization.consts import LENGTH_FIELD_WIDTH, NULL_LENGTH, USE_SETTINGS, UseSettings
from flatcodec.serialization.encoding.int import decode_int, encode_int, max_value
from flatcodec.serialization.types import Buffer
from flatcodec.utils.result import Err, Ok, Result, propagate_result


def _resolve_max_length(max_length: Optional[int] | UseSettings) -> Optional[int]:
    if max_length is USE_SETTINGS:
        return get_global_settings().MAX_FRAME_LENGTH
    return max_length


def encode_frame(serializer: Serializer, data: Optional[Buffer]) -> None:
    """ Write the length prefix and the payload, or only the `-1` length when `data` is None.
    """
    if data is None:
        encode_int(serializer, NULL_LENGTH, length=LENGTH_FIELD_WIDTH)
        return
    view = memoryview(data)
    if view.nbytes > max_value(LENGTH_FIELD_WIDTH):
        raise ValueError(f'cannot frame {view.nbytes} bytes')
    encode_int(serializer, view.nbytes, length=LENGTH_FIELD_WIDTH)
    serializer.write_bytes(view)


@propagate_result
def decode_frame(
    deserializer: Deserializer,
    *,
    nullable: bool = True,
    max_length: Optional[int] | UseSettings = USE_SETTINGS,
) -> Result[Optional[memoryview], SerializationError]:
    """ Read a length prefix and the payload it announces, None for the `-1` length when `nullable`.

    A bad, oversize or truncated length fails before any payload byte is consumed. When `max_length` is not given it
    comes from the `MAX_FRAME_LENGTH` setting, `None` disables the check.
    """
    length = decode_int(deserializer, length=LENGTH_FIELD_WIDTH).unwrap_or_propagate()
    if length == NULL_LENGTH and nullable:
        return Ok(None)
    if length < 0:
        return Err(BadDataError(f'invalid length: {length}'))
    limit = _resolve_max_length(max_length)
    if limit is not None and length > limit:
        return Err(TooLongError(f'frame of {length} bytes is above the maximum of {limit} bytes'))
    if length > deserializer.remaining():
        return Err(OutOfDataError(f'frame of {length} bytes but only {deserializer.remaining()} bytes left'))
    return deserializer.read_bytes(length)


def encode_bytes(serializer: Serializer, data: Optional[bytes]) -> None:
    """ Encodes a byte-sequence, or None, adding a length prefix.

    This modules's docstring has more details and examples.
    """
    if data is not None and not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError(f'expected bytes, got {type(data).__name__}')
    encode_frame(serializer, data)


@propagate_result
def decode_bytes(
    deserializer: Deserializer,
    *,
    max_length: Optional[int] | UseSettings = USE_SETTINGS,
) -> Result[Optional[bytes], SerializationError]:
    """ Decodes a byte-sequence, or None, with a length prefix.

    This modules's docstring has more details and examples.
    """
    data = decode_frame(deserializer, max_length=max_length).unwrap_or_propagate()
    return Ok(None if data is None else bytes(data))
