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
This module implements utf-8 string encoding with a length prefix.

It works exactly like bytes-encoding but the encoded byte-sequence is utf-8 and it takes/returns a `str`. The length is
the number of utf-8 bytes, not of characters. `None` is encoded as the length `-1`.

>>> se = Serializer.build_bytes_serializer()
>>> encode_string(se, 'ab')  # writes 00000002 6162
>>> encode_string(se, 'π')  # writes 00000002 cf80
>>> encode_string(se, '')  # writes 00000000
>>> encode_string(se, None)  # writes ffffffff
>>> encoded_data = bytes(se.finalize())
>>> encoded_data.hex()
'00000002616200000002cf8000000000ffffffff'

>>> de = Deserializer.build_bytes_deserializer(encoded_data)
>>> decode_string(de)
Ok('ab')
>>> de.cur_pos()
6
>>> decode_string(de)
Ok('π')
>>> decode_string(de)
Ok('')
>>> decode_string(de)
Ok(None)
>>> de.finalize()
Ok(None)

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('00000001ff'))
>>> decode_string(de)
Err(BadDataError('string is not valid utf-8'))
"""

from typing import Optional

from flatcodec.serialization import BadDataError, Deserializer, SerializationError, Serializer
from flatcodec.serialization.consts import USE_SETTINGS, UseSettings
from flatcodec.serialization.encoding.bytes import decode_frame, encode_frame
from flatcodec.utils.result import Err, Ok, Result, propagate_result

ENCODING = 'utf-8'


def encode_string(serializer: Serializer, value: Optional[str]) -> None:
    """ Encodes a string, or None, using UTF-8 and adding a length prefix.

    This modules's docstring has more details and examples.
    """
    if value is None:
        encode_frame(serializer, None)
        return
    if not isinstance(value, str):
        raise TypeError(f'expected str, got {type(value).__name__}')
    encode_frame(serializer, value.encode(ENCODING))


@propagate_result
def decode_string(
    deserializer: Deserializer,
    *,
    max_length: Optional[int] | UseSettings = USE_SETTINGS,
) -> Result[Optional[str], SerializationError]:
    """ Decodes a UTF-8 string, or None, with a length prefix.

    This modules's docstring has more details and examples.
    """
    data = decode_frame(deserializer, max_length=max_length).unwrap_or_propagate()
    if data is None:
        return Ok(None)
    try:
        return Ok(str(data, ENCODING))
    except UnicodeDecodeError as e:
        return Err(BadDataError('string is not valid utf-8'), e)
