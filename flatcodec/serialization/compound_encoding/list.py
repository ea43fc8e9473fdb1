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
Byte-buffer form of a list of strings: the readable text form, with a single-character separator as `pre` and no
`post`, encoded as a length-prefixed string. A list gets the same binary envelope as a plain string.

>>> se = Serializer.build_bytes_serializer()
>>> encode_string_list(se, ['a', None, 'b|c'], '|')
>>> encoded_data = bytes(se.finalize())
>>> encoded_data
b'\x00\x00\x00\r3|1|a-1|3|b|c'

>>> de = Deserializer.build_bytes_deserializer(encoded_data)
>>> decode_string_list(de, '|')
Ok(['a', None, 'b|c'])
>>> de.finalize()
Ok(None)

>>> decode_string_list(Deserializer.build_bytes_deserializer(encoded_data), '||')
Err(InvalidArgumentError("separator must be a single character, got '||'"))
"""

from typing import Iterable, Optional

from flatcodec.conf import get_global_settings
from flatcodec.serialization import (
    BadDataError,
    Deserializer,
    InvalidArgumentError,
    SerializationError,
    Serializer,
)
from flatcodec.serialization.compound_encoding.readable_list import (
    deserialize_list_from_readable_string,
    serialize_list_to_readable_string,
)
from flatcodec.serialization.consts import USE_SETTINGS, UseSettings
from flatcodec.serialization.encoding.string import decode_string, encode_string
from flatcodec.utils.result import Err, Ok, Result, propagate_result


def resolve_separator(separator: Optional[str] | UseSettings) -> Result[str, SerializationError]:
    """ The separator to use, the `LIST_SEPARATOR` setting when not given; it must be exactly one character.
    """
    if separator is USE_SETTINGS or separator is None:
        separator = get_global_settings().LIST_SEPARATOR
    if not isinstance(separator, str) or len(separator) != 1:
        return Err(InvalidArgumentError(f'separator must be a single character, got {separator!r}'))
    return Ok(separator)


def encode_string_list(
    serializer: Serializer,
    items: Iterable[Optional[str]],
    separator: Optional[str] | UseSettings = USE_SETTINGS,
) -> None:
    """ Encodes a list of strings (and Nones) as the string of its readable form.

    Raises `InvalidArgumentError` for a bad separator, before anything is written.
    """
    pre = resolve_separator(separator).unwrap_or_raise()
    text = serialize_list_to_readable_string(items, pre).unwrap_or_raise()
    encode_string(serializer, text)


@propagate_result
def decode_string_list(
    deserializer: Deserializer,
    separator: Optional[str] | UseSettings = USE_SETTINGS,
    *,
    max_length: Optional[int] | UseSettings = USE_SETTINGS,
) -> Result[list[Optional[str]], SerializationError]:
    """ Decodes a list written with `encode_string_list`, the separator must be the same one used to encode it.
    """
    pre = resolve_separator(separator).unwrap_or_propagate()
    text = decode_string(deserializer, max_length=max_length).unwrap_or_propagate()
    if text is None:
        return Err(BadDataError('a list cannot be encoded as a null string'))
    return deserialize_list_from_readable_string(text, pre)
