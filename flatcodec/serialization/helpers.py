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
One-shot helpers that run a single encoder or decoder against an in-memory buffer.

>>> from flatcodec.serialization.encoding.int import decode_int, encode_int
>>> encode_to_bytes(encode_int, 5, length=4)
b'\x00\x00\x00\x05'
>>> decode_from_bytes(decode_int, b'\x00\x00\x00\x05', length=4)
Ok(5)
>>> decode_from_bytes(decode_int, b'\x00\x00\x00\x05\x00', length=4)
Err(SerializationError('trailing data'))
"""

from typing import Any, Callable, TypeVar

from flatcodec.utils.result import Ok, Result, propagate_result

from .deserializer import Deserializer
from .exceptions import SerializationError
from .serializer import Serializer
from .types import Buffer

T = TypeVar('T')


def encode_to_bytes(encoder: Callable[..., Any], value: Any, /, *args: Any, **kwargs: Any) -> bytes:
    """Encode a single value into its own buffer, extra arguments are passed to the encoder."""
    serializer = Serializer.build_bytes_serializer()
    encoder(serializer, value, *args, **kwargs)
    return bytes(serializer.finalize())


@propagate_result
def decode_from_bytes(
    decoder: Callable[..., Result[T, SerializationError]],
    data: Buffer,
    /,
    *args: Any,
    **kwargs: Any,
) -> Result[T, SerializationError]:
    """Decode a single value that must take up the whole buffer, extra arguments are passed to the decoder."""
    deserializer = Deserializer.build_bytes_deserializer(data)
    value = decoder(deserializer, *args, **kwargs).unwrap_or_propagate()
    deserializer.finalize().unwrap_or_propagate()
    return Ok(value)
