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
This module implements length-framing of objects serialized by an external capability.

The capability is anything with `dumps(obj) -> bytes` and `loads(data) -> object`, by default the pickler in
`flatcodec.utils.pickle`. The payload is never looked into, it is written as a non-nullable 4-byte length followed by
the payload itself.

>>> se = Serializer.build_bytes_serializer()
>>> encode_object(se, {'answer': 42})
>>> encode_object(se, [1.5, None])
>>> de = Deserializer.build_bytes_deserializer(se.finalize())
>>> decode_object(de)
Ok({'answer': 42})
>>> decode_object(de)
Ok([1.5, None])
>>> de.finalize()
Ok(None)

A failure of the capability is returned as an error:

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('00000003') + b'bad')
>>> decode_object(de)
Err(ExternalCapabilityError('could not reconstruct object from 3 bytes'))
"""

from typing import Optional, Protocol

from structlog import get_logger

from flatcodec.serialization import BadDataError, Deserializer, ExternalCapabilityError, SerializationError, Serializer
from flatcodec.serialization.consts import USE_SETTINGS, UseSettings
from flatcodec.serialization.encoding.bytes import decode_frame, encode_frame
from flatcodec.utils import pickle
from flatcodec.utils.result import Err, Ok, Result, propagate_result

logger = get_logger()

# bijection between bytes and str, used for the text form of objects
TEXT_ENCODING = 'iso-8859-1'


class ObjectCodec(Protocol):
    def dumps(self, obj: object, /) -> bytes:
        ...

    def loads(self, data: bytes, /) -> object:
        ...


DEFAULT_OBJECT_CODEC: ObjectCodec = pickle


def encode_object(serializer: Serializer, obj: object, codec: ObjectCodec = DEFAULT_OBJECT_CODEC) -> None:
    """ Serialize `obj` with the capability and write it with a length prefix.
    """
    encode_frame(serializer, codec.dumps(obj))


@propagate_result
def decode_object(
    deserializer: Deserializer,
    codec: ObjectCodec = DEFAULT_OBJECT_CODEC,
    *,
    max_length: Optional[int] | UseSettings = USE_SETTINGS,
) -> Result[object, SerializationError]:
    """ Read a length-prefixed payload and hand it to the capability to rebuild the object.

    Whatever the capability raises is returned as `ExternalCapabilityError`, with the original exception as cause.
    """
    pos = deserializer.cur_pos()
    data = decode_frame(deserializer, nullable=False, max_length=max_length).unwrap_or_propagate()
    assert data is not None
    return _load(codec, bytes(data), pos=pos)


def _load(codec: ObjectCodec, data: bytes, *, pos: int) -> Result[object, SerializationError]:
    try:
        return Ok(codec.loads(data))
    except Exception as e:
        logger.new().warn('object capability failed', pos=pos, size=len(data), exc_info=True)
        return Err(ExternalCapabilityError(f'could not reconstruct object from {len(data)} bytes'), e)


def object_to_string(obj: object, codec: ObjectCodec = DEFAULT_OBJECT_CODEC) -> str:
    """ Serialize `obj` with the capability into a str, each byte becomes one character.

    >>> object_from_string(object_to_string(('a', 1)))
    Ok(('a', 1))
    """
    return codec.dumps(obj).decode(TEXT_ENCODING)


def object_from_string(text: str, codec: ObjectCodec = DEFAULT_OBJECT_CODEC) -> Result[object, SerializationError]:
    """ Inverse of `object_to_string`.
    """
    try:
        data = text.encode(TEXT_ENCODING)
    except UnicodeEncodeError as e:
        return Err(BadDataError('text has characters outside of the byte range'), e)
    return _load(codec, data, pos=0)
