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

"""
This module implements encoding of integers with a fixed size, the size and signedness are parametrized.

The encoding format itself is a standard big-endian two's-complement format, every bit pattern of a given width maps
to exactly one value.

>>> se = Serializer.build_bytes_serializer()
>>> encode_int(se, 0, length=1)  # writes 00
>>> encode_int(se, 255, length=1, signed=False)  # writes ff
>>> encode_int(se, 1234, length=2)  # writes 04d2
>>> encode_int(se, -1234, length=2)  # writes fb2e
>>> encode_int(se, 5, length=4)  # writes 00000005
>>> bytes(se.finalize()).hex()
'00ff04d2fb2e00000005'

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('00ff04d2fb2e00000005'))
>>> decode_int(de, length=1)  # reads 00
Ok(0)
>>> decode_int(de, length=1, signed=False)  # reads ff
Ok(255)
>>> decode_int(de, length=2)  # reads 04d2
Ok(1234)
>>> decode_int(de, length=2)  # reads fb2e
Ok(-1234)
>>> decode_int(de, length=4)  # reads 00000005
Ok(5)
>>> decode_int(de, length=8).is_err()
True

>>> se = Serializer.build_bytes_serializer()
>>> try:
...     encode_int(se, 128, length=1)
... except ValueError as e:
...     print(*e.args)
128 does not fit in 1 signed bytes
"""

from flatcodec.serialization import Deserializer, SerializationError, Serializer
from flatcodec.utils.result import Ok, Result, propagate_result


def min_value(length: int, *, signed: bool = True) -> int:
    """Smallest value representable with `length` bytes.

    >>> [min_value(n) for n in (1, 2, 4, 8)]
    [-128, -32768, -2147483648, -9223372036854775808]
    """
    return -(1 << (length * 8 - 1)) if signed else 0


def max_value(length: int, *, signed: bool = True) -> int:
    """Largest value representable with `length` bytes.

    >>> [max_value(n) for n in (1, 2, 4, 8)]
    [127, 32767, 2147483647, 9223372036854775807]
    """
    return (1 << (length * 8 - (1 if signed else 0))) - 1


def encode_int(serializer: Serializer, number: int, *, length: int, signed: bool = True) -> None:
    """ Encode an int using the given byte-length and signedness.

    This modules's docstring has more details and examples.
    """
    if not isinstance(number, int) or isinstance(number, bool):
        raise TypeError(f'expected int, got {type(number).__name__}')
    try:
        data = int.to_bytes(number, length, byteorder='big', signed=signed)
    except OverflowError:
        raise ValueError(f'{number} does not fit in {length} {"signed" if signed else "unsigned"} bytes')
    serializer.write_bytes(data)


@propagate_result
def decode_int(deserializer: Deserializer, *, length: int, signed: bool = True) -> Result[int, SerializationError]:
    """ Decode an int using the given byte-length and signedness.

    This modules's docstring has more details and examples.
    """
    data = deserializer.read_bytes(length).unwrap_or_propagate()
    return Ok(int.from_bytes(data, byteorder='big', signed=signed))
